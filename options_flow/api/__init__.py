"""HTTP surface for the options flow analytics."""
