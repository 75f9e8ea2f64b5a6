"""Core Python package for options flow analytics."""
