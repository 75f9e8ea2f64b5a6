"""Serialization helpers shared between the API and the CLI."""

from __future__ import annotations

from typing import Any, Dict

from .flow import ErrorResponse, FlowReport, FlowResponse


def serialize_flow_report(report: FlowReport) -> Dict[str, Any]:
    """Return a JSON-compatible representation of a flow report using wire names."""

    return report.model_dump(mode="json", by_alias=True)


def serialize_flow_response(report: FlowReport) -> Dict[str, Any]:
    """Wrap a report in the ``{"data": ...}`` envelope."""

    return FlowResponse(data=report).model_dump(mode="json", by_alias=True)


def serialize_error(message: str) -> Dict[str, Any]:
    return ErrorResponse(error=message).model_dump()


__all__ = [
    "serialize_error",
    "serialize_flow_report",
    "serialize_flow_response",
]
