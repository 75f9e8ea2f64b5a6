from .flow import (
    ErrorResponse,
    FlowReport,
    FlowRequest,
    FlowResponse,
    FlowSummary,
    KeyLevels,
    NotableTrade,
    Sentiment,
    TradeType,
)
from .option import ChainSnapshot, Expiration, OptionContract
from .serialization import (
    serialize_error,
    serialize_flow_report,
    serialize_flow_response,
)

__all__ = [
    "ChainSnapshot",
    "ErrorResponse",
    "Expiration",
    "FlowReport",
    "FlowRequest",
    "FlowResponse",
    "FlowSummary",
    "KeyLevels",
    "NotableTrade",
    "OptionContract",
    "Sentiment",
    "TradeType",
    "serialize_error",
    "serialize_flow_report",
    "serialize_flow_response",
]
