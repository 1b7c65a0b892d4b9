from .update import InboundUpdate, TelegramChat, TelegramMessage
from .value_objects import HandlerOutcome, ProbeOutcome, ProbeResult, PublicEndpoint

__all__ = [
    "InboundUpdate",
    "TelegramChat",
    "TelegramMessage",
    "HandlerOutcome",
    "ProbeOutcome",
    "ProbeResult",
    "PublicEndpoint",
]
