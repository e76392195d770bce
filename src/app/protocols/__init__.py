"""Protocolos e contratos do core da aplicação."""

from .dedupe import AsyncDedupeProtocol
from .transport import TransportProtocol
from .update_handler import UpdateHandlerProtocol

__all__ = [
    "AsyncDedupeProtocol",
    "TransportProtocol",
    "UpdateHandlerProtocol",
]
