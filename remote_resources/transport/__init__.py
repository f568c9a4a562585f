"""
Transports: the network collaborators of the resource client.
"""

from .base import Transport, parse_query
from .http import HTTPTransport
from .memory import MemoryTransport, TransportCall

__all__ = [
    "Transport",
    "parse_query",
    "HTTPTransport",
    "MemoryTransport",
    "TransportCall",
]
