"""Transport clients for remote tool servers."""

from .base import TransportClient
from .jsonrpc import JsonRpcTransport
from .protocol import JSONRPCMessage, extract_event_stream_payload, extract_json_payload
from .registry import TRANSPORT_CLASSES, TransportRegistry, create_transport
from .rest import RestTransport

__all__ = [
    "TransportClient",
    "JsonRpcTransport",
    "RestTransport",
    "TransportRegistry",
    "TRANSPORT_CLASSES",
    "create_transport",
    "JSONRPCMessage",
    "extract_event_stream_payload",
    "extract_json_payload",
]
