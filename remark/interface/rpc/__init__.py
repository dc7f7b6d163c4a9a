"""Broker RPC façade."""

from .handler import ROUTING_KEYS, CommentRpcHandler, RpcError, RpcResponse
from .server import RpcServer

__all__ = [
    "ROUTING_KEYS",
    "CommentRpcHandler",
    "RpcError",
    "RpcResponse",
    "RpcServer",
]
