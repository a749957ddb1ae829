"""
Node clients: configuration, JSON-RPC transport, public API and wallet client.
"""

from .config import ClientConfig
from .json_rpc import JsonRpcClient, JsonRpcMethod
from .public_api import PublicApiClient
from .wallet_client import WalletClient

__all__ = [
    "ClientConfig",
    "JsonRpcClient",
    "JsonRpcMethod",
    "PublicApiClient",
    "WalletClient",
]
