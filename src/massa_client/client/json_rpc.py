"""
JSON-RPC transport for a Massa node.

A single JSON-RPC 2.0 POST per call over a shared requests session.
"""

from __future__ import annotations
import itertools
import json
import logging
from enum import Enum
from typing import Any, Optional, Union

import requests

from ..runtime.errors import JsonRpcError, NetworkError
from .config import ClientConfig

logger = logging.getLogger(__name__)


class JsonRpcMethod(str, Enum):
    """Node methods used by the client."""
    GET_STATUS = "get_status"
    GET_ADDRESSES = "get_addresses"
    GET_OPERATIONS = "get_operations"
    SEND_OPERATIONS = "send_operations"


class JsonRpcClient:
    """
    Minimal JSON-RPC client.

    Example:
        >>> with JsonRpcClient("https://buildnet.massa.net/api/v2") as rpc:
        ...     status = rpc.call(JsonRpcMethod.GET_STATUS)
    """

    def __init__(self, config: Union[str, ClientConfig], session: Optional[requests.Session] = None):
        """
        Initialize the JSON-RPC client.

        Args:
            config: Either a provider URL string or a ClientConfig object
            session: Optional pre-configured requests session
        """
        if isinstance(config, str):
            self.config = ClientConfig(provider_url=config)
        else:
            self.config = config

        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
            # One request per lookup; no pooled keep-alive connections
            "Connection": "close",
        })
        self._ids = itertools.count(1)

    def call(self, method: Union[JsonRpcMethod, str], params: Any = None) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name
            params: Positional parameters (list) or None

        Returns:
            The `result` member of the response

        Raises:
            NetworkError: On connection failures, timeouts, HTTP errors or an undecodable body
            JsonRpcError: If the node returns an error object
        """
        method_name = method.value if isinstance(method, JsonRpcMethod) else method
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method_name,
            "params": params if params is not None else [],
        }

        if self.config.debug:
            logger.debug(f"Request: {method_name} -> {json.dumps(payload)}")

        try:
            response = self.session.post(
                self.config.provider_url,
                json=payload,
                timeout=self.config.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Network error calling {method_name}: {e}", cause=e) from e
        except ValueError as e:
            raise NetworkError(f"Invalid JSON response for {method_name}", cause=e) from e

        if self.config.debug:
            logger.debug(f"Response: {method_name} -> {json.dumps(body)}")

        if not isinstance(body, dict):
            raise NetworkError(f"Unexpected response for {method_name}: {body!r}")

        if body.get("error") is not None:
            error = body["error"]
            if isinstance(error, dict):
                message = error.get("message", str(error))
                code = error.get("code")
                data = error.get("data")
            else:
                message = str(error)
                code = None
                data = None
            raise JsonRpcError(f"JSON-RPC Error: {message}", rpc_code=code, data=data)

        return body.get("result")

    def close(self) -> None:
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self) -> "JsonRpcClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = [
    "JsonRpcMethod",
    "JsonRpcClient",
]
