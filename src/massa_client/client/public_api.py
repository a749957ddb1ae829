"""
Public API lookups against a Massa node.

Blocking JSON-RPC calls run in a worker thread so the lookups can be awaited
by the wallet and the operation status tracker.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from ..recovery.retry import FixedBackoff, RetryPolicy
from ..runtime.errors import NetworkError
from ..types import AddressInfo, NodeStatus, OperationRecord
from .config import ClientConfig
from .json_rpc import JsonRpcClient, JsonRpcMethod

logger = logging.getLogger(__name__)


class PublicApiClient:
    """Async facade over the node's public JSON-RPC methods."""

    def __init__(
        self,
        config: Union[str, ClientConfig],
        rpc: Optional[JsonRpcClient] = None,
        retry_policy: Optional[RetryPolicy] = None,
    ):
        """
        Initialize the public API client.

        Args:
            config: Either a provider URL string or a ClientConfig object
            rpc: Transport to use; one is built from config otherwise
            retry_policy: Policy for retryable lookups. When given it is always used;
                otherwise a FixedBackoff is built from config if retry_strategy_on is set
        """
        self.config = ClientConfig(provider_url=config) if isinstance(config, str) else config
        self.rpc = rpc or JsonRpcClient(self.config)

        if retry_policy is None and self.config.retry_strategy_on:
            retry_policy = FixedBackoff(
                max_attempts=self.config.max_retries,
                base_delay=self.config.retry_delay,
                retryable_exceptions=(NetworkError,),
            )
        self.retry_policy = retry_policy

    async def _call(self, method: JsonRpcMethod, params: List[Any], retry: bool = True) -> Any:
        if retry and self.retry_policy is not None:
            return await self.retry_policy.execute(asyncio.to_thread, self.rpc.call, method, params)
        return await asyncio.to_thread(self.rpc.call, method, params)

    async def get_node_status(self) -> NodeStatus:
        """Get the node status (used for the next slot period)."""
        result = await self._call(JsonRpcMethod.GET_STATUS, [])
        return NodeStatus.model_validate(result)

    async def get_addresses(self, addresses: Sequence[str]) -> List[AddressInfo]:
        """Get ledger information for a list of addresses."""
        result = await self._call(JsonRpcMethod.GET_ADDRESSES, [list(addresses)])
        return [AddressInfo.model_validate(item) for item in result or []]

    async def get_operations(self, operation_ids: Sequence[str]) -> List[OperationRecord]:
        """Get inclusion and finality records for a list of operation ids."""
        result = await self._call(JsonRpcMethod.GET_OPERATIONS, [list(operation_ids)])
        return [OperationRecord.model_validate(item) for item in result or []]

    async def send_operations(self, operations: Sequence[Dict[str, Any]]) -> List[str]:
        """
        Submit signed operations and return their ids.

        Submission is never retried; a failed send surfaces to the caller.
        """
        result = await self._call(JsonRpcMethod.SEND_OPERATIONS, [list(operations)], retry=False)
        logger.debug(f"Submitted {len(operations)} operation(s)")
        return list(result or [])

    def close(self) -> None:
        self.rpc.close()


__all__ = ["PublicApiClient"]
