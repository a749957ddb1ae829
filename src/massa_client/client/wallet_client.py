"""
Wallet client: builds, signs and submits wallet operations.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Union

from ..codec.operation import OperationType, compact_bytes_for_operation
from ..keys.account import Account
from ..keys.wallet import Wallet
from ..operations.status import ConfirmationConfig, OperationStatusTracker
from ..runtime.errors import NoSenderError
from ..types import RollsData, TransactionData
from .config import ClientConfig
from .public_api import PublicApiClient

logger = logging.getLogger(__name__)


class WalletClient:
    """
    Wallet bound to a node.

    The wallet's wallet_info lookups go through the public API client.
    Operations are signed by the executor when given, otherwise by the
    wallet's base account.
    """

    def __init__(
        self,
        config: Union[str, ClientConfig],
        public_api: Optional[PublicApiClient] = None,
        base_account: Optional[Account] = None,
    ):
        self.config = ClientConfig(provider_url=config) if isinstance(config, str) else config
        self.public_api = public_api or PublicApiClient(self.config)
        self.wallet = Wallet(base_account, address_info_fetcher=self.public_api.get_addresses)

    def _resolve_sender(self, executor: Optional[Account]) -> Account:
        sender = executor or self.wallet.base_account
        if sender is None:
            raise NoSenderError("No tx sender available")
        return sender

    async def _expire_period(self) -> int:
        status = await self.public_api.get_node_status()
        return status.next_slot.period + self.config.period_offset

    async def _submit(
        self,
        data: Union[TransactionData, RollsData],
        op_type: OperationType,
        op: Dict[str, Any],
        executor: Optional[Account],
    ) -> List[str]:
        sender = self._resolve_sender(executor)
        expire_period = await self._expire_period()

        compact = compact_bytes_for_operation(data, op_type, sender, expire_period)
        signature = self.wallet.signing_engine.sign(compact, sender)

        operation = {
            "content": {
                "expire_period": expire_period,
                "fee": str(data.fee),
                "op": op,
                "creator_public_key": sender.public_key,
            },
            "signature": signature.base58_encoded,
        }
        logger.info(f"Sending {op_type.name} from {sender.address} (expire period {expire_period})")
        return await self.public_api.send_operations([operation])

    async def send_transaction(self, tx: TransactionData, executor: Optional[Account] = None) -> List[str]:
        """
        Send native coins to another address.

        Args:
            tx: Fee, amount and recipient
            executor: Signing account; defaults to the wallet's base account

        Returns:
            Operation ids

        Raises:
            NoSenderError: If there is no executor and no base account
        """
        op = {
            "Transaction": {
                "amount": str(tx.amount),
                "recipient_address": tx.recipient_address,
            }
        }
        return await self._submit(tx, OperationType.TRANSACTION, op, executor)

    async def buy_rolls(self, data: RollsData, executor: Optional[Account] = None) -> List[str]:
        """Buy rolls with a wallet address."""
        op = {"RollBuy": {"roll_count": data.amount}}
        return await self._submit(data, OperationType.ROLL_BUY, op, executor)

    async def sell_rolls(self, data: RollsData, executor: Optional[Account] = None) -> List[str]:
        """Sell rolls with a wallet address."""
        op = {"RollSell": {"roll_count": data.amount}}
        return await self._submit(data, OperationType.ROLL_SELL, op, executor)

    def tracker(self, config: Optional[ConfirmationConfig] = None) -> OperationStatusTracker:
        """Operation status tracker bound to this client's node."""
        return OperationStatusTracker(self.public_api.get_operations, config)

    def close(self) -> None:
        self.public_api.close()

    def __enter__(self) -> "WalletClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["WalletClient"]
