"""
Typed records exchanged with a Massa node.

Only the fields the client reads are declared; everything else the node
returns is preserved as extra data.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class OperationRecord(BaseModel):
    """Inclusion and finality state of one operation, as reported by get_operations."""
    id: Optional[str] = None
    is_final: bool = False
    in_blocks: List[str] = Field(default_factory=list)
    in_pool: bool = False

    model_config = {"extra": "ignore"}


class AddressInfo(BaseModel):
    """Ledger information of an address, as reported by get_addresses."""
    address: str

    model_config = {"extra": "allow"}

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class FullAccountView(AddressInfo):
    """Address information merged with the wallet's local key material."""
    public_key: str = Field(alias="publicKey")
    private_key: Optional[str] = Field(default=None, alias="privateKey")
    random_entropy: Optional[str] = Field(default=None, alias="randomEntropy")

    model_config = {"extra": "allow", "populate_by_name": True}


class Slot(BaseModel):
    period: int
    thread: int = 0


class NodeStatus(BaseModel):
    """Subset of get_status used to compute operation expiry."""
    next_slot: Slot

    model_config = {"extra": "allow"}


class TransactionData(BaseModel):
    """Native coin transfer."""
    fee: int = Field(ge=0)
    amount: int = Field(ge=0)
    recipient_address: str = Field(alias="recipientAddress")

    model_config = {"populate_by_name": True}


class RollsData(BaseModel):
    """Roll purchase or sale."""
    fee: int = Field(ge=0)
    amount: int = Field(ge=0)

    model_config = {"populate_by_name": True}


__all__ = [
    "OperationRecord",
    "AddressInfo",
    "FullAccountView",
    "Slot",
    "NodeStatus",
    "TransactionData",
    "RollsData",
]
