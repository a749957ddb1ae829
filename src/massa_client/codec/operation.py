"""
Signable byte layout of operations.

    uvarint(fee) ++ uvarint(expire_period) ++ public_key ++ uvarint(type_id) ++ body

Transaction body:  address_payload(recipient) ++ uvarint(amount)
RollBuy/RollSell:  uvarint(amount)
"""

from __future__ import annotations
from enum import IntEnum
from typing import Union

from ..keys.account import Account
from ..types import RollsData, TransactionData
from .keys import address_payload, base58_decode
from .writer import BinaryWriter


class OperationType(IntEnum):
    TRANSACTION = 0
    ROLL_BUY = 1
    ROLL_SELL = 2
    EXECUTE_SC = 3
    CALL_SC = 4


def compact_bytes_for_operation(
    data: Union[TransactionData, RollsData],
    op_type: OperationType,
    account: Account,
    expire_period: int,
) -> bytes:
    """
    Serialize an operation's content for hashing and signing.

    Args:
        data: Operation body
        op_type: Operation type id
        account: Creator; its public key is part of the signed content
        expire_period: Last period at which the operation may be included

    Returns:
        Deterministic byte string

    Raises:
        ValueError: For smart-contract operation types or a body of the wrong type
    """
    writer = BinaryWriter()
    writer.uvarint(data.fee)
    writer.uvarint(expire_period)
    writer.bytes(base58_decode(account.public_key))
    writer.uvarint(int(op_type))

    if op_type == OperationType.TRANSACTION:
        if not isinstance(data, TransactionData):
            raise ValueError("Transaction operations require TransactionData")
        writer.bytes(address_payload(data.recipient_address))
        writer.uvarint(data.amount)
    elif op_type in (OperationType.ROLL_BUY, OperationType.ROLL_SELL):
        writer.uvarint(data.amount)
    else:
        raise ValueError(f"Unsupported operation type for serialization: {op_type.name}")

    return writer.to_bytes()


__all__ = [
    "OperationType",
    "compact_bytes_for_operation",
]
