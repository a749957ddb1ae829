#!/usr/bin/env python3
"""
Example: send coins from a wallet account and wait for finality.

Steps:
1. Load the base account from a private key
2. Show the wallet info reported by the node
3. Send a transaction and poll until it is final

Requirements:
- MASSA_PROVIDER_URL pointing at a node's public JSON-RPC API
- MASSA_PRIVATE_KEY holding a funded account's base58 private key
"""

import asyncio
import logging
import os
import sys

from massa_client import (
    ClientConfig,
    ConfirmationTimeoutError,
    MassaError,
    OperationStatus,
    TransactionData,
    WalletClient,
    generate_account,
)


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main() -> int:
    private_key = os.environ.get("MASSA_PRIVATE_KEY")
    if not private_key:
        logger.error("MASSA_PRIVATE_KEY is not set")
        return 1

    config = ClientConfig.from_env()
    with WalletClient(config) as client:
        base = client.wallet.set_base_account({"private_key": private_key})
        logger.info(f"Base account: {base.address}")

        for info in await client.wallet.wallet_info():
            logger.info(f"Wallet info: {info.model_dump(exclude={'private_key', 'random_entropy'})}")

        recipient = generate_account()
        tx = TransactionData(fee=0, amount=1_000_000, recipient_address=recipient.address)

        op_ids = await client.send_transaction(tx)
        logger.info(f"Submitted operation(s): {op_ids}")

        try:
            status = await client.tracker().await_status(op_ids[0], OperationStatus.FINAL)
        except ConfirmationTimeoutError as e:
            logger.error(f"Operation not final yet: {e}")
            return 2

        logger.info(f"Operation {op_ids[0]} is {status.name}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except MassaError as e:
        logger.error(f"Failed: {e}")
        sys.exit(1)
