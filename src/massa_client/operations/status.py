"""
Operation confirmation tracking.

Classifies the node's view of an operation into a lifecycle status and
polls until a requested status is reached. Polling has two independent
budgets that both persist for the whole call:

- lookup failures (exceptions raised by the fetcher), and
- pending iterations (successful lookups that did not reach the target).

Every iteration sleeps for the poll interval before the next attempt,
including after a failed lookup.
"""

from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Awaitable, Callable, List, Mapping, Optional, Sequence, Union

from ..runtime.errors import ConfirmationLookupFailedError, ConfirmationTimeoutError
from ..types import OperationRecord

logger = logging.getLogger(__name__)

TX_POLL_INTERVAL = 10.0
TX_STATUS_CHECK_RETRY_COUNT = 100
TX_STATUS_PENDING_RETRY_COUNT = 1000

OperationFetcher = Callable[[List[str]], Awaitable[Sequence[Union[OperationRecord, Mapping[str, Any]]]]]


class OperationStatus(IntEnum):
    """Lifecycle of a submitted operation."""
    NOT_FOUND = 0
    AWAITING_INCLUSION = 1
    INCLUDED_PENDING = 2
    FINAL = 3
    INCONSISTENT = 4


@dataclass
class ConfirmationConfig:
    """Polling interval (seconds) and retry budgets."""

    poll_interval: float = TX_POLL_INTERVAL
    max_error_retries: int = TX_STATUS_CHECK_RETRY_COUNT
    max_pending_iterations: int = TX_STATUS_PENDING_RETRY_COUNT

    @property
    def pending_budget_seconds(self) -> float:
        return self.poll_interval * self.max_pending_iterations


@dataclass
class PollState:
    """Progress of one await_status call."""

    attempt: int = 0
    error_count: int = 0
    last_status: Optional[OperationStatus] = None
    last_error: Optional[BaseException] = None


def classify(records: Optional[Sequence[Union[OperationRecord, Mapping[str, Any]]]]) -> OperationStatus:
    """
    Classify the first operation record returned by the node.

    Priority: final, then included in a block, then in the pool. A record
    matching none of these is INCONSISTENT; no record at all is NOT_FOUND.
    """
    if not records:
        return OperationStatus.NOT_FOUND

    record = records[0]
    if not isinstance(record, OperationRecord):
        record = OperationRecord.model_validate(record)

    if record.is_final:
        return OperationStatus.FINAL
    if len(record.in_blocks) > 0:
        return OperationStatus.INCLUDED_PENDING
    if record.in_pool:
        return OperationStatus.AWAITING_INCLUSION
    return OperationStatus.INCONSISTENT


class OperationStatusTracker:
    """
    Polls an operation until it reaches a requested status.

    Example:
        >>> tracker = OperationStatusTracker(public_api.get_operations)
        >>> await tracker.await_status(op_id, OperationStatus.FINAL)
    """

    def __init__(
        self,
        fetch_operations: OperationFetcher,
        config: Optional[ConfirmationConfig] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        """
        Initialize tracker.

        Args:
            fetch_operations: Async lookup returning the records for a list of ids
            config: Poll interval and budgets, defaults match the network client
            sleep: Awaitable delay, replaceable in tests
        """
        self.fetch_operations = fetch_operations
        self.config = config or ConfirmationConfig()
        self._sleep = sleep

    async def get_status(self, operation_id: str) -> OperationStatus:
        """Fetch and classify the current status of an operation."""
        records = await self.fetch_operations([operation_id])
        return classify(records)

    async def await_status(
        self,
        operation_id: str,
        target: OperationStatus,
        cancel_event: Optional[asyncio.Event] = None,
        state: Optional[PollState] = None,
    ) -> OperationStatus:
        """
        Poll until the operation reaches target.

        Args:
            operation_id: Operation to watch
            target: Status to wait for
            cancel_event: Stops the loop with CancelledError once set
            state: Optional PollState to observe progress; a fresh one is used otherwise

        Returns:
            The target status

        Raises:
            ConfirmationLookupFailedError: More than max_error_retries lookups failed
            ConfirmationTimeoutError: More than max_pending_iterations lookups missed target
            asyncio.CancelledError: Task cancelled or cancel_event set
        """
        cfg = self.config
        state = state if state is not None else PollState()

        while True:
            self._check_cancelled(cancel_event, operation_id)

            try:
                status = await self.get_status(operation_id)
            except Exception as e:
                state.error_count += 1
                state.last_error = e
                if state.error_count > cfg.max_error_retries:
                    msg = (f"Failed to retrieve the operation status after {state.error_count} "
                           f"failed attempts for operation id: {operation_id}")
                    logger.error(f"{msg}: {e!r}")
                    raise ConfirmationLookupFailedError(
                        msg,
                        details={"operation_id": operation_id, "errors": state.error_count},
                        cause=e
                    ) from e
                logger.warning(
                    f"Status lookup for {operation_id} failed ({state.error_count}/{cfg.max_error_retries}): {e}"
                )
            else:
                state.last_status = status
                if status == target:
                    logger.info(f"Operation {operation_id} reached {status.name}")
                    return status

                state.attempt += 1
                if state.attempt > cfg.max_pending_iterations:
                    msg = (f"Getting the status for operation id {operation_id} took too long to conclude. "
                           f"We gave up after {cfg.pending_budget_seconds:g}s.")
                    logger.warning(msg)
                    raise ConfirmationTimeoutError(
                        msg,
                        details={
                            "operation_id": operation_id,
                            "last_status": status.name,
                            "iterations": state.attempt,
                        }
                    )

            await self._sleep(cfg.poll_interval)
            self._check_cancelled(cancel_event, operation_id)

    def watch(
        self,
        operation_id: str,
        target: OperationStatus,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> asyncio.Task:
        """Schedule await_status as a task on the running loop."""
        return asyncio.create_task(
            self.await_status(operation_id, target, cancel_event=cancel_event),
            name=f"await-status-{operation_id}",
        )

    @staticmethod
    def _check_cancelled(cancel_event: Optional[asyncio.Event], operation_id: str) -> None:
        if cancel_event is not None and cancel_event.is_set():
            logger.debug(f"Stopped polling operation {operation_id}")
            raise asyncio.CancelledError(f"Polling cancelled for operation {operation_id}")


__all__ = [
    "TX_POLL_INTERVAL",
    "TX_STATUS_CHECK_RETRY_COUNT",
    "TX_STATUS_PENDING_RETRY_COUNT",
    "OperationFetcher",
    "OperationStatus",
    "ConfirmationConfig",
    "PollState",
    "classify",
    "OperationStatusTracker",
]
