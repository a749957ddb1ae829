"""
Operation lifecycle tracking for Massa.
"""

from .status import (
    OperationStatus,
    ConfirmationConfig,
    PollState,
    classify,
    OperationStatusTracker,
)

__all__ = [
    "OperationStatus",
    "ConfirmationConfig",
    "PollState",
    "classify",
    "OperationStatusTracker",
]
