"""Runtime helpers for the Massa Python client"""

from .errors import ErrorCode, MassaError

__all__ = [
    "ErrorCode",
    "MassaError",
]
