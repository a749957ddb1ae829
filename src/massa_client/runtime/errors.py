"""
Massa Error Model

This module provides the error handling framework for the Massa Python client.
Every error raised by the library derives from MassaError and carries a stable
ErrorCode, optional structured details and the underlying cause.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Error codes used across the client."""

    # Success
    OK = 0

    # General errors (1-99)
    UNKNOWN = 1
    INTERNAL = 2
    CONFIGURATION = 3

    # Encoding errors (100-199)
    ENCODING_ERROR = 100
    INVALID_BASE58 = 101
    INVALID_KEY = 102

    # Network errors (200-299)
    NETWORK_ERROR = 200
    JSON_RPC_ERROR = 201
    INCOMPLETE_RESPONSE = 202

    # Key material errors (300-399)
    KEY_MISMATCH = 300
    MISSING_KEY_MATERIAL = 301
    KEYSTORE_ERROR = 302

    # Wallet errors (400-499)
    TOO_MANY_ACCOUNTS = 400
    UNKNOWN_SIGNER = 401
    NO_SENDER = 402

    # Signing errors (500-599)
    INVALID_SIGNATURE_LENGTH = 500
    SIGNATURE_VERIFICATION_FAILED = 501

    # Confirmation errors (600-699)
    CONFIRMATION_LOOKUP_FAILED = 600
    CONFIRMATION_TIMEOUT = 601


class MassaError(Exception):
    """
    Base class for all Massa client errors.

    Provides structured error information: a code, a message, optional
    details and the exception that caused it.
    """

    default_code = ErrorCode.UNKNOWN

    def __init__(self, message: str, code: Optional[ErrorCode] = None,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[BaseException] = None):
        """
        Initialize a Massa error.

        Args:
            message: Error message
            code: Error code (defaults to the class default)
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause!r}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result


# Validation errors: surfaced immediately, never retried

class DecodeError(MassaError):
    """Malformed textual key, address or signature encoding."""

    default_code = ErrorCode.INVALID_BASE58


class MismatchError(MassaError):
    """Supplied public key or address disagrees with the derived value."""

    default_code = ErrorCode.KEY_MISMATCH


class MissingKeyMaterialError(MassaError):
    """Private key (or entropy) absent where it is required."""

    default_code = ErrorCode.MISSING_KEY_MATERIAL


class TooManyAccountsError(MassaError):
    """Batch of accounts larger than the wallet cap."""

    default_code = ErrorCode.TOO_MANY_ACCOUNTS


class UnknownSignerError(MassaError):
    """Signing requested for an address that is not in the wallet."""

    default_code = ErrorCode.UNKNOWN_SIGNER


class NoSenderError(MassaError):
    """No executor given and no base account set."""

    default_code = ErrorCode.NO_SENDER


# Signing integrity errors: always fatal

class SigningError(MassaError):
    """Signing backend produced an unusable signature."""

    default_code = ErrorCode.INTERNAL


class InvalidSignatureLengthError(SigningError):
    """Signature is not exactly 64 bytes."""

    default_code = ErrorCode.INVALID_SIGNATURE_LENGTH


class SignatureVerificationError(SigningError):
    """Freshly produced signature does not verify against the account's public key."""

    default_code = ErrorCode.SIGNATURE_VERIFICATION_FAILED


# Remote errors

class NetworkError(MassaError):
    """Transport level failure (connection, timeout, HTTP status)."""

    default_code = ErrorCode.NETWORK_ERROR


class JsonRpcError(MassaError):
    """The node answered with a JSON-RPC error object."""

    default_code = ErrorCode.JSON_RPC_ERROR

    def __init__(self, message: str, rpc_code: Optional[int] = None, data: Any = None,
                 cause: Optional[BaseException] = None):
        details = {}
        if rpc_code is not None:
            details["rpc_code"] = rpc_code
        if data is not None:
            details["data"] = data
        super().__init__(message, details=details, cause=cause)
        self.rpc_code = rpc_code
        self.data = data


class IncompleteResponseError(MassaError):
    """Batch response does not contain exactly one entry per requested item."""

    default_code = ErrorCode.INCOMPLETE_RESPONSE


class ConfirmationLookupFailedError(MassaError):
    """Operation status lookups kept failing past the error budget."""

    default_code = ErrorCode.CONFIRMATION_LOOKUP_FAILED


class ConfirmationTimeoutError(MassaError):
    """Operation did not reach the requested status within the polling budget."""

    default_code = ErrorCode.CONFIRMATION_TIMEOUT


class KeystoreError(MassaError):
    """Encrypted keystore could not be read or written."""

    default_code = ErrorCode.KEYSTORE_ERROR


__all__ = [
    "ErrorCode",
    "MassaError",
    "DecodeError",
    "MismatchError",
    "MissingKeyMaterialError",
    "TooManyAccountsError",
    "UnknownSignerError",
    "NoSenderError",
    "SigningError",
    "InvalidSignatureLengthError",
    "SignatureVerificationError",
    "NetworkError",
    "JsonRpcError",
    "IncompleteResponseError",
    "ConfirmationLookupFailedError",
    "ConfirmationTimeoutError",
    "KeystoreError",
]
