"""
Signing infrastructure for Massa operations.
"""

from .engine import SIGNATURE_LENGTH, Signature, SigningEngine

__all__ = [
    "SIGNATURE_LENGTH",
    "Signature",
    "SigningEngine",
]
