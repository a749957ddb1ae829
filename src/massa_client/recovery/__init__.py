"""
Error recovery components for the Massa client.

Provides the retry policy wrapped around remote calls.
"""

from .retry import RetryPolicy, FixedBackoff

__all__ = [
    "RetryPolicy",
    "FixedBackoff",
]
