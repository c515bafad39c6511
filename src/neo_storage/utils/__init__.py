"""Shared utilities for neo-storage."""

from .retry import RetryPolicy, retry_async

__all__ = ["RetryPolicy", "retry_async"]
