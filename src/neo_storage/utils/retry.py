"""Bounded retry combinator with exponential backoff.

Used by the existence checker to tolerate eventually-consistent object
stores. Bounds and timing live in ``RetryPolicy`` so they can be tested
without touching storage.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class RetryPolicy:
    """Configuration for bounded retry behavior."""
    
    max_attempts: int = 3
    initial_delay_ms: int = 100
    backoff_multiplier: float = 2.0
    max_delay_ms: int = 60000
    
    def __post_init__(self):
        """Validate retry policy parameters."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.initial_delay_ms < 0:
            raise ValueError("initial_delay_ms must be non-negative")
        if self.backoff_multiplier < 1:
            raise ValueError("backoff_multiplier must be >= 1")
        if self.max_delay_ms < self.initial_delay_ms:
            raise ValueError("max_delay_ms must be >= initial_delay_ms")
    
    def calculate_delay(self, attempt: int) -> int:
        """
        Calculate the wait after a failed attempt.
        
        Args:
            attempt: Attempt number that just failed (1-based)
            
        Returns:
            Delay in milliseconds
        """
        if attempt <= 0:
            return 0
        
        delay = self.initial_delay_ms * (self.backoff_multiplier ** (attempt - 1))
        return int(min(delay, self.max_delay_ms))
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RetryPolicy":
        """Create retry policy from dictionary."""
        return cls(
            max_attempts=data.get("max_attempts", 3),
            initial_delay_ms=data.get("initial_delay_ms", 100),
            backoff_multiplier=data.get("backoff_multiplier", 2.0),
            max_delay_ms=data.get("max_delay_ms", 60000),
        )
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert retry policy to dictionary."""
        return {
            "max_attempts": self.max_attempts,
            "initial_delay_ms": self.initial_delay_ms,
            "backoff_multiplier": self.backoff_multiplier,
            "max_delay_ms": self.max_delay_ms,
        }


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    policy: Optional[RetryPolicy] = None,
    should_retry: Optional[Callable[[T], bool]] = None,
    sleep: SleepFunc = asyncio.sleep,
    operation_name: str = "operation",
) -> T:
    """Run ``operation`` until it succeeds or the policy is exhausted.
    
    A raised exception, or a result for which ``should_retry`` returns True,
    on a non-final attempt triggers a wait and another attempt. The final
    attempt's outcome is returned (or raised) as-is, without waiting.
    
    Args:
        operation: Zero-argument coroutine factory
        policy: Retry bounds, defaults to ``RetryPolicy()``
        should_retry: Predicate marking a successful result as retryable
        sleep: Awaitable sleep taking seconds, injectable for tests
        operation_name: Label used in debug logs
        
    Returns:
        Result of the last attempt
    """
    policy = policy or RetryPolicy()
    
    for attempt in range(1, policy.max_attempts + 1):
        is_final = attempt == policy.max_attempts
        try:
            result = await operation()
        except Exception as e:
            if is_final:
                raise
            logger.debug(f"{operation_name} attempt {attempt} failed: {e}")
        else:
            if is_final or should_retry is None or not should_retry(result):
                return result
            logger.debug(f"{operation_name} attempt {attempt} returned retryable result")
        
        await sleep(policy.calculate_delay(attempt) / 1000)
    
    # max_attempts >= 1 guarantees the loop returns or raises
    raise RuntimeError(f"{operation_name} exhausted retries without a result")
