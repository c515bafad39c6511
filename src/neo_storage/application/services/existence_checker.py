"""Existence checker service.

ONLY existence checks - object-store existence probes wrapped in the
bounded retry policy.

Following maximum separation architecture - one file = one purpose.
"""

import asyncio
import logging
from typing import Optional

from ...core.protocols.object_store import ObjectStore
from ...utils.retry import RetryPolicy, SleepFunc, retry_async

logger = logging.getLogger(__name__)


class ExistenceChecker:
    """Existence probe tolerant of eventually consistent stores.
    
    A "not found" result or an error on a non-final attempt is retried after
    the policy's delay. The final attempt's result is returned, and its
    error raised, as-is.
    """
    
    def __init__(
        self,
        object_store: ObjectStore,
        policy: Optional[RetryPolicy] = None,
        sleep: SleepFunc = asyncio.sleep
    ):
        self._object_store = object_store
        self._policy = policy or RetryPolicy()
        self._sleep = sleep
    
    async def exists(self, path: str, bucket: Optional[str] = None) -> bool:
        """Check whether ``path`` exists.
        
        Args:
            path: Storage key, leading slash optional
            bucket: Bucket to query, defaults to the store's bucket
        """
        key = path.lstrip('/')
        return await retry_async(
            lambda: self._object_store.exists(key, bucket),
            policy=self._policy,
            should_retry=lambda found: not found,
            sleep=self._sleep,
            operation_name=f"exists({key})",
        )
    
