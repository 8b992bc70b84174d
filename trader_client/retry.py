"""
Trader Client - Retry Engine.

============================================================
PURPOSE
============================================================
Re-invokes failed read/query operations after a fixed delay.

RETRY POLICY:
- One timer per failure, scheduled on the event loop
- Constant delay between attempts (no backoff)
- No maximum retry count
- No cancellation once scheduled

A failed call is captured as a PendingCall: a tag naming the
operation plus its original arguments, the completion
handler included as a plain value.

============================================================
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Set

from .config import RetryConfig
from .types import Callback


logger = logging.getLogger(__name__)


# ============================================================
# RETRYABLE OPERATIONS
# ============================================================

class RetryableOperation(Enum):
    """Operations eligible for automatic retry."""
    
    GET_TRADES = "get_trades"
    GET_PORTFOLIO = "get_portfolio"
    GET_FEE = "get_fee"
    CHECK_ORDER = "check_order"
    GET_TICKER = "get_ticker"


# Arguments carried by each operation, in call order
_PAYLOAD_FIELDS = {
    RetryableOperation.GET_TRADES: ("since", "callback", "descending"),
    RetryableOperation.GET_PORTFOLIO: ("callback",),
    RetryableOperation.GET_FEE: ("callback",),
    RetryableOperation.CHECK_ORDER: ("order", "callback"),
    RetryableOperation.GET_TICKER: ("callback",),
}


@dataclass(frozen=True)
class PendingCall:
    """A failed call waiting to be re-invoked."""
    
    operation: RetryableOperation
    """Which trader operation to re-invoke."""
    
    callback: Callback
    """Caller's completion handler."""
    
    since: Optional[int] = None
    """Trade history lower bound (microseconds)."""
    
    descending: bool = False
    """Trade history ordering flag."""
    
    order: Optional[str] = None
    """Order id for status checks."""
    
    def as_kwargs(self) -> Dict[str, Any]:
        """Original arguments of the failed call."""
        return {name: getattr(self, name) for name in _PAYLOAD_FIELDS[self.operation]}


# ============================================================
# RETRY SCHEDULER
# ============================================================

class RetryScheduler:
    """
    Schedules pending calls on the event loop timer queue.
    
    The dispatcher is the trader-side coroutine that maps a
    PendingCall back onto the matching operation.
    """
    
    def __init__(
        self,
        name: str,
        dispatch: Callable[[PendingCall], Awaitable[None]],
        config: Optional[RetryConfig] = None,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """
        Initialize scheduler.
        
        Args:
            name: Display name used in retry log lines
            dispatch: Coroutine function re-invoking a pending call
            config: Retry configuration
            loop: Event loop, defaults to the running loop
        """
        self._name = name
        self._dispatch = dispatch
        self._config = config or RetryConfig()
        self._loop = loop
        
        self._stats: Counter = Counter()
        self._inflight: Set[asyncio.Future] = set()
    
    @property
    def delay_seconds(self) -> float:
        return self._config.delay_seconds
    
    def schedule(
        self,
        pending: PendingCall,
        reason: Optional[Exception] = None,
    ) -> asyncio.TimerHandle:
        """
        Schedule exactly one re-invocation of ``pending``.
        
        Args:
            pending: The failed call
            reason: Failure that triggered the retry, for logging
        
        Returns:
            Timer handle of the scheduled attempt
        """
        loop = self._loop or asyncio.get_running_loop()
        
        logger.debug(f"{self._name} returned an error, retrying.. ({reason})")
        self._stats[pending.operation.value] += 1
        
        return loop.call_later(self._config.delay_seconds, self._fire, pending)
    
    def get_stats(self) -> Dict[str, int]:
        """Number of retries scheduled per operation."""
        return dict(self._stats)
    
    def _fire(self, pending: PendingCall) -> asyncio.Future:
        """Timer callback: run the pending call as a task."""
        task = asyncio.ensure_future(self._dispatch(pending))
        self._inflight.add(task)
        task.add_done_callback(self._on_done)
        return task
    
    def _on_done(self, task: asyncio.Future) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                f"{self._name} retried call raised: {error}",
                exc_info=error,
            )
