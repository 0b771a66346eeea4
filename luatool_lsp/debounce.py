from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Optional, Set

logger = logging.getLogger(__name__)


class DebounceScheduler:
    """Coalesce bursts of per-document events into one delayed call.

    At most one timer is pending per document. The timer entry is removed
    before the callback runs, so a change arriving while the callback is in
    flight arms a fresh timer. In-flight callbacks are never cancelled.
    """

    def __init__(
        self,
        callback: Callable[[str, Any], Any],
        delay_ms: int = 100,
        enabled: Optional[Callable[[], bool]] = None,
    ):
        self.callback = callback
        self.delay_ms = delay_ms
        self.enabled = enabled
        self._timers: Dict[str, asyncio.TimerHandle] = {}
        self._inflight: Set[asyncio.Task] = set()

    def __len__(self) -> int:
        return len(self._timers)

    def pending(self, uri: str) -> bool:
        return uri in self._timers

    def schedule(self, uri: str, payload: Any, delay_ms: Optional[int] = None) -> bool:
        if self.enabled is not None and not self.enabled():
            return False
        self.cancel(uri)
        self.arm(uri, payload, self.delay_ms if delay_ms is None else delay_ms)
        return True

    def arm(self, uri: str, payload: Any, delay_ms: int) -> None:
        loop = asyncio.get_running_loop()
        self._timers[uri] = loop.call_later(delay_ms / 1000.0, self._fire, uri, payload)

    def cancel(self, uri: str) -> bool:
        handle = self._timers.pop(uri, None)
        if handle is None:
            return False
        handle.cancel()
        return True

    def _fire(self, uri: str, payload: Any) -> None:
        self._timers.pop(uri, None)
        result = self.callback(uri, payload)
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._inflight.add(task)
            task.add_done_callback(self._finished)

    def _finished(self, task: asyncio.Task) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("debounced call failed", exc_info=exc)

    async def drain(self) -> None:
        """Wait for every callback already in flight."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)
