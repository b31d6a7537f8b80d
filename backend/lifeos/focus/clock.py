# backend/lifeos/focus/clock.py
import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

from lifeos.focus.outbox import OutboxDispatcher
from lifeos.focus.timer import FocusTimer, TimerState, Transition

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


class TimerRunner:
    """
    Drives FocusTimer.tick() on a fixed interval inside the running event loop.

    - at most one tick task per timer; it only exists while state.running
    - pause / reset / a phase change cancel it before another decrement can land
    - records emitted by a transition are flushed fire-and-forget
    """

    def __init__(
        self,
        timer: FocusTimer,
        dispatcher: Optional[OutboxDispatcher] = None,
        interval: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ):
        self.timer = timer
        self.dispatcher = dispatcher
        self.interval = interval
        self._sleep = sleep
        self._tick_task: Optional[asyncio.Task] = None
        self._flush_tasks: Set[asyncio.Task] = set()
        self._unsubscribe = timer.subscribe(self._on_transition)

    # --- commands (call from inside the event loop) ---

    def start(self) -> TimerState:
        return self.timer.start()

    def pause(self) -> TimerState:
        return self.timer.pause()

    def resume(self) -> TimerState:
        return self.timer.resume()

    def reset(self) -> TimerState:
        return self.timer.reset()

    @property
    def ticking(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    async def join(self) -> None:
        """Wait until the current run stops ticking (phase ended, paused or reset)."""
        task = self._tick_task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def drain(self) -> None:
        """Wait for in-flight outbox flushes."""
        if self._flush_tasks:
            await asyncio.gather(*list(self._flush_tasks), return_exceptions=True)

    async def close(self) -> None:
        self._unsubscribe()
        self._cancel_ticking()
        await self.drain()

    # --- internals ---

    def _on_transition(self, transition: Transition) -> None:
        if transition.records:
            self._flush()
        if transition.state.running:
            self._ensure_ticking()
        else:
            self._cancel_ticking()

    def _ensure_ticking(self) -> None:
        if self.ticking:
            return
        self._tick_task = asyncio.get_running_loop().create_task(self._run())

    def _cancel_ticking(self) -> None:
        task = self._tick_task
        if task is None or task.done():
            return
        # the tick task stops itself when its own tick ends the run
        if task is asyncio.current_task():
            return
        task.cancel()
        self._tick_task = None

    async def _run(self) -> None:
        while self.timer.state.running:
            await self._sleep(self.interval)
            if not self.timer.state.running:
                break
            self.timer.tick()

    def _flush(self) -> None:
        if self.dispatcher is None:
            return
        # only the fresh records; earlier failures wait for an explicit retry
        task = asyncio.get_running_loop().create_task(self.dispatcher.flush(retry=False))
        self._flush_tasks.add(task)
        task.add_done_callback(self._on_flush_done)

    def _on_flush_done(self, task: asyncio.Task) -> None:
        self._flush_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Outbox flush crashed: %r", exc)
