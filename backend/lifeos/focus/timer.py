# backend/lifeos/focus/timer.py
"""
Pomodoro timer as an explicit state machine.

All rules live in `transition(state, event, config, now)`, a pure function that
returns the next state plus the session records to persist. `FocusTimer` owns a
single state object, applies events to it and pushes emitted records into an
outbox. Nothing here sleeps or does I/O: ticks are driven by `TimerRunner`
(lifeos.focus.clock) in production and by `advance()` in tests.

    idle --start--> focus --reaches 0--> break --reaches 0--> idle
      ^               |                    |
      +----reset------+--------reset-------+
"""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Tuple

from pydantic import ConfigDict, Field

from lifeos.core.config import settings
from lifeos.focus.outbox import SessionOutbox
from lifeos.schemas.base import ApiModel
from lifeos.schemas.focus_session import FocusSessionCreate

logger = logging.getLogger(__name__)

# a reset needs at least this much focus time to leave a record
MIN_RECORDED_SECONDS = 60


class Phase(str, Enum):
    IDLE = "idle"
    FOCUS = "focus"
    BREAK = "break"


class TimerEvent(str, Enum):
    START = "start"
    TOGGLE = "toggle"  # pause <-> resume
    RESET = "reset"
    TICK = "tick"


class TimerConfig(ApiModel):
    model_config = ConfigDict(frozen=True)

    focus_minutes: int = Field(default=25, ge=1)
    break_minutes: int = Field(default=5, ge=1)

    @classmethod
    def from_settings(cls) -> "TimerConfig":
        return cls(focus_minutes=settings.FOCUS_MINUTES, break_minutes=settings.BREAK_MINUTES)

    @property
    def focus_seconds(self) -> int:
        return self.focus_minutes * 60

    @property
    def break_seconds(self) -> int:
        return self.break_minutes * 60


class TimerState(ApiModel):
    """
    Observable timer state: {phase, remainingSeconds, running}.
    run_started_at is the instant the current focus run was started.
    """
    model_config = ConfigDict(frozen=True)

    phase: Phase = Phase.IDLE
    remaining_seconds: int = Field(ge=0)
    running: bool = False
    run_started_at: Optional[datetime] = None

    @classmethod
    def initial(cls, config: TimerConfig) -> "TimerState":
        return cls(remaining_seconds=config.focus_seconds)


class Transition(NamedTuple):
    state: TimerState
    records: Tuple[FocusSessionCreate, ...] = ()


def round_half_up_minutes(seconds: int) -> int:
    # integer arithmetic, so 90s is exactly 1.5 -> 2
    return (seconds + 30) // 60


def _completed_record(config: TimerConfig) -> FocusSessionCreate:
    return FocusSessionCreate(
        duration=config.focus_minutes,
        completed_duration=config.focus_minutes,
        completed=True,
    )


def _partial_record(config: TimerConfig, elapsed_seconds: int) -> Optional[FocusSessionCreate]:
    if elapsed_seconds < MIN_RECORDED_SECONDS:
        return None
    minutes = min(round_half_up_minutes(elapsed_seconds), config.focus_minutes)
    return FocusSessionCreate(
        duration=config.focus_minutes,
        completed_duration=minutes,
        completed=False,
    )


def transition(
    state: TimerState,
    event: TimerEvent,
    config: TimerConfig,
    now: Optional[datetime] = None,
) -> Transition:
    idle = TimerState.initial(config)

    if event is TimerEvent.START:
        if state.phase is not Phase.IDLE:
            return Transition(state)
        return Transition(TimerState(
            phase=Phase.FOCUS,
            remaining_seconds=config.focus_seconds,
            running=True,
            run_started_at=now or datetime.now(timezone.utc),
        ))

    if event is TimerEvent.TOGGLE:
        if state.phase is Phase.IDLE:
            return Transition(state)
        return Transition(state.model_copy(update={"running": not state.running}))

    if event is TimerEvent.TICK:
        if state.phase is Phase.IDLE or not state.running or state.remaining_seconds == 0:
            return Transition(state)

        remaining = state.remaining_seconds - 1
        if remaining > 0:
            return Transition(state.model_copy(update={"remaining_seconds": remaining}))

        if state.phase is Phase.FOCUS:
            return Transition(
                TimerState(phase=Phase.BREAK, remaining_seconds=config.break_seconds, running=False),
                (_completed_record(config),),
            )
        # break over
        return Transition(idle)

    if event is TimerEvent.RESET:
        if state.phase is Phase.FOCUS:
            elapsed = config.focus_seconds - state.remaining_seconds
            record = _partial_record(config, elapsed)
            return Transition(idle, (record,) if record else ())
        # break time is never recorded
        return Transition(idle)

    raise ValueError(f"unknown timer event: {event!r}")


TransitionListener = Callable[[Transition], None]


class FocusTimer:
    """
    Single owner of one timer's state.

    Commands (start/pause/resume/reset) and tick() apply one event each and
    notify listeners. Emitted session records go to `outbox`; writing them is
    someone else's job (OutboxDispatcher), so a failing store never blocks or
    rolls back a transition.
    """

    def __init__(
        self,
        config: Optional[TimerConfig] = None,
        outbox: Optional[SessionOutbox] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config or TimerConfig.from_settings()
        self.outbox = outbox if outbox is not None else SessionOutbox()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._state = TimerState.initial(self.config)
        self._listeners: List[TransitionListener] = []

    @property
    def state(self) -> TimerState:
        return self._state

    def subscribe(self, listener: TransitionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: TimerEvent) -> Transition:
        result = transition(self._state, event, self.config, now=self._clock())
        if result.state == self._state and not result.records:
            return result

        previous, self._state = self._state, result.state
        if previous.phase is not result.state.phase:
            logger.debug("timer %s -> %s", previous.phase.value, result.state.phase.value)
        for record in result.records:
            self.outbox.put(record)

        for listener in list(self._listeners):
            listener(result)
        return result

    # --- commands ---

    def start(self) -> TimerState:
        return self.dispatch(TimerEvent.START).state

    def pause(self) -> TimerState:
        """Toggle: pausing a paused timer resumes it."""
        return self.dispatch(TimerEvent.TOGGLE).state

    def resume(self) -> TimerState:
        if self._state.phase is Phase.IDLE or self._state.running:
            return self._state
        return self.dispatch(TimerEvent.TOGGLE).state

    def reset(self) -> TimerState:
        return self.dispatch(TimerEvent.RESET).state

    def tick(self) -> Transition:
        return self.dispatch(TimerEvent.TICK)

    def advance(self, seconds: int) -> TimerState:
        """
        Virtual clock: apply `seconds` ticks back to back.
        Stops early once the timer is no longer running.
        """
        for _ in range(seconds):
            if not self._state.running:
                break
            self.tick()
        return self._state
