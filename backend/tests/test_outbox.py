"""Outbox dispatcher: one attempt per record per flush, error reporting."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from lifeos.focus.errors import (
    SessionAuthError,
    SessionPersistenceError,
    SessionValidationError,
)
from lifeos.focus.outbox import OutboxDispatcher, SessionOutbox
from lifeos.focus.timer import FocusTimer, Phase, TimerConfig
from lifeos.schemas.focus_session import FocusSessionCreate, FocusSessionRead


def _record(minutes: int, completed: bool = False) -> FocusSessionCreate:
    return FocusSessionCreate(duration=25, completed_duration=minutes, completed=completed)


class ScriptedWriter:
    """Raises the queued errors in order, then succeeds."""

    def __init__(self, *errors):
        self.errors = list(errors)
        self.calls = []

    async def create(self, record):
        self.calls.append(record)
        if self.errors:
            error = self.errors.pop(0)
            if error is not None:
                raise error
        return FocusSessionRead(
            id=f"s{len(self.calls)}",
            user_id="user-1",
            duration=record.duration,
            completed_duration=record.completed_duration,
            completed=record.completed,
            started_at=datetime.now(timezone.utc),
        )


@pytest.mark.asyncio
async def test_flush_writes_everything_in_order():
    outbox = SessionOutbox([_record(3), _record(25, completed=True)])
    writer = ScriptedWriter()

    written = await OutboxDispatcher(outbox, writer).flush()

    assert [w.completed_duration for w in written] == [3, 25]
    assert len(outbox) == 0


@pytest.mark.asyncio
async def test_persistence_error_keeps_record_for_next_flush():
    outbox = SessionOutbox([_record(5)])
    writer = ScriptedWriter(SessionPersistenceError("mongo down"))
    dispatcher = OutboxDispatcher(outbox, writer)
    reported = []
    dispatcher.on_error(lambda err, rec: reported.append((type(err), rec.completed_duration)))

    assert await dispatcher.flush() == []
    assert outbox.pending() == [_record(5)]
    assert reported == [(SessionPersistenceError, 5)]
    # exactly one attempt, no automatic retry
    assert len(writer.calls) == 1

    written = await dispatcher.flush()
    assert [w.completed_duration for w in written] == [5]
    assert len(outbox) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("error", [SessionAuthError("expired"), SessionValidationError("bad")])
async def test_non_retryable_errors_drop_the_record(error):
    outbox = SessionOutbox([_record(4)])
    dispatcher = OutboxDispatcher(outbox, ScriptedWriter(error))
    notices = []
    dispatcher.on_error(lambda err, rec: notices.append(err.notice))

    await dispatcher.flush()

    assert len(outbox) == 0
    assert notices == [error.notice]


@pytest.mark.asyncio
async def test_failed_record_goes_back_ahead_of_newer_ones():
    outbox = SessionOutbox([_record(1), _record(2)])
    dispatcher = OutboxDispatcher(outbox, ScriptedWriter(SessionPersistenceError("x"), None))

    await dispatcher.flush()
    outbox.put(_record(3))

    assert [r.completed_duration for r in outbox.pending()] == [1, 3]


@pytest.mark.asyncio
async def test_auth_error_notice_reads_session_expired():
    outbox = SessionOutbox([_record(2)])
    dispatcher = OutboxDispatcher(outbox, ScriptedWriter(SessionAuthError("401")))
    notices = []
    dispatcher.on_error(lambda err, rec: notices.append(err.notice))

    await dispatcher.flush()

    assert notices[0].startswith("Session expired")


@pytest.mark.asyncio
async def test_store_failure_leaves_timer_state_alone():
    timer = FocusTimer(TimerConfig())
    timer.start()
    timer.advance(25 * 60)
    state_after_run = timer.state

    dispatcher = OutboxDispatcher(timer.outbox, ScriptedWriter(SessionPersistenceError("down")))
    await dispatcher.flush()

    assert timer.state == state_after_run
    assert timer.state.phase is Phase.BREAK
    assert len(timer.outbox) == 1


@pytest.mark.asyncio
async def test_flush_without_retry_leaves_held_records_alone():
    outbox = SessionOutbox([_record(1)])
    writer = ScriptedWriter(SessionPersistenceError("down"))
    dispatcher = OutboxDispatcher(outbox, writer)
    await dispatcher.flush()

    outbox.put(_record(2))
    written = await dispatcher.flush(retry=False)

    assert [w.completed_duration for w in written] == [2]
    assert [r.completed_duration for r in writer.calls] == [1, 2]
    assert outbox.pending() == [_record(1)]
