# backend/lifeos/focus/outbox.py
import asyncio
import logging
from collections import deque
from typing import Callable, Deque, Iterable, List, Protocol

from lifeos.focus.errors import SessionStoreError
from lifeos.schemas.focus_session import FocusSessionCreate, FocusSessionRead

logger = logging.getLogger(__name__)


class SessionWriter(Protocol):
    """
    Anything that can persist one record and return it with id/startedAt.
    Implementations raise SessionStoreError subclasses only.
    """

    async def create(self, record: FocusSessionCreate) -> FocusSessionRead:
        ...


ErrorListener = Callable[[SessionStoreError, FocusSessionCreate], None]


class SessionOutbox:
    """
    FIFO of records the timer produced but nobody has written yet.

    Records whose write already failed are held apart from fresh ones, so
    only an explicit retry sends them again.
    """

    def __init__(self, records: Iterable[FocusSessionCreate] = ()):
        self._records: Deque[FocusSessionCreate] = deque(records)
        self._held: Deque[FocusSessionCreate] = deque()

    def put(self, record: FocusSessionCreate) -> None:
        self._records.append(record)

    def take_all(self) -> List[FocusSessionCreate]:
        """Fresh records only; held ones stay where they are."""
        taken = list(self._records)
        self._records.clear()
        return taken

    def hold(self, records: List[FocusSessionCreate]) -> None:
        self._held.extend(records)

    def release_held(self) -> None:
        # back in front of anything queued meanwhile, original order kept
        self._records.extendleft(reversed(self._held))
        self._held.clear()

    def pending(self) -> List[FocusSessionCreate]:
        return list(self._held) + list(self._records)

    def __len__(self) -> int:
        return len(self._held) + len(self._records)


class OutboxDispatcher:
    """
    Writes queued records through a SessionWriter.

    Each flush() makes exactly one attempt per queued record. Retryable
    failures (store down) are held until someone calls flush(retry=True);
    auth and validation failures are dropped. Every failure is reported to
    the error listeners, which is how the UI shows a non-blocking notice.
    """

    def __init__(self, outbox: SessionOutbox, writer: SessionWriter):
        self.outbox = outbox
        self.writer = writer
        self._lock = asyncio.Lock()
        self._error_listeners: List[ErrorListener] = []

    def on_error(self, listener: ErrorListener) -> None:
        self._error_listeners.append(listener)

    async def flush(self, retry: bool = True) -> List[FocusSessionRead]:
        """
        Write queued records. With retry=False, records held from an earlier
        failed attempt are left alone (used for the automatic post-transition flush).
        """
        # one flush at a time, so a record is never sent twice concurrently
        async with self._lock:
            if retry:
                self.outbox.release_held()
            written: List[FocusSessionRead] = []
            retained: List[FocusSessionCreate] = []

            for record in self.outbox.take_all():
                try:
                    written.append(await self.writer.create(record))
                except SessionStoreError as e:
                    logger.warning(
                        "Focus session write failed (%s, retryable=%s): %s",
                        type(e).__name__, e.retryable, e,
                    )
                    if e.retryable:
                        retained.append(record)
                    self._report(e, record)

            if retained:
                self.outbox.hold(retained)
            return written

    def _report(self, error: SessionStoreError, record: FocusSessionCreate) -> None:
        for listener in list(self._error_listeners):
            listener(error, record)
