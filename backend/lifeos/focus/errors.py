# backend/lifeos/focus/errors.py


class SessionStoreError(Exception):
    """
    A focus-session record could not be written.
    Never fatal: the timer has already moved on, at worst a history entry is missing.
    """
    retryable = False
    notice = "Could not save your focus session."


class SessionAuthError(SessionStoreError):
    """No valid user identity. The user has to log in again; the record is dropped."""
    notice = "Session expired. Please log in again."


class SessionPersistenceError(SessionStoreError):
    """Store unreachable or failed. The record is held in the outbox until flush(retry=True)."""
    retryable = True
    notice = "Focus session not saved yet. It will be sent again on the next sync."


class SessionValidationError(SessionStoreError):
    """The store rejected the record as malformed; the record is dropped."""
    notice = "Focus session was rejected by the server."
