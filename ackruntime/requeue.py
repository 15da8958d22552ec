"""Exceptions that ask the runtime to requeue an item without logging an error."""

from __future__ import annotations

from datetime import timedelta

DEFAULT_REQUEUE_AFTER_DURATION = timedelta(seconds=30)


class RequeueNeeded(Exception):
    """Requeue the item being processed; the wrapped error is expected and retryable."""

    def __init__(self, err: BaseException | None = None) -> None:
        super().__init__(err)
        self.err = err
        self.__cause__ = err

    def __str__(self) -> str:
        return "" if self.err is None else str(self.err)

    def unwrap(self) -> BaseException | None:
        """Return the wrapped error, if any."""
        return self.err


class RequeueNeededAfter(RequeueNeeded):
    """Requeue the item being processed after the given duration."""

    def __init__(
        self, err: BaseException | None = None, duration: timedelta = timedelta(0)
    ) -> None:
        super().__init__(err)
        self._duration = duration

    @property
    def duration(self) -> timedelta:
        """How long to wait before requeueing."""
        return self._duration


def needed(err: BaseException | None) -> RequeueNeeded:
    """Return a RequeueNeeded wrapping ``err``."""
    return RequeueNeeded(err)


def needed_after(err: BaseException | None, duration: timedelta) -> RequeueNeededAfter:
    """Return a RequeueNeededAfter wrapping ``err`` with the given delay."""
    return RequeueNeededAfter(err, duration)