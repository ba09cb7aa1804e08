"""Sleepy.Mongoose client exceptions."""


class SleepyError(Exception):
    """Base exception for Sleepy.Mongoose client errors."""

    def __init__(self, message: str, code: int | str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class InvalidArgument(SleepyError, TypeError):
    """An argument was rejected before any request was sent."""

    pass


class ConnectionError(SleepyError):
    """Failed to reach the REST gateway."""

    pass


class QueryError(SleepyError):
    """The gateway answered a read request with an unreadable body."""

    pass


class MutationError(SleepyError):
    """The gateway answered an insert, update or remove with an unreadable body."""

    pass


class CommandError(SleepyError):
    """The gateway answered a command or connect with an unreadable body."""

    pass
