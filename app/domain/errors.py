"""Domain errors raised by the counter store and input policies."""


class CounterError(Exception):
    """Base class for counter service errors."""


class StoreError(CounterError):
    """The counter store failed to execute an operation."""


class StoreUnavailable(StoreError):
    """The backing store could not be reached or did not answer in time."""


class ConsistencyViolation(StoreError):
    """The singleton counter row is missing after initialization."""


class InvalidAmount(CounterError, ValueError):
    """A client-supplied increment amount is malformed or out of range."""

    def __init__(self, raw: str, reason: str):
        super().__init__(f"Invalid increment amount {raw!r}: {reason}")
        self.raw = raw
        self.reason = reason
