"""Errors raised by the identifier generator."""

INVALID_SYSTEM_CLOCK_MESSAGE = "Invalid System Clock!"


class LongSequenceError(Exception):
    """Base class for generator errors."""


class ClockRolledBack(LongSequenceError):
    """The clock reported a time earlier than the last generated identifier."""

    def __init__(self, last_timestamp: int, current_timestamp: int) -> None:
        self.last_timestamp = last_timestamp
        self.current_timestamp = current_timestamp
        super().__init__(
            f"{INVALID_SYSTEM_CLOCK_MESSAGE} Clock moved back "
            f"{last_timestamp - current_timestamp} ms "
            f"(last={last_timestamp}, now={current_timestamp})"
        )


class NodeIdResolutionFailure(LongSequenceError):
    """Hardware addresses could not be enumerated."""


class SequenceSpinTimeout(LongSequenceError):
    """The clock did not advance while waiting out an exhausted sequence."""

    def __init__(self, last_timestamp: int, timeout_ms: float) -> None:
        self.last_timestamp = last_timestamp
        self.timeout_ms = timeout_ms
        super().__init__(
            f"Clock stuck at {last_timestamp} for more than {timeout_ms} ms "
            "with sequence exhausted"
        )
