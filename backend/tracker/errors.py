"""Exceptions raised by the timer store and surfaced by the HTTP layer."""


class TimerError(Exception):
    kind = 'timer_error'


class StateCorrupt(TimerError):
    """The persisted state file exists but is not a valid timer record."""
    kind = 'state_corrupt'


class PersistenceFailed(TimerError):
    """Writing the state file failed after the in-memory state changed."""
    kind = 'persistence_failed'


class InvalidInput(TimerError):
    kind = 'invalid_input'
