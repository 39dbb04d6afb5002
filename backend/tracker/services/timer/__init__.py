"""Timer domain services: the persistent store and display helpers.

HTTP routes, socket handlers and CLI commands all go through the store so
that transport concerns stay out of the timer state machine.
"""

from .formatting import format_elapsed
from .store import TimerStore, offset_seconds_for, STARTED, ALREADY_RUNNING, STOPPED, ALREADY_STOPPED, RESET

__all__ = [
    'TimerStore',
    'format_elapsed',
    'offset_seconds_for',
    'STARTED',
    'ALREADY_RUNNING',
    'STOPPED',
    'ALREADY_STOPPED',
    'RESET',
]
