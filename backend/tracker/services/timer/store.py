import json
import logging
import math
import os
import tempfile
import time
from typing import Callable, Dict, Optional, Tuple

from tracker.errors import InvalidInput, PersistenceFailed, StateCorrupt
from tracker.models import TimerState
from .formatting import format_elapsed
from .locks import ReadWriteLock

STARTED = 'started'
ALREADY_RUNNING = 'already running'
STOPPED = 'stopped'
ALREADY_STOPPED = 'already stopped'
RESET = 'reset'


def offset_seconds_for(offset_hours) -> Optional[int]:
    """Convert a manual offset in hours to whole seconds, or None for no offset."""
    try:
        seconds = float(offset_hours or 0) * 3600
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidInput(f'offset_hours must be a finite number: {offset_hours!r}') from exc
    if not math.isfinite(seconds):
        raise InvalidInput(f'offset_hours must be a finite number: {offset_hours!r}')
    return int(seconds) if seconds > 0 else None


class TimerStore:
    """The single timer, its lock and its backing JSON file.

    Every mutation runs under the exclusive lock and is written to disk
    before the lock is released, so readers never see a state that has not
    been persisted. A failed write is reported as ``PersistenceFailed`` but
    the in-memory change is kept; memory and disk stay out of step until the
    next successful mutation.
    """

    def __init__(self, path, clock: Callable[[], float] = time.time,
                 logger: Optional[logging.Logger] = None):
        self.path = os.fspath(path)
        self.clock = clock
        self._lock = ReadWriteLock()
        self._state = TimerState()
        self.logger = logger or logging.getLogger(__name__)

    def _now(self) -> int:
        return int(self.clock())

    # ---- persistence ----

    def load(self) -> TimerState:
        with self._lock.exclusive():
            try:
                with open(self.path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except FileNotFoundError:
                self._state = TimerState()
                self.logger.info(f"[timer-load] no state file at {self.path}, starting from zero")
                return self._copy()
            except (OSError, ValueError) as exc:
                # ValueError covers both JSONDecodeError and UnicodeDecodeError
                self.logger.error(f"[timer-load] cannot read {self.path}: {exc}")
                raise StateCorrupt(f'cannot read {self.path}: {exc}') from exc
            try:
                self._state = TimerState.from_dict(data)
            except StateCorrupt as exc:
                self.logger.error(f"[timer-load] invalid state in {self.path}: {exc}")
                raise
            self.logger.info(
                f"[timer-load] loaded {self.path} phase={self._state.phase} offset={self._state.offset_seconds}s"
            )
            return self._copy()

    def _save(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix='.timer-', suffix='.json', dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(self._state.to_dict(), f, indent=2)
            try:
                mode = os.stat(self.path).st_mode & 0o777
            except FileNotFoundError:
                mode = 0o644
            # mkstemp creates 0600; keep the target readable like a plain write would
            os.chmod(tmp_path, mode)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    pass
            self.logger.error(f"[timer-save] failed to save state to {self.path}: {exc}")
            raise PersistenceFailed(f'failed to save state: {exc}') from exc

    # ---- queries ----

    def _copy(self) -> TimerState:
        return TimerState(**self._state.to_dict())

    @property
    def state(self) -> TimerState:
        """A copy of the current state."""
        with self._lock.shared():
            return self._copy()

    def get_elapsed(self) -> Tuple[bool, int]:
        with self._lock.shared():
            return self._state.is_running, self._state.elapsed(self._now())

    def snapshot(self) -> Dict[str, object]:
        running, elapsed = self.get_elapsed()
        return {
            'is_running': running,
            'elapsed_seconds': elapsed,
            'elapsed_formatted': format_elapsed(elapsed),
        }

    # ---- mutations ----

    def start(self, offset_hours: float = 0.0) -> str:
        # Validate before taking the lock so bad input never touches the state
        manual_offset = offset_seconds_for(offset_hours)
        with self._lock.exclusive():
            state = self._state
            if state.is_running:
                return ALREADY_RUNNING

            if state.stopped_at > 0:
                state.offset_seconds += state.stopped_at - state.start_time
                state.stopped_at = 0

            # A manual offset re-baselines the timer and drops banked time
            if manual_offset is not None:
                state.offset_seconds = manual_offset

            state.start_time = self._now()
            state.is_running = True
            self._save()
            self.logger.info(f"[timer-start] offset_hours={offset_hours} start_time={state.start_time}")
            return STARTED

    def stop(self) -> str:
        with self._lock.exclusive():
            state = self._state
            if not state.is_running:
                return ALREADY_STOPPED
            state.stopped_at = self._now()
            state.is_running = False
            self._save()
            self.logger.info(
                f"[timer-stop] stopped_at={state.stopped_at} elapsed={state.elapsed(state.stopped_at)}s"
            )
            return STOPPED

    def reset(self) -> str:
        with self._lock.exclusive():
            self._state = TimerState()
            self._save()
            self.logger.info("[timer-reset] timer reset to zero")
            return RESET
