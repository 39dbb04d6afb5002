from dataclasses import dataclass

from tracker.errors import StateCorrupt

INT_FIELDS = ('start_time', 'stopped_at', 'offset_seconds')


@dataclass
class TimerState:
    start_time: int = 0
    stopped_at: int = 0
    offset_seconds: int = 0
    is_running: bool = False

    @property
    def phase(self) -> str:
        if self.is_running:
            return 'running'
        if self.start_time == 0 and self.stopped_at == 0:
            return 'idle'
        return 'paused'

    def elapsed(self, now: int) -> int:
        """Total accumulated seconds at ``now`` without mutating the state."""
        if self.phase == 'idle':
            return self.offset_seconds
        if self.is_running:
            run = now - self.start_time
        else:
            run = self.stopped_at - self.start_time
        return run + self.offset_seconds

    def to_dict(self):
        return {
            'start_time': self.start_time,
            'stopped_at': self.stopped_at,
            'offset_seconds': self.offset_seconds,
            'is_running': self.is_running,
        }

    @classmethod
    def from_dict(cls, data) -> 'TimerState':
        if not isinstance(data, dict):
            raise StateCorrupt(f'expected a JSON object, got {type(data).__name__}')
        values = {}
        for name in INT_FIELDS:
            value = data.get(name, 0)
            # bool is an int subclass; a stray true/false is still corrupt
            if isinstance(value, bool) or not isinstance(value, int):
                raise StateCorrupt(f'field {name!r} must be an integer, got {value!r}')
            values[name] = value
        running = data.get('is_running', False)
        if not isinstance(running, bool):
            raise StateCorrupt(f"field 'is_running' must be a boolean, got {running!r}")
        values['is_running'] = running
        return cls(**values)
