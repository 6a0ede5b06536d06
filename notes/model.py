# notes/model.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional

class EventKind(Enum):
    TEMPO_CHANGE = "tempo_change"
    NOTE_ON = "note_on"
    NOTE_OFF = "note_off"
    OTHER = "other"

@dataclass(frozen=True)
class Event:
    track_index: int
    tick_time: int                     # ticks since track start
    kind: EventKind
    pitch: Optional[int] = None        # NOTE_ON / NOTE_OFF only
    tempo_value: Optional[int] = None  # µs per beat, TEMPO_CHANGE only

    @property
    def is_note(self) -> bool:
        return self.kind in (EventKind.NOTE_ON, EventKind.NOTE_OFF)

@dataclass(frozen=True)
class TimedEvent:
    event: Event
    microsecond_time: int

@dataclass(frozen=True)
class TempoAnchor:
    tick_time: int
    microsecond_time: int
    microseconds_per_beat: int

@dataclass(frozen=True)
class PendingNote:
    pitch: int
    start_microseconds: int

@dataclass(frozen=True)
class ToneCommand:
    sequence_index: int
    duration_microseconds: int
    pitch_offset: int

    @property
    def duration_seconds(self) -> float:
        return self.duration_microseconds / 1_000_000
