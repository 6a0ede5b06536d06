# timeline/tempo.py
import logging
from typing import Iterable, Iterator
from config import ConfigError
from notes.model import Event, EventKind, TempoAnchor, TimedEvent

DEFAULT_TEMPO = 500_000  # 120 BPM

class TempoClock:
    """Tick -> absolute microsecond conversion under step tempo changes.

    Times are measured from the most recent tempo event (the anchor) with
    integer arithmetic only, so rounding never accumulates across changes.
    """
    def __init__(self, ticks_per_beat: int, default_tempo: int = DEFAULT_TEMPO):
        if ticks_per_beat <= 0:
            raise ConfigError(f"ticks per beat must be positive, got {ticks_per_beat}")
        if default_tempo <= 0:
            raise ConfigError(f"default tempo must be positive, got {default_tempo}")
        self.ticks_per_beat = ticks_per_beat
        self.anchor = TempoAnchor(tick_time=0, microsecond_time=0, microseconds_per_beat=default_tempo)

    def time_at(self, tick_time: int) -> int:
        a = self.anchor
        elapsed = (tick_time - a.tick_time) * a.microseconds_per_beat // self.ticks_per_beat
        return a.microsecond_time + elapsed

    def resolve(self, event: Event) -> int:
        t = self.time_at(event.tick_time)
        if event.kind is EventKind.TEMPO_CHANGE:
            tempo = event.tempo_value
            if tempo is None or tempo <= 0:
                raise ConfigError(f"invalid tempo {tempo!r} at tick {event.tick_time}")
            self.anchor = TempoAnchor(tick_time=event.tick_time, microsecond_time=t,
                                      microseconds_per_beat=tempo)
            logging.debug("Tempo change at tick %d (%d us): %d us/beat", event.tick_time, t, tempo)
        return t

    def annotate(self, events: Iterable[Event]) -> Iterator[TimedEvent]:
        for ev in events:
            yield TimedEvent(ev, self.resolve(ev))
