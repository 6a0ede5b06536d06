# timeline/pipeline.py
import logging
from typing import Iterable, List, Optional, Sequence
from config import BeepConfig
from notes.model import Event, ToneCommand
from timeline.merger import TrackMerger
from timeline.tempo import TempoClock
from timeline.scheduler import NoteScheduler

def convert_tracks(tracks: Iterable[Optional[Sequence[Event]]], ticks_per_beat: int,
                   cfg: Optional[BeepConfig] = None) -> List[ToneCommand]:
    """Merge -> tempo clock -> scheduler in one pass. Raises before returning
    anything if the time base or a tempo is unusable."""
    cfg = cfg or BeepConfig()
    cfg.validate()

    merger = TrackMerger(tracks)
    clock = TempoClock(ticks_per_beat, cfg.default_tempo)
    sched = NoteScheduler(cfg.min_note_length, cfg.pitch_base)

    for timed in clock.annotate(merger):
        sched.feed(timed)
    sched.finish()

    cmds = sched.commands
    total = sum(c.duration_microseconds for c in cmds)
    logging.info("Converted %d track(s) into %d tone(s), %.3f s total, residual overshoot %d us",
                 len(merger), len(cmds), total / 1_000_000, sched.overshoot)
    return cmds
