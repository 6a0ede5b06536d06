# timeline/scheduler.py
import logging
from typing import List, Optional
from notes.model import EventKind, PendingNote, TimedEvent, ToneCommand

MIN_NOTE_LENGTH = 20_000  # µs each note must sound for
PITCH_BASE = 48           # middle C is 48 in MIDI, 0 in BEEP

class NoteScheduler:
    """Collapses the time-resolved stream into monophonic tone commands.

    A note lasts until the next note-on. Notes shorter than min_note_length
    are stretched, and the excess (overshoot) is taken back from later notes
    whenever their real length leaves room for it. The last note ends at the
    last note-off seen anywhere in the stream.
    """
    def __init__(self, min_note_length: int = MIN_NOTE_LENGTH, pitch_base: int = PITCH_BASE):
        self.min_note_length = min_note_length
        self.pitch_base = pitch_base
        self.pending: Optional[PendingNote] = None
        self.overshoot = 0
        self.last_note_off_time: Optional[int] = None
        self.commands: List[ToneCommand] = []

    def feed(self, timed: TimedEvent) -> Optional[ToneCommand]:
        ev, t = timed.event, timed.microsecond_time
        emitted = None
        if ev.kind is EventKind.NOTE_ON:
            if self.pending is not None:
                emitted = self.close_note(t)
            self.pending = PendingNote(pitch=ev.pitch, start_microseconds=t)
        elif ev.kind is EventKind.NOTE_OFF:
            # pitch is not matched; only the final note uses this
            self.last_note_off_time = t
        return emitted

    def finish(self) -> Optional[ToneCommand]:
        if self.pending is None:
            return None
        if self.last_note_off_time is None:
            logging.debug("Dropping final note %d: no note-off in stream", self.pending.pitch)
            self.pending = None
            return None
        cmd = self.close_note(self.last_note_off_time)
        self.pending = None
        return cmd

    def close_note(self, end_time: int) -> ToneCommand:
        note = self.pending
        if note is None:
            raise RuntimeError("close_note called with no pending note")
        real = end_time - note.start_microseconds
        target = real - self.overshoot
        actual = max(target, self.min_note_length)
        self.overshoot = actual - target
        cmd = ToneCommand(sequence_index=len(self.commands),
                          duration_microseconds=actual,
                          pitch_offset=note.pitch - self.pitch_base)
        self.commands.append(cmd)
        return cmd
