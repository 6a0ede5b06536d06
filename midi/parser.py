# midi/parser.py
import logging
from dataclasses import dataclass
from typing import List
import mido
from notes.model import Event, EventKind

class MidiDecodeError(Exception):
    """The file could not be read as a Standard MIDI File."""

@dataclass
class DecodedSequence:
    tracks: List[List[Event]]
    ticks_per_beat: int

def message_to_event(msg: mido.Message, track_index: int, tick: int) -> Event:
    if msg.is_meta:
        if msg.type == 'set_tempo':
            return Event(track_index, tick, EventKind.TEMPO_CHANGE, tempo_value=msg.tempo)
        return Event(track_index, tick, EventKind.OTHER)
    if msg.type == 'note_on' and msg.velocity > 0:
        return Event(track_index, tick, EventKind.NOTE_ON, pitch=msg.note)
    if msg.type == 'note_off' or msg.type == 'note_on':
        # note_on with velocity 0 is a note-off
        return Event(track_index, tick, EventKind.NOTE_OFF, pitch=msg.note)
    return Event(track_index, tick, EventKind.OTHER)

def track_to_events(track: mido.MidiTrack, track_index: int) -> List[Event]:
    tick = 0
    events: List[Event] = []
    for msg in track:
        tick += msg.time  # delta -> absolute
        events.append(message_to_event(msg, track_index, tick))
    return events

def parse_midi_to_tracks(path: str) -> DecodedSequence:
    try:
        mid = mido.MidiFile(path)
    except (OSError, EOFError, ValueError, KeyError, IndexError) as e:
        raise MidiDecodeError(f"cannot read MIDI file {path!r}: {e}") from e

    tpb = mid.ticks_per_beat
    if tpb <= 0 or tpb & 0x8000:
        raise MidiDecodeError(f"{path!r}: SMPTE/invalid time division {tpb} is not supported")

    n = len(mid.tracks)
    tracks: List[List[Event]] = []
    for i, trk in enumerate(mid.tracks):
        tracks.append(track_to_events(trk, i))
        logging.debug("Loaded track %d of %d (%d events)", i + 1, n, len(trk))
    return DecodedSequence(tracks=tracks, ticks_per_beat=tpb)
