# app.py
import sys, logging
from typing import List, Optional
from config import AppConfig
from notes.model import ToneCommand
from midi.parser import parse_midi_to_tracks
from timeline.pipeline import convert_tracks
from render.emitter import write_program

class App:
    """Load a MIDI file, collapse it to BEEP tones, write the program, optionally preview it."""
    def __init__(self, cfg: AppConfig):
        self.cfg = cfg
        self.commands: List[ToneCommand] = []
        self.current_midi: Optional[str] = None

    def load(self, path: str) -> List[ToneCommand]:
        seq = parse_midi_to_tracks(path)
        logging.info("Loaded %s: %d track(s), %d ticks/beat", path, len(seq.tracks), seq.ticks_per_beat)
        # convert fully before anything is written
        self.commands = convert_tracks(seq.tracks, seq.ticks_per_beat, self.cfg.beep)
        self.current_midi = path
        return self.commands

    def write(self) -> int:
        out_cfg = self.cfg.output
        if out_cfg.output_path is None:
            return write_program(self.commands, sys.stdout, out_cfg.line_increment)
        with open(out_cfg.output_path, "w", encoding="utf-8") as f:
            n = write_program(self.commands, f, out_cfg.line_increment)
        logging.info("Wrote %d line(s) to %s", n, out_cfg.output_path)
        return n

    def preview(self) -> int:
        from audio.beeper import Beeper
        with Beeper(self.cfg.audio, self.cfg.beep.pitch_base) as b:
            return b.play(self.commands)

    def run(self, path: str) -> int:
        self.cfg.validate()
        self.load(path)
        n = self.write()
        if self.cfg.audio.preview:
            self.preview()
        return n
