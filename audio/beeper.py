# audio/beeper.py
import os, logging
from typing import Iterable
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")  # keep stdout for the BEEP program
import pygame.midi
import pygame.time
from config import AudioConfig
from notes.model import ToneCommand

PREVIEW_CH = 0

class Beeper:
    """
    Plays tone commands through the system MIDI output, one at a time,
    to hear roughly what the BEEP program will sound like.
    Stays silent (use_midi_out=False) when no output device exists.
    """
    def __init__(self, cfg: AudioConfig, pitch_base: int):
        self.cfg = cfg
        self.pitch_base = pitch_base
        self.midi_out = None
        self.use_midi_out = False
        self._sounding = None

        try:
            pygame.midi.init()
            dev = pygame.midi.get_default_output_id()
            if dev != -1:
                self.midi_out = pygame.midi.Output(dev)
                self.midi_out.set_instrument(cfg.program, PREVIEW_CH)
                self.use_midi_out = True
                logging.info("Beeper: using system MIDI out (device %d)", dev)
            else:
                logging.warning("Beeper: no MIDI output device found, preview disabled")
        except pygame.midi.MidiException as e:
            logging.warning("Beeper: MIDI init failed: %s", e)

    def close(self):
        if self.midi_out:
            self.silence()
            self.midi_out.close()
        pygame.midi.quit()
        self.midi_out = None
        self.use_midi_out = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def silence(self):
        if self._sounding is not None and self.midi_out:
            self.midi_out.note_off(self._sounding, 0, PREVIEW_CH)
        self._sounding = None

    def tone(self, cmd: ToneCommand):
        pitch = cmd.pitch_offset + self.pitch_base
        ms = cmd.duration_microseconds // 1000
        if not (self.use_midi_out and self.midi_out):
            return
        if 0 <= pitch <= 127:
            self.midi_out.note_on(pitch, max(1, min(self.cfg.velocity, 127)), PREVIEW_CH)
            self._sounding = pitch
        else:
            logging.debug("Beeper: pitch %d outside MIDI range, resting", pitch)
        pygame.time.wait(ms)
        self.silence()

    def play(self, commands: Iterable[ToneCommand]) -> int:
        n = 0
        for cmd in commands:
            self.tone(cmd)
            n += 1
        return n
