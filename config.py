# ========================= config.py =========================
import math
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_BPM = 120

class ConfigError(ValueError):
    """Settings that would make the time arithmetic undefined."""

def bpm_to_tempo(bpm: float) -> int:
    """Beats per minute -> microseconds per beat."""
    if not math.isfinite(bpm) or bpm <= 0:
        raise ConfigError(f"BPM must be a positive number, got {bpm!r}")
    return int(60_000_000 // bpm)

@dataclass
class BeepConfig:
    min_note_length: int = 20_000     # µs; 10_000 works better for dense piano pieces
    pitch_base: int = 48              # MIDI note that maps to BEEP pitch 0 (middle C)
    default_tempo: int = 500_000      # µs per beat until the first tempo event (120 BPM)

    def validate(self):
        if self.default_tempo <= 0:
            raise ConfigError(f"default tempo must be positive, got {self.default_tempo}")
        if self.min_note_length < 0:
            raise ConfigError(f"minimum note length cannot be negative, got {self.min_note_length}")

@dataclass
class OutputConfig:
    line_increment: int = 5
    output_path: Optional[str] = None  # None -> stdout

    def validate(self):
        if self.line_increment <= 0:
            raise ConfigError(f"line increment must be positive, got {self.line_increment}")

@dataclass
class AudioConfig:
    preview: bool = False
    program: int = 80     # GM Lead 1 (square)
    velocity: int = 100

@dataclass
class AppConfig:
    beep: BeepConfig = field(default_factory=BeepConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)

    def validate(self):
        self.beep.validate()
        self.output.validate()
