import pygame.midi
import pygame.time
import pytest

from audio.beeper import Beeper, PREVIEW_CH
from config import AudioConfig
from helpers import FakeMidiOutput
from notes.model import ToneCommand


@pytest.fixture
def waits(monkeypatch):
    recorded = []
    monkeypatch.setattr(pygame.midi, "init", lambda: None)
    monkeypatch.setattr(pygame.midi, "quit", lambda: None)
    monkeypatch.setattr(pygame.time, "wait", lambda ms: recorded.append(ms) or ms)
    return recorded


def test_plays_tones_one_at_a_time(monkeypatch, waits):
    monkeypatch.setattr(pygame.midi, "get_default_output_id", lambda: 3)
    monkeypatch.setattr(pygame.midi, "Output", FakeMidiOutput)
    cmds = [ToneCommand(0, 500_000, 12), ToneCommand(1, 20_000, -60)]

    with Beeper(AudioConfig(program=80, velocity=200), pitch_base=48) as b:
        out = b.midi_out
        assert b.play(cmds) == 2

    assert waits == [500, 20]
    assert out.calls == [
        ("program", 80, PREVIEW_CH),
        ("on", 60, 127, PREVIEW_CH),
        ("off", 60, PREVIEW_CH),
        ("close",),
    ]


def test_silent_without_device(monkeypatch, waits):
    monkeypatch.setattr(pygame.midi, "get_default_output_id", lambda: -1)
    b = Beeper(AudioConfig(), pitch_base=48)
    assert not b.use_midi_out
    assert b.play([ToneCommand(0, 100_000, 0)]) == 1
    assert waits == []
    b.close()
