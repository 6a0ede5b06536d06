from notes.model import Event, EventKind


def on(tick, pitch, track=0):
    return Event(track, tick, EventKind.NOTE_ON, pitch=pitch)


def off(tick, pitch, track=0):
    return Event(track, tick, EventKind.NOTE_OFF, pitch=pitch)


def tempo(tick, value, track=0):
    return Event(track, tick, EventKind.TEMPO_CHANGE, tempo_value=value)


def other(tick, track=0):
    return Event(track, tick, EventKind.OTHER)


class FakeMidiOutput:
    """Records what a pygame.midi.Output would have been sent."""

    def __init__(self, dev):
        self.dev = dev
        self.calls = []

    def set_instrument(self, program, ch):
        self.calls.append(("program", program, ch))

    def note_on(self, note, vel, ch):
        self.calls.append(("on", note, vel, ch))

    def note_off(self, note, vel, ch):
        self.calls.append(("off", note, ch))

    def close(self):
        self.calls.append(("close",))
