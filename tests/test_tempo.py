import pytest

from config import ConfigError
from helpers import on, tempo
from timeline.tempo import TempoClock


def test_one_beat_at_default_tempo_is_exact():
    clock = TempoClock(480)
    assert clock.resolve(on(480, 60)) == 500_000


def test_tempo_change_moves_anchor():
    clock = TempoClock(480)
    assert clock.resolve(tempo(960, 250_000)) == 1_000_000
    assert clock.anchor.tick_time == 960
    assert clock.anchor.microsecond_time == 1_000_000
    assert clock.anchor.microseconds_per_beat == 250_000
    # one beat later at the new tempo
    assert clock.resolve(on(1440, 60)) == 1_250_000


def test_integer_division_truncates():
    clock = TempoClock(3, default_tempo=500_000)
    assert clock.resolve(on(1, 60)) == 166_666
    assert clock.resolve(on(2, 60)) == 333_333


def test_no_accumulated_rounding_across_small_steps():
    clock = TempoClock(3, default_tempo=500_000)
    times = [clock.resolve(on(t, 60)) for t in range(0, 301)]
    assert times[-1] == 50_000_000
    assert times == sorted(times)


def test_annotate_pairs_events_with_times():
    clock = TempoClock(96, default_tempo=600_000)
    timed = list(clock.annotate([on(0, 60), on(48, 62)]))
    assert [t.microsecond_time for t in timed] == [0, 300_000]
    assert timed[1].event.pitch == 62


@pytest.mark.parametrize("tpb", [0, -96])
def test_bad_ticks_per_beat(tpb):
    with pytest.raises(ConfigError):
        TempoClock(tpb)


def test_bad_default_tempo():
    with pytest.raises(ConfigError):
        TempoClock(480, default_tempo=0)


def test_zero_tempo_event_is_fatal():
    clock = TempoClock(480)
    with pytest.raises(ConfigError):
        clock.resolve(tempo(0, 0))
