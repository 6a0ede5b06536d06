# render/emitter.py
from typing import Iterable, Iterator, TextIO
from notes.model import ToneCommand

LINE_NUMBER_INCREMENT = 5

def format_seconds(us: int) -> str:
    # shortest round-trip decimal: 0.5, 0.02, 1.0; exponent form keeps a
    # fractional mantissa (5.0e-05) like the Ruby midibeep output
    s = repr(us / 1_000_000)
    mantissa, e, exp = s.partition("e")
    if e and "." not in mantissa:
        s = f"{mantissa}.0e{exp}"
    return s

def format_beep(cmd: ToneCommand, line_number: int) -> str:
    return f"{line_number} BEEP {format_seconds(cmd.duration_microseconds)},{cmd.pitch_offset}"

def render_lines(commands: Iterable[ToneCommand], increment: int = LINE_NUMBER_INCREMENT) -> Iterator[str]:
    line_number = increment
    for cmd in commands:
        yield format_beep(cmd, line_number)
        line_number += increment

def write_program(commands: Iterable[ToneCommand], out: TextIO, increment: int = LINE_NUMBER_INCREMENT) -> int:
    """Write one BEEP line per command; returns the number of lines written."""
    count = 0
    for line in render_lines(commands, increment):
        out.write(line + "\n")
        count += 1
    return count
