# main.py
import sys, os
sys.path.append(os.path.dirname(__file__))  # 確保能找到 config.py

import argparse
import logging
from typing import List, Optional
from config import AppConfig, BeepConfig, OutputConfig, AudioConfig, ConfigError, DEFAULT_BPM, bpm_to_tempo
from midi.parser import MidiDecodeError
from app import App
from utils.crashlog import setup_crashlog, log_exception, log_dir

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

def _init_logging(verbose: bool = False):
    if logging.getLogger().handlers:
        return

    logging.basicConfig(
        level=logging.DEBUG,
        format=LOG_FORMAT,
        encoding="utf-8"
    )
    # console stays quiet unless -v; the file always gets everything
    logging.getLogger().handlers[0].setLevel(logging.DEBUG if verbose else logging.WARNING)
    try:
        from logging.handlers import RotatingFileHandler
        fh = RotatingFileHandler(os.path.join(log_dir(), "app.log"), maxBytes=2*1024*1024,
                                 backupCount=3, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(fh)
    except OSError as e:
        logging.warning("file logging disabled: %s", e)

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Convert a Standard MIDI file into Spectrum BEEP statements")
    ap.add_argument('midi_file')
    ap.add_argument('-o', '--output', default=None, help="write the program here instead of stdout")
    ap.add_argument('--min-note-length', type=int, default=20_000,
                    help="shortest audible note in microseconds (default 20000)")
    ap.add_argument('--pitch-base', type=int, default=48, help="MIDI note played as BEEP pitch 0")
    ap.add_argument('--default-bpm', type=float, default=DEFAULT_BPM,
                    help="tempo used until the file sets one")
    ap.add_argument('--line-increment', type=int, default=5)
    ap.add_argument('--preview', action='store_true', help="play the result on the system MIDI output")
    ap.add_argument('-v', '--verbose', action='store_true')
    return ap.parse_args(argv)

def build_config(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        beep=BeepConfig(
            min_note_length=args.min_note_length,
            pitch_base=args.pitch_base,
            default_tempo=bpm_to_tempo(args.default_bpm),
        ),
        output=OutputConfig(line_increment=args.line_increment, output_path=args.output),
        audio=AudioConfig(preview=args.preview),
    )

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    _init_logging(args.verbose)
    try:
        cfg = build_config(args)
        App(cfg).run(args.midi_file)
    except MidiDecodeError as e:
        logging.error("decode failed: %s", e)
        print(f"midibeep: {e}", file=sys.stderr)
        return 1
    except ConfigError as e:
        logging.error("configuration error: %s", e)
        print(f"midibeep: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logging.error("cannot write output: %s", e)
        print(f"midibeep: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        try:
            log_exception("Top-level exception", e)
        except OSError:
            pass
        logging.error("unhandled exception: %s", e, exc_info=True)
        raise
    return 0

def main_entry():
    setup_crashlog()
    sys.exit(main())

if __name__ == '__main__':
    main_entry()
