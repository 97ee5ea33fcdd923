"""Command-line interface for morsetype package."""

import sys
import argparse
import logging
import signal
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional, TextIO
from . import __version__
from .config import MAX_SPEED_LEVEL, MIN_SPEED_LEVEL, SPEED_PROFILES, MorseTypeConfig
from .sink import TerminalSink
from .stream import DecodeStream


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description="morsetype - type text by keying morse code on any letter key",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Decode at the default speed level
  morsetype

  # Faster keying, and a space after garbled characters too
  morsetype --speed 8 --space-after-unrecognized

Keys:
  a-z         - hold briefly for a dot, longer for a dash
  1-9         - change speed level while typing (9 is fastest)
  backspace   - discard the symbols of the current character
        """,
    )

    parser.add_argument(
        "--speed",
        type=int,
        choices=range(MIN_SPEED_LEVEL, MAX_SPEED_LEVEL + 1),
        default=5,
        metavar="LEVEL",
        help="Speed level 1-9 (default: 5)",
    )

    parser.add_argument(
        "--space-after-unrecognized",
        action="store_true",
        help="Insert a word space after codewords that do not decode",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log keyed symbols and timing decisions",
    )

    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


@contextmanager
def echo_disabled(stream: Optional[TextIO]) -> Iterator[None]:
    """
    Turn off terminal echo so held letter keys do not print over the decoded line.

    Does nothing unless stream is a POSIX terminal. Keys typed while echo is
    off are discarded when it is restored.
    """
    if sys.platform == "win32" or stream is None or not stream.isatty():
        yield
        return

    import termios

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)
    quiet = termios.tcgetattr(fd)
    quiet[3] &= ~termios.ECHO
    termios.tcsetattr(fd, termios.TCSANOW, quiet)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSAFLUSH, saved)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = MorseTypeConfig(
        speed_level=args.speed,
        space_after_unrecognized=args.space_after_unrecognized,
    )
    profile = SPEED_PROFILES[args.speed]

    print("morsetype keying decoder", file=sys.stderr)
    print(f"Speed level: {args.speed}", file=sys.stderr)
    print(
        f"Dash at {profile.dit_threshold * 1000:.0f}ms, "
        f"character after {profile.char_boundary:.2f}s, "
        f"word after {profile.word_boundary:.2f}s more",
        file=sys.stderr,
    )
    print("", file=sys.stderr)
    print("Ready for keying (Ctrl+C to exit)...", file=sys.stderr)
    print("=" * 50, file=sys.stderr)

    stop_requested = threading.Event()

    def signal_handler(signum, frame):
        stop_requested.set()

    signal.signal(signal.SIGINT, signal_handler)

    try:
        with echo_disabled(sys.stdin), DecodeStream(
            config=config, sink=TerminalSink()
        ) as stream:
            while stream.is_running() and not stop_requested.wait(0.1):
                pass
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    print("\n\nStopping morsetype...", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
