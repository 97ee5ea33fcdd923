#!/usr/bin/env python3
"""
Replay a scripted keying session without a keyboard.

Presses are given as (key, down_ms, up_ms) and pauses are passed to a
ManualScheduler, so the example runs instantly and deterministically.
"""

from morsetype import (
    BufferSink,
    DecoderController,
    KeyEdge,
    KeyEvent,
    ManualScheduler,
    MorseTypeConfig,
)

# "HI" at speed level 5: dots 60ms, pauses long enough for each boundary
SESSION = [
    [("h", 0, 60), ("h", 150, 210), ("h", 300, 360), ("h", 450, 510)],
    [("j", 3000, 3060), ("j", 3150, 3210)],
]


def main():
    """Main function."""
    sink = BufferSink()
    scheduler = ManualScheduler()
    config = MorseTypeConfig(speed_level=5)
    controller = DecoderController(sink, scheduler, config)

    for character in SESSION:
        for key, down_ms, up_ms in character:
            controller.handle(KeyEvent(key, KeyEdge.DOWN, down_ms * 1_000_000))
            controller.handle(KeyEvent(key, KeyEdge.UP, up_ms * 1_000_000))
            print(f"keyed {controller.codeword!r:10} text {sink.text!r}")
        scheduler.advance(config.profile.char_boundary)
        print(f"char boundary        text {sink.text!r}")

    scheduler.advance(config.profile.word_boundary)
    print(f"word boundary        text {sink.text!r}")


if __name__ == "__main__":
    main()
