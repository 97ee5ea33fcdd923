#!/usr/bin/env python3
"""
Basic usage example for morsetype package.

Key morse code on any letter key; decoded text is redrawn on the
terminal line as you type.
"""

import time
from morsetype import DecodeStream, MorseTypeConfig, TerminalSink


def main():
    """Main function."""
    config = MorseTypeConfig(speed_level=6)

    print("morsetype Basic Usage Example")
    print(f"Speed level: {config.speed_level}")
    print(f"Dash from: {config.profile.dit_threshold * 1000:.0f}ms")
    print("\nReady for keying (Ctrl+C to exit)...")
    print("=" * 50)
    print()

    with DecodeStream(config=config, sink=TerminalSink()) as stream:
        try:
            while stream.is_running():
                time.sleep(0.1)
        except KeyboardInterrupt:
            print("\n\nStopping...")

    print("Done!")


if __name__ == "__main__":
    main()
