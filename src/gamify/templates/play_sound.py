#!/usr/bin/env python3
"""
Claude Gamify standalone player.

Usage: play_sound.py <HookName>

Plays the active theme's sound for one hook event, detached, and exits.
"""

import sys


def main() -> int:
    if len(sys.argv) < 2:
        print("Usage: play_sound.py <HookName>", file=sys.stderr)
        return 1
    try:
        from gamify.notify import play_main
    except ImportError:
        return 0
    return play_main(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
