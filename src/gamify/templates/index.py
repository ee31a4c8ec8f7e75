#!/usr/bin/env python3
"""
Claude Gamify hook dispatcher.

Claude Code runs this script for every hook event. It hands the event to
play_sound.py in a detached process and exits immediately.
"""

import sys
from pathlib import Path


def main() -> int:
    try:
        from gamify.notify import dispatch_main
    except ImportError:
        return 0
    return dispatch_main(sys.argv[1:], player_script=Path(__file__).with_name("play_sound.py"))


if __name__ == "__main__":
    sys.exit(main())
