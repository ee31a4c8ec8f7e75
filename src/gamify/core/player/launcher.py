"""
Detached process launch.

Playback must outlive the process that starts it: Claude Code runs the
notification entry point and expects it to exit at once. The child gets
its own session (so it is not in our process group), has all stdio pointed
at /dev/null, and is never waited on.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import Callable, Sequence

logger = logging.getLogger(__name__)

Launcher = Callable[[Sequence[str]], bool]


def launch_detached(argv: Sequence[str]) -> bool:
    """
    Start `argv` as an independent process and return immediately.

    Returns:
        True if the process was spawned, False otherwise (never raises)
    """
    kwargs: dict = {
        "stdin": subprocess.DEVNULL,
        "stdout": subprocess.DEVNULL,
        "stderr": subprocess.DEVNULL,
        "close_fds": True,
    }
    if sys.platform == "win32":
        kwargs["creationflags"] = getattr(subprocess, "DETACHED_PROCESS", 0) | getattr(
            subprocess, "CREATE_NEW_PROCESS_GROUP", 0
        )
    else:
        kwargs["start_new_session"] = True

    try:
        subprocess.Popen(list(argv), **kwargs)
    except (OSError, ValueError) as e:
        logger.debug("Failed to launch %s: %s", argv[0] if argv else "<empty>", e)
        return False
    return True
