from __future__ import annotations

from typing import Any


def run(args: Any, cannon: Any, W: int, H: int):
    # pygame is only imported once a window or recording is actually requested
    if getattr(args, "record_dir", None):
        from .pygame_backend import run_recording as _run
    else:
        from .pygame_backend import run_interactive as _run
    return _run(args, cannon, W, H)
