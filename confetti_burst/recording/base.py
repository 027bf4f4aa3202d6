"""Recorder interface used by the offscreen renderer."""

from __future__ import annotations

from typing import Optional, Protocol

import numpy as np


class RecorderBackend(Protocol):
    """Sink for rendered frames.

    ``write_frame`` receives one (H, W, 3) RGB array per rendered frame, in
    order; ``frame_count`` reports how many were accepted.
    """

    frame_count: int

    def open(self) -> None:
        ...

    def write_frame(self, frame: np.ndarray) -> None:
        ...

    def close(self) -> None:
        ...

    def get_output_path(self) -> Optional[str]:
        ...
