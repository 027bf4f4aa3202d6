"""
Frame recorder for PNG sequence output.
"""

import os
from typing import Optional
import numpy as np
from PIL import Image


class FrameRecorder:
    """
    Records frames as a numbered PNG image sequence.
    """

    def __init__(self, output_dir: str, width: int, height: int, fps: float):
        """
        Args:
            output_dir: Directory to save PNG frames
            width: Frame width
            height: Frame height
            fps: Target framerate (for reference only)
        """
        self.output_dir = output_dir
        self.width = int(width)
        self.height = int(height)
        self.fps = float(fps)
        self.frame_count = 0
        self.is_open = False

    def open(self) -> None:
        """Create output directory if it doesn't exist."""
        os.makedirs(self.output_dir, exist_ok=True)
        self.is_open = True
        self.frame_count = 0

    def frame_path(self, index: int) -> str:
        return os.path.join(self.output_dir, f"frame_{index:06d}.png")

    def write_frame(self, frame: np.ndarray) -> None:
        """
        Write a frame as PNG.

        Args:
            frame: RGB frame data (H, W, 3), uint8 or float in 0..1

        Raises:
            ValueError: If recorder is not open or the frame has the wrong shape
        """
        if not self.is_open:
            raise ValueError("Recorder not open. Call open() first.")

        if frame.shape != (self.height, self.width, 3):
            raise ValueError(
                f"Invalid frame shape: got {frame.shape}, expected {(self.height, self.width, 3)}"
            )

        if frame.dtype != np.uint8:
            frame = (np.clip(frame, 0.0, 1.0) * 255).astype(np.uint8)

        img = Image.fromarray(np.ascontiguousarray(frame))
        img.save(self.frame_path(self.frame_count), 'PNG')

        self.frame_count += 1

    def close(self) -> None:
        """Finalize recording."""
        self.is_open = False

    def get_output_path(self) -> Optional[str]:
        return self.output_dir
