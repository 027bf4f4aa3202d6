"""
Recording module for offline frame capture.

Renders the effect on a virtual clock and stores every frame as a PNG.
"""

from .base import RecorderBackend
from .frame_recorder import FrameRecorder

__all__ = ['RecorderBackend', 'FrameRecorder']
