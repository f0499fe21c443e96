"""Frame-based timeline mapping frames to scenes."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

from .script import U32_MAX, VideoScript


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _frame_count(seconds: float, fps: int) -> int:
    """Seconds times fps in single precision, truncated and saturated to u32."""
    frames = _to_f32(_to_f32(seconds) * _to_f32(float(fps)))
    if math.isnan(frames):
        return 0
    return int(max(0.0, min(frames, float(U32_MAX))))


@dataclass(frozen=True)
class SceneSegment:
    """A scene's span of frames, end exclusive."""

    scene_id: str
    start_frame: int
    end_frame: int


@dataclass(frozen=True)
class Timeline:
    """Scene playback layout at a fixed frame rate."""

    fps: int
    total_frames: int
    segments: tuple[SceneSegment, ...] = ()

    @classmethod
    def from_script(cls, script: VideoScript) -> Timeline:
        fps = script.metadata.fps
        segments = []
        current = 0
        for scene in script.scenes:
            count = _frame_count(scene.duration, fps)
            segments.append(SceneSegment(scene.id, current, current + count))
            current += count
        return cls(
            fps=fps,
            total_frames=_frame_count(script.metadata.duration, fps),
            segments=tuple(segments),
        )

    def scene_at_frame(self, frame: int) -> str | None:
        """Return the id of the scene showing at the given frame, if any."""
        return next(
            (s.scene_id for s in self.segments if s.start_frame <= frame < s.end_frame),
            None,
        )

    def frame_to_time(self, frame: int) -> float:
        """Convert a frame number to seconds."""
        if self.fps == 0:
            return math.nan if frame == 0 else math.inf
        return _to_f32(_to_f32(float(frame)) / _to_f32(float(self.fps)))