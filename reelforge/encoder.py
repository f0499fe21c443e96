"""Video encoding through an external ffmpeg process."""

from __future__ import annotations

import os
import subprocess
from os import PathLike

FFMPEG = "ffmpeg"


class EncoderError(Exception):
    """Raised when ffmpeg is missing or encoding fails."""


def is_available() -> bool:
    """Return True if an ffmpeg executable can be started."""
    try:
        subprocess.run([FFMPEG, "-version"], capture_output=True, check=False)
    except OSError:
        return False
    return True


def build_command(
    frame_pattern: str,
    output_path: str | PathLike[str],
    fps: int,
    width: int,
    height: int,
    audio_path: str | PathLike[str] | None = None,
) -> list[str]:
    """Return the ffmpeg argument list for encoding a frame sequence."""
    command = [FFMPEG, "-y", "-f", "image2", "-framerate", str(fps), "-i", frame_pattern]
    if audio_path is not None:
        command += ["-i", os.fspath(audio_path)]
    command += ["-c:v", "libx264", "-pix_fmt", "yuv420p", "-s", f"{width}x{height}"]
    if audio_path is not None:
        command += ["-c:a", "aac", "-shortest"]
    command.append(os.fspath(output_path))
    return command


def encode(
    frame_pattern: str,
    output_path: str | PathLike[str],
    fps: int,
    width: int,
    height: int,
    audio_path: str | PathLike[str] | None = None,
) -> None:
    """Encode numbered frames (e.g. "output/frame_%d.ppm") into a video file."""
    if not is_available():
        raise EncoderError("FFmpeg not found. Please install ffmpeg to enable video encoding.")
    print(f"🎥 Encoding video to {os.fspath(output_path)}...")
    command = build_command(frame_pattern, output_path, fps, width, height, audio_path)
    try:
        result = subprocess.run(command, check=False)
    except OSError as exc:
        raise EncoderError(f"Failed to execute ffmpeg: {exc}") from exc
    if result.returncode != 0:
        raise EncoderError("FFmpeg encoding failed")