"""Loading, validating and summarising video scripts."""

from __future__ import annotations

import sys
from os import PathLike
from pathlib import Path

from .script import ScriptFormatError, VideoScript

DURATION_TOLERANCE = 0.1


class ScriptError(Exception):
    """Raised when a script cannot be read, decoded or fails validation."""


def parse_json(path: str | PathLike[str]) -> VideoScript:
    """Read, decode and validate a JSON script file."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScriptError(f"Failed to read script file: {path}: {exc}") from exc
    try:
        script = VideoScript.from_json(content)
    except ScriptFormatError as exc:
        raise ScriptError(f"Failed to parse JSON script: {path}: {exc}") from exc
    validate_script(script)
    return script


def validate_script(script: VideoScript) -> None:
    """Check the script's structure, raising ScriptError on the first problem."""
    metadata = script.metadata
    if not metadata.title:
        raise ScriptError("Script title cannot be empty")
    if metadata.fps == 0:
        raise ScriptError("FPS must be greater than 0")
    if metadata.duration <= 0.0:
        raise ScriptError("Duration must be positive")
    if not script.scenes:
        raise ScriptError("Script must contain at least one scene")

    for index, scene in enumerate(script.scenes):
        if not scene.id:
            raise ScriptError(f"Scene {index} has empty ID")
        if scene.duration <= 0.0:
            raise ScriptError(f"Scene '{scene.id}' duration must be positive")
        if not scene.layers:
            raise ScriptError(f"Scene '{scene.id}' must have at least one layer")

    total = sum(scene.duration for scene in script.scenes)
    if abs(total - metadata.duration) > DURATION_TOLERANCE:
        print(
            f"Warning: Total scene duration ({total:.2f}s) differs from "
            f"metadata duration ({metadata.duration:.2f}s)",
            file=sys.stderr,
        )


def summarize(script: VideoScript) -> str:
    """Return a human-readable summary of the script's structure."""
    metadata = script.metadata
    width, height = metadata.resolution.dimensions()
    lines = [
        f"Title: {metadata.title}",
        f"Resolution: {width}x{height}",
        f"FPS: {metadata.fps}",
        f"Duration: {metadata.duration:.2f}s",
        f"Scenes: {len(script.scenes)}",
    ]
    lines.extend(
        f"  Scene {number}: '{scene.id}' ({scene.duration:.2f}s, {len(scene.layers)} layers)"
        for number, scene in enumerate(script.scenes, start=1)
    )
    if script.audio is not None:
        lines.append(f"Audio tracks: {len(script.audio.tracks)}")
    return "".join(f"{line}\n" for line in lines)