"""Data model of a video script and its decoding from JSON."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Union

U32_MAX = 2**32 - 1
I32_MIN = -(2**31)
I32_MAX = 2**31 - 1

DEFAULT_WIDTH = 1920
DEFAULT_HEIGHT = 1080


class ScriptFormatError(ValueError):
    """Raised when script data does not match the expected structure."""


def _mapping(value: Any, what: str) -> dict:
    if not isinstance(value, dict):
        raise ScriptFormatError(f"{what}: expected an object, got {type(value).__name__}")
    return value


def _sequence(value: Any, what: str) -> list:
    if not isinstance(value, list):
        raise ScriptFormatError(f"{what}: expected an array, got {type(value).__name__}")
    return value


def _required(data: dict, key: str, what: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ScriptFormatError(f"{what}: missing field `{key}`") from None


def _string(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise ScriptFormatError(f"{what}: expected a string, got {type(value).__name__}")
    return value


def _integer(value: Any, low: int, high: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ScriptFormatError(f"{what}: expected an integer in [{low}, {high}], got {value!r}")
    return value


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ScriptFormatError(f"{what}: expected a number, got {value!r}")
    return float(value)


def _u8(value: Any, what: str) -> int:
    return _integer(value, 0, 255, what)


def _u32(value: Any, what: str) -> int:
    return _integer(value, 0, U32_MAX, what)


def _i32(value: Any, what: str) -> int:
    return _integer(value, I32_MIN, I32_MAX, what)


def _parse_u32(text: str, default: int) -> int:
    digits = text[1:] if text.startswith("+") else text
    if digits and digits.isascii() and digits.isdigit():
        value = int(digits)
        if value <= U32_MAX:
            return value
    return default


def _variant(value: Any, kinds: type[Enum], what: str) -> tuple[Enum, Any, bool]:
    """Split an externally tagged enum value into (kind, payload, has_payload)."""
    if isinstance(value, str):
        name, payload, has_payload = value, None, False
    elif isinstance(value, dict) and len(value) == 1:
        ((name, payload),) = value.items()
        has_payload = True
    else:
        raise ScriptFormatError(f"{what}: expected a string or a single-key object")
    try:
        kind = kinds(name)
    except ValueError:
        raise ScriptFormatError(f"{what}: unknown variant {name!r}") from None
    return kind, payload, has_payload


@dataclass(frozen=True)
class Resolution:
    """Frame size given either as a "WIDTHxHEIGHT" name or as explicit dimensions."""

    name: str | None = None
    width: int | None = None
    height: int | None = None

    def __post_init__(self) -> None:
        if self.name is not None:
            if self.width is not None or self.height is not None:
                raise ValueError("a named resolution cannot also carry dimensions")
        elif self.width is None or self.height is None:
            raise ValueError("a resolution needs a name or both width and height")

    def dimensions(self) -> tuple[int, int]:
        """Return (width, height), falling back to 1920x1080 for unreadable names."""
        if self.name is None:
            return (self.width, self.height)
        parts = self.name.split("x")
        if len(parts) != 2:
            return (DEFAULT_WIDTH, DEFAULT_HEIGHT)
        return (_parse_u32(parts[0], DEFAULT_WIDTH), _parse_u32(parts[1], DEFAULT_HEIGHT))

    @classmethod
    def from_json(cls, value: Any) -> Resolution:
        if isinstance(value, str):
            return cls(name=value)
        if isinstance(value, dict):
            return cls(
                width=_u32(_required(value, "width", "resolution"), "resolution width"),
                height=_u32(_required(value, "height", "resolution"), "resolution height"),
            )
        raise ScriptFormatError("resolution: expected a string or an object with width and height")


@dataclass(frozen=True)
class Position:
    """Pixel position in the frame."""

    x: int = 0
    y: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Position:
        data = _mapping(data, "position")
        return cls(
            x=_i32(_required(data, "x", "position"), "position x"),
            y=_i32(_required(data, "y", "position"), "position y"),
        )


@dataclass(frozen=True)
class Transform:
    """Placement, scale, rotation and opacity of a layer."""

    position: Position = field(default_factory=Position)
    scale: float = 1.0
    rotation: float = 0.0
    opacity: float = 1.0

    @classmethod
    def from_dict(cls, data: Any) -> Transform:
        data = _mapping(data, "transform")
        position = Position.from_dict(data["position"]) if "position" in data else Position()
        return cls(
            position=position,
            scale=_number(data.get("scale", 1.0), "transform scale"),
            rotation=_number(data.get("rotation", 0.0), "transform rotation"),
            opacity=_number(data.get("opacity", 1.0), "transform opacity"),
        )


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA colour; alpha defaults to opaque."""

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_dict(cls, data: Any) -> Color:
        data = _mapping(data, "color")
        return cls(
            r=_u8(_required(data, "r", "color"), "color r"),
            g=_u8(_required(data, "g", "color"), "color g"),
            b=_u8(_required(data, "b", "color"), "color b"),
            a=_u8(data.get("a", 255), "color a"),
        )

    def rgba(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)


class EffectKind(Enum):
    FADE_IN = "fade_in"
    FADE_OUT = "fade_out"
    BLUR = "blur"
    COLOR_GRADE = "color_grade"


@dataclass(frozen=True)
class Effect:
    """A visual effect applied to a layer."""

    kind: EffectKind
    radius: float | None = None
    adjustment: str | None = None

    @classmethod
    def from_json(cls, value: Any) -> Effect:
        kind, payload, has_payload = _variant(value, EffectKind, "effect")
        if kind in (EffectKind.FADE_IN, EffectKind.FADE_OUT):
            if has_payload and payload is not None:
                raise ScriptFormatError(f"effect {kind.value!r} takes no parameters")
            return cls(kind)
        if not has_payload:
            raise ScriptFormatError(f"effect {kind.value!r} requires parameters")
        payload = _mapping(payload, f"effect {kind.value}")
        if kind is EffectKind.BLUR:
            return cls(kind, radius=_number(_required(payload, "radius", "blur"), "blur radius"))
        adjustment = _string(_required(payload, "adjustment", "color_grade"), "color_grade adjustment")
        return cls(kind, adjustment=adjustment)


class TransitionKind(Enum):
    CUT = "cut"
    FADE = "fade"
    DISSOLVE = "dissolve"
    WIPE = "wipe"


@dataclass(frozen=True)
class Transition:
    """A transition between scenes."""

    kind: TransitionKind
    duration: float | None = None
    direction: str | None = None

    @classmethod
    def from_json(cls, value: Any) -> Transition:
        kind, payload, has_payload = _variant(value, TransitionKind, "transition")
        if kind is TransitionKind.CUT:
            if has_payload and payload is not None:
                raise ScriptFormatError("transition 'cut' takes no parameters")
            return cls(kind)
        if not has_payload:
            raise ScriptFormatError(f"transition {kind.value!r} requires parameters")
        what = f"transition {kind.value}"
        payload = _mapping(payload, what)
        duration = _number(_required(payload, "duration", what), f"{what} duration")
        if kind is TransitionKind.WIPE:
            direction = _string(_required(payload, "direction", what), f"{what} direction")
            return cls(kind, duration=duration, direction=direction)
        return cls(kind, duration=duration)


def _effects(data: dict, what: str) -> tuple[Effect, ...]:
    if "effects" not in data:
        return ()
    return tuple(Effect.from_json(item) for item in _sequence(data["effects"], f"{what} effects"))


@dataclass(frozen=True)
class ImageLayer:
    source: Path
    effects: tuple[Effect, ...] = ()
    transform: Transform = field(default_factory=Transform)


@dataclass(frozen=True)
class VideoLayer:
    source: Path
    effects: tuple[Effect, ...] = ()
    transform: Transform = field(default_factory=Transform)


@dataclass(frozen=True)
class TextLayer:
    content: str
    font: Path
    font_size: float
    color: Color
    position: Position = field(default_factory=Position)
    effects: tuple[Effect, ...] = ()


Layer = Union[ImageLayer, VideoLayer, TextLayer]


def parse_layer(data: Any) -> Layer:
    """Decode a layer object tagged by its "type" field."""
    data = _mapping(data, "layer")
    kind = _string(_required(data, "type", "layer"), "layer type")
    what = f"{kind} layer"
    if kind in ("image", "video"):
        layer_cls = ImageLayer if kind == "image" else VideoLayer
        transform = Transform.from_dict(data["transform"]) if "transform" in data else Transform()
        return layer_cls(
            source=Path(_string(_required(data, "source", what), f"{what} source")),
            effects=_effects(data, what),
            transform=transform,
        )
    if kind == "text":
        position = Position.from_dict(data["position"]) if "position" in data else Position()
        return TextLayer(
            content=_string(_required(data, "content", what), f"{what} content"),
            font=Path(_string(_required(data, "font", what), f"{what} font")),
            font_size=_number(_required(data, "font_size", what), f"{what} font_size"),
            color=Color.from_dict(_required(data, "color", what)),
            position=position,
            effects=_effects(data, what),
        )
    raise ScriptFormatError(f"layer: unknown type {kind!r}")


@dataclass(frozen=True)
class Scene:
    id: str
    duration: float
    layers: tuple[Layer, ...]
    transition: Transition | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Scene:
        data = _mapping(data, "scene")
        transition = data.get("transition")
        return cls(
            id=_string(_required(data, "id", "scene"), "scene id"),
            duration=_number(_required(data, "duration", "scene"), "scene duration"),
            layers=tuple(
                parse_layer(item)
                for item in _sequence(_required(data, "layers", "scene"), "scene layers")
            ),
            transition=None if transition is None else Transition.from_json(transition),
        )


@dataclass(frozen=True)
class Metadata:
    title: str
    resolution: Resolution
    fps: int
    duration: float
    description: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Metadata:
        data = _mapping(data, "metadata")
        description = data.get("description")
        return cls(
            title=_string(_required(data, "title", "metadata"), "metadata title"),
            resolution=Resolution.from_json(_required(data, "resolution", "metadata")),
            fps=_u32(_required(data, "fps", "metadata"), "metadata fps"),
            duration=_number(_required(data, "duration", "metadata"), "metadata duration"),
            description=None if description is None else _string(description, "metadata description"),
        )


class AudioTrackType(Enum):
    MUSIC = "music"
    VOICEOVER = "voiceover"
    SOUND_EFFECT = "sound_effect"


@dataclass(frozen=True)
class AudioTrack:
    source: Path
    track_type: AudioTrackType = AudioTrackType.MUSIC
    volume: float = 1.0
    start_time: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> AudioTrack:
        data = _mapping(data, "audio track")
        track_type = AudioTrackType.MUSIC
        if "track_type" in data:
            name = _string(data["track_type"], "audio track type")
            try:
                track_type = AudioTrackType(name)
            except ValueError:
                raise ScriptFormatError(f"audio track: unknown track type {name!r}") from None
        return cls(
            source=Path(_string(_required(data, "source", "audio track"), "audio track source")),
            track_type=track_type,
            volume=_number(data.get("volume", 1.0), "audio track volume"),
            start_time=_number(data.get("start_time", 0.0), "audio track start_time"),
        )


@dataclass(frozen=True)
class AudioConfig:
    tracks: tuple[AudioTrack, ...]

    @classmethod
    def from_dict(cls, data: Any) -> AudioConfig:
        data = _mapping(data, "audio")
        items = _sequence(_required(data, "tracks", "audio"), "audio tracks")
        return cls(tracks=tuple(AudioTrack.from_dict(item) for item in items))


def _reject_constant(name: str) -> Any:
    raise ScriptFormatError(f"invalid JSON number {name}")


@dataclass(frozen=True)
class VideoScript:
    """A complete video description: metadata, scenes and optional audio."""

    metadata: Metadata
    scenes: tuple[Scene, ...]
    audio: AudioConfig | None = None

    @classmethod
    def from_dict(cls, data: Any) -> VideoScript:
        data = _mapping(data, "script")
        audio = data.get("audio")
        scenes = _sequence(_required(data, "scenes", "script"), "script scenes")
        return cls(
            metadata=Metadata.from_dict(_required(data, "metadata", "script")),
            scenes=tuple(Scene.from_dict(item) for item in scenes),
            audio=None if audio is None else AudioConfig.from_dict(audio),
        )

    @classmethod
    def from_json(cls, text: str) -> VideoScript:
        try:
            data = json.loads(text, parse_constant=_reject_constant)
        except json.JSONDecodeError as exc:
            raise ScriptFormatError(f"invalid JSON: {exc}") from exc
        return cls.from_dict(data)