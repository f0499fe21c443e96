"""Loading and caching of media assets referenced by scripts."""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Union

PLACEHOLDER_WIDTH = 1920
PLACEHOLDER_HEIGHT = 1080
PLACEHOLDER_FPS = 30.0
PLACEHOLDER_DURATION = 10.0


class AssetError(Exception):
    """Raised when an asset cannot be loaded."""


@dataclass(frozen=True)
class ImageAsset:
    path: Path
    width: int
    height: int


@dataclass(frozen=True)
class VideoAsset:
    path: Path
    width: int
    height: int
    fps: float
    duration: float


@dataclass(frozen=True)
class FontAsset:
    path: Path
    data: bytes


Asset = Union[ImageAsset, VideoAsset, FontAsset]


@dataclass(frozen=True)
class AssetStats:
    """Counts of cached assets by kind."""

    total: int
    images: int
    videos: int
    fonts: int

    def __str__(self) -> str:
        return (
            f"Total: {self.total}, Images: {self.images}, "
            f"Videos: {self.videos}, Fonts: {self.fonts}"
        )


class AssetLoader:
    """Loads assets relative to a base directory and caches them by resolved path."""

    def __init__(self, base_path: str | PathLike[str]) -> None:
        self.base_path = Path(base_path)
        self._assets: dict[Path, Asset] = {}

    def resolve_path(self, path: str | PathLike[str]) -> Path:
        """Return absolute paths unchanged and join relative ones to the base path."""
        path = Path(path)
        return path if path.is_absolute() else self.base_path / path

    def load_image(self, path: str | PathLike[str]) -> ImageAsset:
        full_path = self.resolve_path(path)
        if full_path not in self._assets:
            if not full_path.exists():
                raise AssetError(f"Image file not found: {full_path}")
            self._assets[full_path] = ImageAsset(full_path, PLACEHOLDER_WIDTH, PLACEHOLDER_HEIGHT)
        asset = self._assets[full_path]
        if not isinstance(asset, ImageAsset):
            raise AssetError("Asset is not an image")
        return asset

    def load_video(self, path: str | PathLike[str]) -> VideoAsset:
        full_path = self.resolve_path(path)
        if full_path not in self._assets:
            if not full_path.exists():
                raise AssetError(f"Video file not found: {full_path}")
            self._assets[full_path] = VideoAsset(
                full_path,
                PLACEHOLDER_WIDTH,
                PLACEHOLDER_HEIGHT,
                PLACEHOLDER_FPS,
                PLACEHOLDER_DURATION,
            )
        asset = self._assets[full_path]
        if not isinstance(asset, VideoAsset):
            raise AssetError("Asset is not a video")
        return asset

    def load_font(self, path: str | PathLike[str]) -> FontAsset:
        full_path = self.resolve_path(path)
        if full_path not in self._assets:
            try:
                data = full_path.read_bytes()
            except OSError as exc:
                raise AssetError(f"Failed to load font: {full_path}: {exc}") from exc
            self._assets[full_path] = FontAsset(full_path, data)
        asset = self._assets[full_path]
        if not isinstance(asset, FontAsset):
            raise AssetError("Asset is not a font")
        return asset

    def stats(self) -> AssetStats:
        assets = self._assets.values()
        return AssetStats(
            total=len(self._assets),
            images=sum(isinstance(a, ImageAsset) for a in assets),
            videos=sum(isinstance(a, VideoAsset) for a in assets),
            fonts=sum(isinstance(a, FontAsset) for a in assets),
        )

    def clear(self) -> None:
        """Drop every cached asset."""
        self._assets.clear()