from pathlib import Path

import pytest

from reelforge.assets import AssetError, AssetLoader, AssetStats


def test_asset_loader(tmp_path):
    (tmp_path / "test.png").write_bytes(b"fake image data")
    loader = AssetLoader(tmp_path)
    image = loader.load_image("test.png")
    assert image.path == tmp_path / "test.png"
    stats = loader.stats()
    assert stats.images == 1
    assert stats.total == 1


def test_load_nonexistent_image(tmp_path):
    loader = AssetLoader(tmp_path)
    with pytest.raises(AssetError, match="Image file not found"):
        loader.load_image("nonexistent.png")


def test_asset_caching(tmp_path):
    (tmp_path / "cached.png").write_bytes(b"data")
    loader = AssetLoader(tmp_path)
    first = loader.load_image("cached.png")
    stats1 = loader.stats()
    second = loader.load_image("cached.png")
    stats2 = loader.stats()
    assert stats1.total == stats2.total
    assert stats2.total == 1
    assert first is second


def test_resolve_path_absolute(tmp_path):
    loader = AssetLoader("/base")
    absolute = tmp_path / "absolute" / "path.png"
    assert loader.resolve_path(absolute) == absolute


def test_resolve_path_relative():
    loader = AssetLoader("/base")
    assert loader.resolve_path(Path("relative/path.png")) == Path("/base/relative/path.png")


def test_load_video(tmp_path):
    (tmp_path / "test.mp4").write_bytes(b"fake video")
    loader = AssetLoader(tmp_path)
    video = loader.load_video("test.mp4")
    assert video.width == 1920
    assert video.height == 1080
    assert video.fps == 30.0
    assert video.duration == 10.0


def test_load_nonexistent_video(tmp_path):
    loader = AssetLoader(tmp_path)
    with pytest.raises(AssetError, match="Video file not found"):
        loader.load_video("missing.mp4")


def test_load_font(tmp_path):
    (tmp_path / "font.ttf").write_bytes(b"fake font data")
    loader = AssetLoader(tmp_path)
    font = loader.load_font("font.ttf")
    assert font.data == b"fake font data"
    stats = loader.stats()
    assert stats.fonts == 1
    assert stats.total == 1


def test_load_missing_font(tmp_path):
    loader = AssetLoader(tmp_path)
    with pytest.raises(AssetError, match="Failed to load font"):
        loader.load_font("missing.ttf")


def test_cached_asset_of_other_kind(tmp_path):
    (tmp_path / "thing.bin").write_bytes(b"x")
    loader = AssetLoader(tmp_path)
    loader.load_font("thing.bin")
    with pytest.raises(AssetError, match="not an image"):
        loader.load_image("thing.bin")
    with pytest.raises(AssetError, match="not a video"):
        loader.load_video("thing.bin")


def test_clear_assets(tmp_path):
    (tmp_path / "test.png").write_bytes(b"data")
    loader = AssetLoader(tmp_path)
    loader.load_image("test.png")
    assert loader.stats().total == 1
    loader.clear()
    assert loader.stats().total == 0


def test_asset_stats_display():
    display = str(AssetStats(total=10, images=5, videos=3, fonts=2))
    assert "Total: 10" in display
    assert "Images: 5" in display
    assert "Videos: 3" in display
    assert "Fonts: 2" in display