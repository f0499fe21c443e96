"""Command line entry point: parse a script, load assets, render, mix and encode."""

from __future__ import annotations

import sys
from pathlib import Path

from . import encoder
from .assets import AssetError, AssetLoader
from .audio import AudioError, AudioMixer, decode
from .engine import RenderEngine
from .parser import ScriptError, parse_json, summarize
from .script import ImageLayer, TextLayer, VideoLayer, VideoScript

DEFAULT_SCRIPT = "examples/simple.json"
OUTPUT_DIR = Path("output")
OUTPUT_VIDEO = Path("output.mp4")
MIX_SAMPLE_RATE = 44100
MIX_CHANNELS = 2


def _load_assets(script: VideoScript, loader: AssetLoader) -> None:
    print("\n🎨 Loading assets...")
    for scene in script.scenes:
        for layer in scene.layers:
            try:
                if isinstance(layer, ImageLayer):
                    image = loader.load_image(layer.source)
                    print(f"  ✓ Loaded image: {layer.source} ({image.width}x{image.height})")
                elif isinstance(layer, VideoLayer):
                    video = loader.load_video(layer.source)
                    print(
                        f"  ✓ Loaded video: {layer.source} "
                        f"({video.width}x{video.height}@{video.fps:g}fps)"
                    )
                elif isinstance(layer, TextLayer):
                    loader.load_font(layer.font)
                    print(f"  ✓ Loaded font: {layer.font}")
            except AssetError as exc:
                if isinstance(layer, TextLayer):
                    print(f"  ✗ Failed to load font {layer.font}: {exc}")
                else:
                    kind = "image" if isinstance(layer, ImageLayer) else "video"
                    print(f"  ✗ Failed to load {kind} {layer.source}: {exc}")


def _mix_audio(script: VideoScript, base_path: Path) -> Path | None:
    if script.audio is None:
        return None
    print("\n🎵 Processing audio...")
    mixer = AudioMixer(MIX_SAMPLE_RATE, MIX_CHANNELS)
    for track in script.audio.tracks:
        print(f"  Loading track: {track.source}")
        track_path = track.source if track.source.is_absolute() else base_path / track.source
        try:
            samples, rate, channels = decode(track_path)
        except AudioError as exc:
            print(f"  ⚠️  Failed to load audio track: {exc}")
            continue
        mixer.add_track(samples, rate, channels, track.start_time, track.volume)

    mixed = mixer.mix(script.metadata.duration)
    output_audio = OUTPUT_DIR / "audio.wav"
    try:
        mixer.export(output_audio, mixed)
    except AudioError as exc:
        print(f"  ⚠️  Failed to export mixed audio: {exc}")
        return None
    print(f"  ✓ Mixed audio exported to: {output_audio}")
    return output_audio


def _run(script_path: Path) -> None:
    print(f"Parsing script: {script_path}")
    script = parse_json(script_path)

    print("\n📋 Script Summary:")
    print(summarize(script))

    base_path = script_path.parent
    loader = AssetLoader(base_path)
    _load_assets(script, loader)

    print("\n🎬 Rendering frames...")
    OUTPUT_DIR.mkdir(exist_ok=True)
    engine = RenderEngine(script)
    engine.render(OUTPUT_DIR, loader)

    audio_path = _mix_audio(script, base_path)

    if encoder.is_available():
        width, height = script.metadata.resolution.dimensions()
        encoder.encode(
            str(OUTPUT_DIR / "frame_%d.ppm"),
            OUTPUT_VIDEO,
            script.metadata.fps,
            width,
            height,
            audio_path,
        )
        print(f"✨ Video created successfully: {OUTPUT_VIDEO}")
    else:
        print("⚠️  FFmpeg not found. Skipping video encoding.")
        print(f"   Frames are saved in: {OUTPUT_DIR}")

    print("\n📊 Asset Statistics:")
    print(f"  {loader.stats()}")


def main(argv: list[str] | None = None) -> int:
    """Run the pipeline on the script named by the first argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    script_path = Path(args[0] if args else DEFAULT_SCRIPT)
    print("🎬 Video Engine - Digital Artisan PoC\n")

    if not script_path.exists():
        print(f"ℹ️  No example script found at {script_path}")
        print("   Create an example script to test the engine.")
        print(f"\n💡 See {DEFAULT_SCRIPT} for reference format")
        return 0

    try:
        _run(script_path)
    except (ScriptError, encoder.EncoderError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())