"""Frame-by-frame rendering of a video script."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

from .assets import AssetLoader
from .compositor import apply_transform, draw_text_placeholder, fill_rect
from .frame_buffer import FrameBuffer
from .script import ImageLayer, Layer, TextLayer, VideoLayer, VideoScript
from .timeline import Timeline

BACKGROUND = (0, 0, 0, 255)
IMAGE_COLOR = (100, 100, 200, 255)
VIDEO_COLOR = (200, 100, 100, 255)
PLACEHOLDER_SIZE = 100
PROGRESS_INTERVAL = 30


class RenderEngine:
    """Renders a script's frames into a frame buffer and saves them as PPM files."""

    def __init__(self, script: VideoScript) -> None:
        width, height = script.metadata.resolution.dimensions()
        self.script = script
        self.timeline = Timeline.from_script(script)
        self.frame_buffer = FrameBuffer(width, height)
        print("ℹ️  Using CPU rendering")

    def render_frame(self, frame_number: int, asset_loader: AssetLoader | None = None) -> None:
        """Draw the scene showing at the given frame into the frame buffer."""
        self.frame_buffer.clear(BACKGROUND)
        scene_id = self.timeline.scene_at_frame(frame_number)
        if scene_id is None:
            return
        scene = next((s for s in self.script.scenes if s.id == scene_id), None)
        if scene is None:
            return
        for layer in scene.layers:
            self._render_layer(layer)

    def _render_layer(self, layer: Layer) -> None:
        if isinstance(layer, (ImageLayer, VideoLayer)):
            x, y = apply_transform(0, 0, layer.transform)
            color = IMAGE_COLOR if isinstance(layer, ImageLayer) else VIDEO_COLOR
            fill_rect(self.frame_buffer, x, y, PLACEHOLDER_SIZE, PLACEHOLDER_SIZE, color)
        elif isinstance(layer, TextLayer):
            draw_text_placeholder(
                self.frame_buffer,
                layer.content,
                layer.position.x,
                layer.position.y,
                layer.color.rgba(),
            )

    def save_frame(self, path: str | PathLike[str]) -> None:
        """Write the current frame as a PPM image."""
        self.frame_buffer.save_ppm(path)

    def render(self, output_dir: str | PathLike[str], asset_loader: AssetLoader | None = None) -> None:
        """Render every frame of the timeline to output_dir/frame_<n>.ppm."""
        output_dir = Path(output_dir)
        total = self.timeline.total_frames
        for frame in range(total):
            if frame % PROGRESS_INTERVAL == 0:
                print(f"  Rendering frame {frame}/{total}")
            self.render_frame(frame, asset_loader)
            self.save_frame(output_dir / f"frame_{frame}.ppm")