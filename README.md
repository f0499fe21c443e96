# reelforge

reelforge turns a JSON video script into a sequence of rendered frames. It can also produce a mixed audio track and a final video. The script lists scenes, the layers in each scene (images, videos, text) and optional audio tracks.

The `reelforge` command works through a script in these steps:

1. It parses and validates the script.
2. It loads the assets the layers refer to.
3. It renders every frame as a PPM image.
4. It mixes the audio tracks into one WAV file.
5. It encodes frames and audio into a video with `ffmpeg`, if `ffmpeg` can be run.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Command line

```
reelforge path/to/script.json
```

With no argument the command reads `examples/simple.json`. If the script file does not exist, the command prints a note and exits with status 0.

Otherwise it prints the following as it works:

- a summary of the script
- the result of loading each asset
- rendering progress every 30 frames
- at the end, asset statistics

It writes these files:

- Frames go to `output/frame_<n>.ppm`. The `output` directory is created in the current directory.
- The mixed audio goes to `output/audio.wav`.
- When `ffmpeg` is available, the video goes to `output.mp4`, encoded with libx264 and AAC audio.

Asset and audio paths in the script are resolved relative to the script's directory.

The command exits with status 1 in these cases:

- the script cannot be read
- the script cannot be decoded
- the script fails validation
- encoding fails

## Script format

```json
{
  "metadata": {
    "title": "My Video",
    "resolution": "1920x1080",
    "fps": 30,
    "duration": 5.0
  },
  "scenes": [
    {
      "id": "intro",
      "duration": 5.0,
      "layers": [
        {"type": "image", "source": "bg.png",
         "transform": {"position": {"x": 10, "y": 20}}},
        {"type": "text", "content": "Hello", "font": "font.ttf",
         "font_size": 24.0, "color": {"r": 255, "g": 255, "b": 255}}
      ],
      "transition": {"fade": {"duration": 0.5}}
    }
  ],
  "audio": {"tracks": [{"source": "music.wav", "volume": 0.8, "start_time": 0.0}]}
}
```

### Metadata

- `resolution` is either a `"WIDTHxHEIGHT"` string or an object `{"width": ..., "height": ...}`. A string that cannot be read falls back to 1920x1080.
- `description` is optional.

### Layers

- **`image` and `video` layers** take a `source`, an optional `effects` list and an optional `transform`. A `transform` has a `position`, a `scale`, a `rotation` and an `opacity`. Scale and opacity default to 1.
- **`text` layers** take these fields:
  - required: `content`, `font`, `font_size` and `color` (`r`, `g`, `b`, with an optional `a` that defaults to 255)
  - optional: `position` and `effects`

### Effects and transitions

- **Effects:**
  - `"fade_in"`
  - `"fade_out"`
  - `{"blur": {"radius": ...}}`
  - `{"color_grade": {"adjustment": "..."}}`
- **Transitions:**
  - `"cut"`
  - `{"fade": {"duration": ...}}`
  - `{"dissolve": {"duration": ...}}`
  - `{"wipe": {"duration": ..., "direction": "..."}}`

### Audio tracks

Audio tracks take these fields:

- `source`
- `track_type`: `music`, `voiceover` or `sound_effect`; the default is `music`
- `volume`: the default is 1.0
- `start_time`: in seconds; the default is 0

### Validation

Validation rejects a script in any of these cases:

- the title is empty
- `fps` is zero
- the metadata duration or a scene duration is not positive
- there are no scenes
- a scene has an empty id
- a scene has no layers

If the scene durations differ from the metadata duration by more than 0.1 s, a warning is printed to stderr and the script is still accepted.

## Library use

```python
from pathlib import Path

from reelforge.parser import parse_json, summarize
from reelforge.assets import AssetLoader
from reelforge.engine import RenderEngine

script = parse_json("examples/simple.json")
print(summarize(script))

loader = AssetLoader("examples")
engine = RenderEngine(script)
Path("output").mkdir(exist_ok=True)
engine.render("output", loader)
```

### Modules

- **`reelforge.script`** holds the script's data model: frozen dataclasses `VideoScript`, `Scene`, `ImageLayer`, `VideoLayer`, `TextLayer` and the rest.
  - `VideoScript.from_json` and `VideoScript.from_dict` decode a script.
  - Malformed data raises `ScriptFormatError`.
- **`reelforge.parser`** works on whole scripts.
  - `parse_json` reads a file and validates it.
  - `validate_script` checks a script.
  - `summarize` returns a text summary.
  - Failures raise `ScriptError`.
- **`reelforge.timeline`**: `Timeline.from_script` maps frames to scenes.
  - `scene_at_frame` returns the scene id at a frame.
  - `frame_to_time` converts a frame number to seconds.
  - `total_frames` is the frame count.
- **`reelforge.frame_buffer`**: `FrameBuffer` is an RGBA image.
  - `set_pixel`, `get_pixel` and `blend_pixel` work on single pixels.
  - `clear` fills every pixel with one colour.
  - `as_bytes` and `copy_from` give and replace the raw bytes.
  - `save_ppm` writes a binary PPM file.
- **`reelforge.compositor`** draws onto a frame buffer.
  - `fill_rect` fills a clipped rectangle.
  - `draw_text_placeholder` draws the placeholder block for text.
  - `apply_transform` applies a transform's position offset.
- **`reelforge.assets`**: `AssetLoader` resolves paths against a base directory and caches the loaded assets.
  - `load_image`, `load_video` and `load_font` load the three asset kinds.
  - `stats` counts the cached assets by kind.
  - `clear` empties the cache.
  - Failures raise `AssetError`.
- **`reelforge.audio`** handles audio.
  - `decode` reads a WAV file into interleaved float32 samples. It supports PCM at 8, 16, 24 and 32 bits and IEEE float at 32 and 64 bits.
  - `AudioMixer` mixes tracks with nearest-neighbour resampling and tanh soft clipping. A mono track is spread over all output channels.
  - `AudioMixer.export` writes a 32-bit float WAV file.
  - Failures raise `AudioError`.
- **`reelforge.engine`**: `RenderEngine` renders frames.
  - `render_frame` draws one frame into the engine's buffer.
  - `save_frame` writes the current frame.
  - `render` writes all frames into an existing directory.
- **`reelforge.encoder`** drives `ffmpeg`.
  - `is_available` reports whether `ffmpeg` can be started.
  - `build_command` returns the `ffmpeg` argument list.
  - `encode` runs it.
  - Failures raise `EncoderError`.

## What it does not do

- **No real media.** Image and video files are not decoded: the loader only checks that the files exist. Every image and video is given placeholder properties: 1920x1080, plus 30 fps and 10 s for videos. Font files are read as raw bytes only.
- **Placeholder rendering.** Each image layer is drawn as a 100×100 blue-grey block, and each video layer as a reddish block. Text is drawn as a solid 16-pixel-high block in the text colour, 8 pixels wide per byte of text and at most 200 pixels wide. No glyphs are rendered.
- **Transforms only move layers.** Only the position of a transform is applied; scale, rotation and opacity are ignored.
- **Effects and transitions are not applied.** They are parsed and validated, and nothing more.
- **WAV audio only.** Audio decoding reads WAV files only. Other formats are rejected, so those tracks are skipped with a warning.
- **No built-in encoder.** Without an `ffmpeg` executable the command stops after writing frames and audio.
- **CPU only.** All rendering runs on the CPU.