from pathlib import Path

import pytest

from reelforge.script import (
    AudioTrack,
    AudioTrackType,
    Color,
    Effect,
    EffectKind,
    ImageLayer,
    Metadata,
    Position,
    Resolution,
    Scene,
    ScriptFormatError,
    TextLayer,
    Transform,
    Transition,
    TransitionKind,
    VideoLayer,
    VideoScript,
    parse_layer,
)

SCRIPT_JSON = """
{
    "metadata": {
        "title": "Test Video",
        "resolution": "1920x1080",
        "fps": 60,
        "duration": 10.0
    },
    "scenes": [
        {
            "id": "scene1",
            "duration": 5.0,
            "layers": [
                {
                    "type": "image",
                    "source": "test.png"
                }
            ]
        }
    ]
}
"""


def test_resolution_parsing():
    assert Resolution(name="1920x1080").dimensions() == (1920, 1080)
    assert Resolution(width=1280, height=720).dimensions() == (1280, 720)


@pytest.mark.parametrize("name", ["invalid", "1920", ""])
def test_resolution_invalid_format(name):
    assert Resolution(name=name).dimensions() == (1920, 1080)


def test_resolution_parts_fall_back_independently():
    assert Resolution(name="abcx720").dimensions() == (1920, 720)
    assert Resolution(name="640xzz").dimensions() == (640, 1080)
    assert Resolution(name="-5x-5").dimensions() == (1920, 1080)


def test_resolution_from_json():
    assert Resolution.from_json("1280x720") == Resolution(name="1280x720")
    assert Resolution.from_json({"width": 800, "height": 600}).dimensions() == (800, 600)
    with pytest.raises(ScriptFormatError):
        Resolution.from_json(1080)
    with pytest.raises(ScriptFormatError):
        Resolution.from_json({"width": 800})


def test_resolution_requires_one_form():
    with pytest.raises(ValueError):
        Resolution()
    with pytest.raises(ValueError):
        Resolution(name="1x1", width=1, height=1)


def test_script_deserialization():
    script = VideoScript.from_json(SCRIPT_JSON)
    assert script.metadata.title == "Test Video"
    assert len(script.scenes) == 1
    assert script.metadata.fps == 60
    assert script.audio is None
    assert script.scenes[0].layers[0] == ImageLayer(source=Path("test.png"))


def test_transform_defaults():
    transform = Transform.from_dict({})
    assert transform.scale == 1.0
    assert transform.opacity == 1.0
    assert transform.rotation == 0.0
    assert transform.position == Position(0, 0)


def test_transform_with_values():
    transform = Transform.from_dict({"position": {"x": -3, "y": 7}, "scale": 2, "opacity": 0.5})
    assert transform == Transform(position=Position(-3, 7), scale=2.0, rotation=0.0, opacity=0.5)


def test_layer_deserialization():
    assert isinstance(parse_layer({"type": "image", "source": "test.png"}), ImageLayer)
    assert isinstance(parse_layer({"type": "video", "source": "test.mp4"}), VideoLayer)
    text = parse_layer(
        {
            "type": "text",
            "content": "Hello",
            "font": "font.ttf",
            "font_size": 24.0,
            "color": {"r": 255, "g": 255, "b": 255},
        }
    )
    assert isinstance(text, TextLayer)
    assert text.content == "Hello"
    assert text.font == Path("font.ttf")
    assert text.position == Position(0, 0)
    assert text.color.rgba() == (255, 255, 255, 255)


def test_layer_errors():
    with pytest.raises(ScriptFormatError, match="type"):
        parse_layer({"source": "x.png"})
    with pytest.raises(ScriptFormatError, match="unknown type"):
        parse_layer({"type": "shape"})
    with pytest.raises(ScriptFormatError, match="source"):
        parse_layer({"type": "image"})


def test_audio_track_defaults():
    track = AudioTrack.from_dict({"source": "music.mp3"})
    assert track.volume == 1.0
    assert track.start_time == 0.0
    assert track.track_type is AudioTrackType.MUSIC
    assert track.source == Path("music.mp3")


def test_audio_track_type_parsing():
    track = AudioTrack.from_dict({"source": "fx.wav", "track_type": "sound_effect", "volume": 0.3})
    assert track.track_type is AudioTrackType.SOUND_EFFECT
    assert track.volume == pytest.approx(0.3)
    with pytest.raises(ScriptFormatError):
        AudioTrack.from_dict({"source": "a.wav", "track_type": "noise"})


def test_color_defaults_and_range():
    assert Color.from_dict({"r": 1, "g": 2, "b": 3}).rgba() == (1, 2, 3, 255)
    with pytest.raises(ScriptFormatError):
        Color.from_dict({"r": 256, "g": 0, "b": 0})


def test_effects():
    assert Effect.from_json("fade_in") == Effect(EffectKind.FADE_IN)
    assert Effect.from_json({"blur": {"radius": 2.5}}) == Effect(EffectKind.BLUR, radius=2.5)
    grade = Effect.from_json({"color_grade": {"adjustment": "warm"}})
    assert grade.adjustment == "warm"
    with pytest.raises(ScriptFormatError):
        Effect.from_json("sparkle")
    with pytest.raises(ScriptFormatError):
        Effect.from_json("blur")


def test_transitions():
    assert Transition.from_json("cut") == Transition(TransitionKind.CUT)
    wipe = Transition.from_json({"wipe": {"duration": 1.0, "direction": "left"}})
    assert wipe == Transition(TransitionKind.WIPE, duration=1.0, direction="left")
    with pytest.raises(ScriptFormatError):
        Transition.from_json({"wipe": {"duration": 1.0}})


def test_scene_with_transition():
    scene = Scene.from_dict(
        {
            "id": "s",
            "duration": 2,
            "layers": [{"type": "image", "source": "a.png"}],
            "transition": {"fade": {"duration": 0.5}},
        }
    )
    assert scene.transition == Transition(TransitionKind.FADE, duration=0.5)
    assert scene.duration == 2.0


def test_metadata_errors():
    with pytest.raises(ScriptFormatError, match="title"):
        Metadata.from_dict({"resolution": "1x1", "fps": 30, "duration": 1.0})
    with pytest.raises(ScriptFormatError):
        Metadata.from_dict({"title": "t", "resolution": "1x1", "fps": 30.5, "duration": 1.0})
    with pytest.raises(ScriptFormatError):
        Metadata.from_dict({"title": "t", "resolution": "1x1", "fps": -1, "duration": 1.0})


def test_from_json_rejects_bad_text():
    with pytest.raises(ScriptFormatError):
        VideoScript.from_json("{not json")
    with pytest.raises(ScriptFormatError):
        VideoScript.from_json("[]")