import struct
import wave

import numpy as np
import pytest

from reelforge.audio import AudioError, AudioMixer, DecodedAudio, decode


def test_export_decode_round_trip(tmp_path):
    mixer = AudioMixer(8000, 2)
    samples = np.array([0.5, -0.25, 0.125, 0.0], dtype=np.float32)
    path = tmp_path / "out.wav"
    mixer.export(path, samples)

    decoded = decode(path)
    assert decoded.sample_rate == 8000
    assert decoded.channels == 2
    np.testing.assert_array_equal(decoded.samples, samples)


def test_export_header_is_float_wav(tmp_path):
    path = tmp_path / "out.wav"
    AudioMixer(44100, 2).export(path, [0.0, 0.0])
    data = path.read_bytes()
    assert data[:4] == b"RIFF"
    assert data[8:12] == b"WAVE"
    tag, channels, rate = struct.unpack_from("<HHI", data, 20)
    assert tag == 3
    assert (channels, rate) == (2, 44100)


def test_decode_pcm16(tmp_path):
    path = tmp_path / "pcm.wav"
    with wave.open(str(path), "wb") as handle:
        handle.setnchannels(1)
        handle.setsampwidth(2)
        handle.setframerate(22050)
        handle.writeframes(struct.pack("<2h", 16384, -16384))
    samples, rate, channels = decode(path)
    assert rate == 22050
    assert channels == 1
    np.testing.assert_allclose(samples, [0.5, -0.5])


def test_decode_returns_named_tuple(tmp_path):
    path = tmp_path / "a.wav"
    AudioMixer(1000, 1).export(path, [0.25])
    decoded = decode(path)
    assert isinstance(decoded, DecodedAudio)
    assert decoded == (decoded.samples, 1000, 1)


def test_decode_missing_file(tmp_path):
    with pytest.raises(AudioError, match="Failed to open audio file"):
        decode(tmp_path / "missing.wav")


def test_decode_unsupported_format(tmp_path):
    path = tmp_path / "noise.mp3"
    path.write_bytes(b"not audio at all")
    with pytest.raises(AudioError, match="Unsupported audio format"):
        decode(path)


def test_mix_length(tmp_path):
    mixer = AudioMixer(10, 2)
    assert len(mixer.mix(1.0)) == 20


def test_mix_without_tracks_is_silent():
    mixer = AudioMixer(100, 2)
    mixed = mixer.mix(0.5)
    np.testing.assert_array_equal(mixed, np.zeros_like(mixed))
    assert len(mixed) % 2 == 0


def test_mix_mono_duplicates_into_all_channels():
    mixer = AudioMixer(10, 2)
    source = np.linspace(-0.8, 0.8, 10, dtype=np.float32)
    mixer.add_track(source, 10, 1, 0.0, 1.0)
    mixed = mixer.mix(1.0)
    left, right = mixed[0::2], mixed[1::2]
    np.testing.assert_array_equal(left, right)
    np.testing.assert_allclose(np.arctanh(left), source, rtol=1e-5, atol=1e-6)


def test_mix_output_is_soft_clipped():
    mixer = AudioMixer(10, 1)
    mixer.add_track(np.full(10, 5.0), 10, 1, 0.0, 1.0)
    mixer.add_track(np.full(10, 5.0), 10, 1, 0.0, 1.0)
    mixed = mixer.mix(1.0)
    assert np.all(np.abs(mixed) <= 1.0)
    assert np.all(mixed > 0.99)


def test_mix_volume_scales_track():
    mixer = AudioMixer(10, 1)
    source = np.full(10, 0.4, dtype=np.float32)
    mixer.add_track(source, 10, 1, 0.0, 0.5)
    mixed = mixer.mix(1.0)
    np.testing.assert_allclose(np.arctanh(mixed), source * 0.5, rtol=1e-5)


def test_mix_start_time_leaves_silence_before():
    mixer = AudioMixer(10, 1)
    mixer.add_track(np.full(20, 0.3), 10, 1, 0.5, 1.0)
    mixed = mixer.mix(1.0)
    half = len(mixed) // 2
    np.testing.assert_array_equal(mixed[:half], np.zeros(half, dtype=np.float32))
    assert np.all(mixed[half:] > 0)


def test_mix_downsamples_by_rate_ratio():
    mixer = AudioMixer(10, 1)
    source = np.linspace(0.0, 0.9, 20, dtype=np.float32)
    mixer.add_track(source, 20, 1, 0.0, 1.0)
    mixed = mixer.mix(1.0)
    np.testing.assert_allclose(np.arctanh(mixed), source[::2], rtol=1e-5, atol=1e-6)


def test_mix_stereo_track_keeps_channels():
    mixer = AudioMixer(10, 2)
    left = np.full(10, 0.2, dtype=np.float32)
    right = np.full(10, -0.6, dtype=np.float32)
    interleaved = np.column_stack([left, right]).ravel()
    mixer.add_track(interleaved, 10, 2, 0.0, 1.0)
    mixed = mixer.mix(1.0)
    np.testing.assert_allclose(np.arctanh(mixed[0::2]), left, rtol=1e-5)
    np.testing.assert_allclose(np.arctanh(mixed[1::2]), right, rtol=1e-5)


def test_mix_short_track_ends_in_silence():
    mixer = AudioMixer(10, 1)
    mixer.add_track(np.full(3, 0.5), 10, 1, 0.0, 1.0)
    mixed = mixer.mix(1.0)
    assert np.all(mixed[:3] > 0)
    np.testing.assert_array_equal(mixed[3:], np.zeros(len(mixed) - 3, dtype=np.float32))


def test_export_to_missing_directory(tmp_path):
    mixer = AudioMixer(100, 1)
    with pytest.raises(AudioError, match="Failed to create WAV writer"):
        mixer.export(tmp_path / "nope" / "out.wav", [0.0])


def test_invalid_channel_counts():
    with pytest.raises(ValueError):
        AudioMixer(100, 0)
    mixer = AudioMixer(100, 1)
    with pytest.raises(ValueError):
        mixer.add_track([0.0], 100, 0, 0.0, 1.0)