"""Decoding of WAV audio, mixing of tracks and export of the mix."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import NamedTuple

import numpy as np

FORMAT_PCM = 1
FORMAT_IEEE_FLOAT = 3
FORMAT_EXTENSIBLE = 0xFFFE


class AudioError(Exception):
    """Raised when audio cannot be decoded or written."""


class DecodedAudio(NamedTuple):
    """Interleaved 32-bit float samples with their rate and channel count."""

    samples: np.ndarray
    sample_rate: int
    channels: int


def _chunks(data: bytes):
    offset = 12
    while offset + 8 <= len(data):
        chunk_id, size = struct.unpack_from("<4sI", data, offset)
        yield chunk_id, data[offset + 8 : offset + 8 + size]
        offset += 8 + size + (size & 1)


def _pcm24(raw: bytes) -> np.ndarray:
    triples = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
    values = triples[:, 0] | (triples[:, 1] << 8) | (triples[:, 2] << 16)
    values = (values ^ 0x800000) - 0x800000
    return (values.astype(np.float64) / 8388608.0).astype(np.float32)


def _to_float(raw: bytes, tag: int, bits: int) -> np.ndarray:
    if tag == FORMAT_PCM:
        if bits == 8:
            values = np.frombuffer(raw, dtype=np.uint8).astype(np.float64)
            return ((values - 128.0) / 128.0).astype(np.float32)
        if bits == 16:
            values = np.frombuffer(raw, dtype="<i2").astype(np.float64)
            return (values / 32768.0).astype(np.float32)
        if bits == 24:
            return _pcm24(raw)
        if bits == 32:
            values = np.frombuffer(raw, dtype="<i4").astype(np.float64)
            return (values / 2147483648.0).astype(np.float32)
    elif tag == FORMAT_IEEE_FLOAT:
        if bits == 32:
            return np.frombuffer(raw, dtype="<f4").astype(np.float32)
        if bits == 64:
            return np.frombuffer(raw, dtype="<f8").astype(np.float32)
    raise AudioError("Unsupported codec")


def decode(path: str | PathLike[str]) -> DecodedAudio:
    """Decode a WAV file into interleaved float samples."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise AudioError(f"Failed to open audio file: {exc}") from exc
    if len(data) < 12 or data[:4] != b"RIFF" or data[8:12] != b"WAVE":
        raise AudioError("Unsupported audio format")

    fmt = body = None
    for chunk_id, chunk in _chunks(data):
        if chunk_id == b"fmt " and fmt is None:
            fmt = chunk
        elif chunk_id == b"data" and body is None:
            body = chunk
    if fmt is None or body is None or len(fmt) < 16:
        raise AudioError("No supported audio track found")

    tag, channels, sample_rate, _, _, bits = struct.unpack_from("<HHIIHH", fmt)
    if tag == FORMAT_EXTENSIBLE and len(fmt) >= 26:
        (tag,) = struct.unpack_from("<H", fmt, 24)
    if channels == 0:
        raise AudioError("No supported audio track found")
    if bits == 0 or bits % 8:
        raise AudioError("Unsupported codec")

    frame_bytes = channels * bits // 8
    usable = len(body) // frame_bytes * frame_bytes
    samples = _to_float(body[:usable], tag, bits)
    return DecodedAudio(samples, sample_rate, channels)


def _sample_count(value: np.float32) -> int:
    """Truncate a float to a non-negative count, saturating like an unsigned cast."""
    if np.isnan(value) or value <= 0:
        return 0
    return int(min(float(value), float(2**63 - 1)))


@dataclass
class _Track:
    samples: np.ndarray
    sample_rate: int
    channels: int
    start_time: float
    volume: float


class AudioMixer:
    """Mixes tracks into one interleaved buffer at a fixed output format."""

    def __init__(self, sample_rate: int, channels: int) -> None:
        if sample_rate < 1 or channels < 1:
            raise ValueError("sample rate and channel count must be positive")
        self.sample_rate = sample_rate
        self.channels = channels
        self._tracks: list[_Track] = []

    def add_track(
        self,
        samples: Sequence[float] | np.ndarray,
        sample_rate: int,
        channels: int,
        start_time: float = 0.0,
        volume: float = 1.0,
    ) -> None:
        if channels < 1:
            raise ValueError("a track needs at least one channel")
        self._tracks.append(
            _Track(np.asarray(samples, dtype=np.float32), sample_rate, channels, start_time, volume)
        )

    def mix(self, duration_seconds: float) -> np.ndarray:
        """Mix all tracks with nearest-neighbour resampling and tanh soft clipping."""
        out_channels = self.channels
        rate = np.float32(self.sample_rate)
        with np.errstate(over="ignore", invalid="ignore"):
            total = _sample_count(np.float32(duration_seconds) * rate) * out_channels
            mixed = np.zeros(total, dtype=np.float32)

            for track in self._tracks:
                start = _sample_count(np.float32(track.start_time) * rate) * out_channels
                if start >= total:
                    continue
                ratio = np.float32(track.sample_rate) / rate
                positions = np.arange(total - start, dtype=np.int64)
                frames = positions // out_channels
                if track.channels == 1:
                    in_channels = np.zeros_like(positions)
                else:
                    in_channels = (positions % out_channels) % track.channels
                count = len(track.samples)
                in_frames = (frames.astype(np.float32) * ratio).astype(np.float64)
                in_frames = np.minimum(np.nan_to_num(in_frames, nan=0.0), float(count))
                indices = in_frames.astype(np.int64) * track.channels + in_channels
                valid = indices < count
                segment = mixed[start:]
                segment[valid] += track.samples[indices[valid]] * np.float32(track.volume)

        return np.tanh(mixed)

    def export(self, path: str | PathLike[str], samples: Sequence[float] | np.ndarray) -> None:
        """Write samples as a 32-bit float WAV file."""
        payload = np.asarray(samples, dtype="<f4").tobytes()
        block_align = self.channels * 4
        fmt = struct.pack(
            "<HHIIHH",
            FORMAT_IEEE_FLOAT,
            self.channels,
            self.sample_rate,
            self.sample_rate * block_align,
            block_align,
            32,
        )
        header = (
            b"RIFF"
            + struct.pack("<I", 4 + 8 + len(fmt) + 8 + len(payload))
            + b"WAVE"
            + b"fmt "
            + struct.pack("<I", len(fmt))
            + fmt
            + b"data"
            + struct.pack("<I", len(payload))
        )
        try:
            with open(path, "wb") as handle:
                handle.write(header)
                handle.write(payload)
        except OSError as exc:
            raise AudioError(f"Failed to create WAV writer: {exc}") from exc