"""Render JSON video scripts into PPM frames, a mixed WAV track and an ffmpeg-encoded video."""

__version__ = "0.1.0"