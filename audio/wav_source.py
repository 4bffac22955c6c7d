# audio/wav_source.py
"""Decode PCM WAV files into a mono, normalized SampleSequence."""

from __future__ import annotations

import logging
import wave
from pathlib import Path
from typing import Union

import numpy as np

from shared.models import SampleSequence

logger = logging.getLogger(__name__)


def decode_pcm(raw_bytes: bytes, sample_width: int, n_channels: int) -> np.ndarray:
    """
    Convert raw little-endian PCM bytes to a float64 (frames, channels) array in [-1, 1].

    Handles 8-bit unsigned, 16-bit signed, 24-bit signed and 32-bit signed PCM.
    """
    if n_channels <= 0:
        raise ValueError("n_channels must be positive")
    if sample_width not in (1, 2, 3, 4):
        raise ValueError(f"Unsupported sample width: {sample_width} bytes")
    # Drop a trailing partial sample, if any
    raw_bytes = raw_bytes[: len(raw_bytes) - len(raw_bytes) % sample_width]

    if sample_width == 1:  # 8-bit unsigned
        data = np.frombuffer(raw_bytes, dtype=np.uint8)
        data = (data.astype(np.float64) - 128.0) / 128.0
    elif sample_width == 2:  # 16-bit signed
        data = np.frombuffer(raw_bytes, dtype="<i2").astype(np.float64) / 32768.0
    elif sample_width == 3:  # 24-bit signed
        raw_arr = np.frombuffer(raw_bytes, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        # Little-endian: byte 0 is LSB, byte 2 is MSB
        values = raw_arr[:, 0] | (raw_arr[:, 1] << 8) | (raw_arr[:, 2] << 16)
        values = np.where(values & 0x800000, values - 0x1000000, values)
        data = values.astype(np.float64) / 8388608.0  # 2^23
    else:  # 32-bit signed
        data = np.frombuffer(raw_bytes, dtype="<i4").astype(np.float64) / 2147483648.0  # 2^31

    frames = data.size // n_channels
    return data[: frames * n_channels].reshape((frames, n_channels))


def to_mono(frames: np.ndarray) -> np.ndarray:
    """Average all channels of a (frames, channels) array into one."""
    if frames.ndim == 1:
        return frames
    if frames.shape[1] == 1:
        return frames[:, 0]
    return frames.mean(axis=1)


def load_wav(path: Union[str, Path]) -> SampleSequence:
    """Read a PCM WAV file and return its mono downmix.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not a readable PCM WAV file.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    try:
        with wave.open(str(path), "rb") as wav:
            n_channels = wav.getnchannels()
            sample_rate = wav.getframerate()
            sample_width = wav.getsampwidth()
            n_frames = wav.getnframes()
            raw = wav.readframes(n_frames)
    except (wave.Error, EOFError) as exc:
        raise ValueError(f"Failed to open WAV file {path}: {exc}") from exc

    logger.info(
        "Opened WAV file: %s (%d channels, %d Hz, %d-bit, %d frames)",
        path.name,
        n_channels,
        sample_rate,
        sample_width * 8,
        n_frames,
    )
    frames = decode_pcm(raw, sample_width, n_channels)
    if n_channels > 1:
        logger.debug("Downmixing %d channels to mono", n_channels)
    return SampleSequence(samples=to_mono(frames), sample_rate=sample_rate)


__all__ = ["decode_pcm", "to_mono", "load_wav"]
