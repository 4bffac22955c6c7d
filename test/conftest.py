from __future__ import annotations

import sys
import wave
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
ROOT_STR = str(ROOT)
if ROOT_STR not in sys.path:
    sys.path.insert(0, ROOT_STR)

from test.fixtures.signal_generators import burst_times, make_pcm16, make_shot_train  # noqa: E402


@pytest.fixture
def burst_wav(tmp_path):
    """A 1.5 s, 8 kHz mono WAV holding one clean 6-shot burst at 600 RPM."""
    sample_rate = 8000
    signal, _ = make_shot_train(burst_times(0.3, 6, 600.0), 1.5, sample_rate)
    path = tmp_path / "burst.wav"
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(make_pcm16(signal))
    return path
