"""Audio decoding front end."""

from .wav_source import load_wav

__all__ = ["load_wav"]
