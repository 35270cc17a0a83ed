"""Pytest configuration and shared fixtures."""

import os

# pygame must never open a real window or audio device under test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from songlines.io.tracks import Track

# Default sample rate for test audio
TEST_SR = 44100


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def sample_rate() -> int:
    """Default sample rate for tests."""
    return TEST_SR


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def pure_sine(sample_rate: int) -> tuple[np.ndarray, int]:
    """
    Generate a pure 440Hz sine wave (A4 note).

    Returns:
        Tuple of (audio_signal, sample_rate).
    """
    duration = 2.0
    t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False)
    y = 0.5 * np.sin(2 * np.pi * 440.0 * t)
    return y.astype(np.float32), sample_rate


@pytest.fixture
def silence(sample_rate: int) -> tuple[np.ndarray, int]:
    """Two seconds of digital silence."""
    return np.zeros(int(sample_rate * 2.0), dtype=np.float32), sample_rate


@pytest.fixture
def c_major_chord(sample_rate: int) -> tuple[np.ndarray, int]:
    """
    Generate a C major chord (C4, E4, G4).

    Returns:
        Tuple of (audio_signal, sample_rate).
    """
    duration = 2.0
    t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False)
    y = (
        0.2 * np.sin(2 * np.pi * 261.63 * t) +  # C4
        0.2 * np.sin(2 * np.pi * 329.63 * t) +  # E4
        0.2 * np.sin(2 * np.pi * 392.00 * t)    # G4
    )
    return y.astype(np.float32), sample_rate


@pytest.fixture
def make_track(clock, sample_rate):
    """Factory for silent-output tracks driven by the fake clock."""

    def _make(name: str = "track", samples: np.ndarray | None = None, duration: float = 1.0) -> Track:
        if samples is None:
            samples = np.zeros(int(sample_rate * duration), dtype=np.float32)
        return Track(samples, sample_rate, name=name, clock=clock)

    return _make


@pytest.fixture
def temp_audio_file(tmp_path, pure_sine):
    """Create a temporary audio file for testing file I/O."""
    import soundfile as sf

    y, sr = pure_sine
    audio_path = tmp_path / "a4_sine.wav"
    sf.write(audio_path, y, sr)
    return audio_path


@pytest.fixture
def mixer(sample_rate):
    """Mixer on the dummy audio driver with its default eight channels."""
    try:
        pygame.mixer.init(frequency=sample_rate, size=-16, channels=2)
    except pygame.error as e:
        pytest.skip(f"mixer unavailable: {e}")
    yield pygame.mixer
    pygame.mixer.quit()
