"""
Real-time spectrum analysis of the playing track.

The analyser follows the behaviour of a browser analyser node: a
Blackman-windowed FFT over the most recent samples, exponential
averaging between frames, and a decibel range mapped onto 0-255.
"""

import librosa
import numpy as np
from scipy import signal as scipy_signal

from songlines.config import SpectrumConfig


class SpectrumAnalyzer:
    """
    Turns a block of PCM samples into a byte-scaled magnitude spectrum.

    The FFT size is twice the number of output bins. Magnitudes are
    smoothed against the previous call before conversion to decibels,
    so consecutive frames from the same track blend together.
    """

    def __init__(self, config: SpectrumConfig | None = None):
        """
        Initialize the analyzer.

        Args:
            config: Analysis settings. Uses defaults if None.
        """
        self.config = config or SpectrumConfig()
        self.fft_size = self.config.bins * 2
        self.window = scipy_signal.get_window("blackman", self.fft_size)
        self._previous = np.zeros(self.config.bins)

    @property
    def bins(self) -> int:
        return self.config.bins

    def reset(self):
        """Forget the smoothing history."""
        self._previous = np.zeros(self.config.bins)

    def _frame(self, samples: np.ndarray) -> np.ndarray:
        """Take the last fft_size samples, zero-padding at the front."""
        samples = np.asarray(samples, dtype=np.float64)
        if len(samples) >= self.fft_size:
            return samples[-self.fft_size:]
        return np.pad(samples, (self.fft_size - len(samples), 0))

    def analyze(self, samples: np.ndarray) -> np.ndarray:
        """
        Compute one spectrum frame.

        Args:
            samples: Mono PCM samples ending at the play head.

        Returns:
            Array of `bins` magnitudes in [0, 255].
        """
        cfg = self.config

        frame = self._frame(samples) * self.window
        magnitude = np.abs(np.fft.rfft(frame))[: cfg.bins] / self.fft_size

        smoothed = cfg.smoothing * self._previous + (1.0 - cfg.smoothing) * magnitude
        self._previous = smoothed

        db = librosa.amplitude_to_db(smoothed, ref=1.0, amin=1e-10, top_db=None)
        scaled = (db - cfg.min_db) * (255.0 / (cfg.max_db - cfg.min_db))
        return np.floor(np.clip(scaled, 0.0, 255.0))


class SpectrumSource:
    """
    Spectrum analysis bound to whichever track is currently selected.

    Rebinding to another track clears the smoothing history so the new
    track does not inherit the previous one's spectrum.
    """

    def __init__(self, analyzer: SpectrumAnalyzer | None = None):
        self.analyzer = analyzer or SpectrumAnalyzer()
        self.track = None

    def set_input(self, track):
        """Bind the source to a track (or None to unbind)."""
        self.track = track
        self.analyzer.reset()

    @property
    def max_frequency(self) -> float:
        """Nyquist limit of the bound track."""
        if self.track is not None:
            return self.track.sample_rate / 2.0
        return self.analyzer.config.sample_rate / 2.0

    def analyze(self) -> np.ndarray:
        """Spectrum frame at the bound track's play head."""
        if self.track is None:
            return np.zeros(self.analyzer.bins)
        return self.analyzer.analyze(self.track.window(self.analyzer.fft_size))
