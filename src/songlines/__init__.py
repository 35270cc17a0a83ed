"""Audio-reactive generative circle sketches."""

from songlines.core.animation import AnimationState, EnergyMapper
from songlines.core.bands import band_energy, band_to_bins, note_energies
from songlines.core.spectrum import SpectrumAnalyzer, SpectrumSource
from songlines.player import PlaybackController

__version__ = "0.1.0"
__all__ = [
    "AnimationState",
    "EnergyMapper",
    "band_energy",
    "band_to_bins",
    "note_energies",
    "SpectrumAnalyzer",
    "SpectrumSource",
    "PlaybackController",
]
