"""Core audio-to-animation modules."""

from songlines.core.animation import AnimationState, EnergyMapper
from songlines.core.bands import band_energy, band_to_bins
from songlines.core.spectrum import SpectrumAnalyzer, SpectrumSource

__all__ = ["AnimationState", "EnergyMapper", "band_energy", "band_to_bins", "SpectrumAnalyzer", "SpectrumSource"]
