"""
Note band mapping and energy aggregation.

Converts a note's frequency interval into spectrum bin indices and
reduces the magnitudes in that range to a single energy value.
"""

import math
from typing import Iterable

import numpy as np

from songlines.config import NoteBand


def band_to_bins(
    band: NoteBand,
    max_frequency: float,
    spectrum_length: int,
) -> tuple[int, int]:
    """
    Convert a note band in Hz to an inclusive spectrum index range.

    Args:
        band: Note band with low/high edges in Hz.
        max_frequency: Highest representable frequency (the Nyquist limit).
        spectrum_length: Number of bins in the spectrum.

    Returns:
        (idx_low, idx_high), both clamped to [0, spectrum_length - 1].
        A band with low > high collapses to the single bin idx_low.
    """
    last = max(spectrum_length - 1, 0)
    bin_size = max_frequency / max(spectrum_length, 1)

    idx_low = min(max(math.floor(band.low / bin_size), 0), last)
    idx_high = min(max(math.floor(band.high / bin_size), 0), last)

    if idx_high < idx_low:
        idx_high = idx_low

    return idx_low, idx_high


def band_energy(spectrum: np.ndarray, idx_low: int, idx_high: int) -> float:
    """
    Mean magnitude over the inclusive range [idx_low, idx_high].

    Averaging rather than peak-picking damps single-bin spikes.
    Returns 0.0 when the range selects nothing.
    """
    values = np.asarray(spectrum)[idx_low:idx_high + 1]
    if values.size == 0:
        return 0.0
    return float(values.mean())


def note_energies(
    spectrum: np.ndarray,
    bands: Iterable[NoteBand],
    max_frequency: float,
) -> dict[str, float]:
    """Energy per note name for one spectrum frame."""
    length = len(spectrum)
    energies = {}
    for band in bands:
        if length == 0:
            energies[band.name] = 0.0
            continue
        idx_low, idx_high = band_to_bins(band, max_frequency, length)
        energies[band.name] = band_energy(spectrum, idx_low, idx_high)
    return energies
