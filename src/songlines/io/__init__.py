"""Track decoding and playback."""

from songlines.io.tracks import Track

__all__ = ["Track"]
