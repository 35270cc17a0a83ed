"""
Playlist transport control.

Play/pause toggles the current track; next/previous fully stop it,
move the cursor with wraparound and start the new track looping.
"""

from typing import Sequence

from songlines.core.spectrum import SpectrumSource

PLAY_LABEL = "Play"
PAUSE_LABEL = "Pause"


class PlaybackController:
    """
    Owns the playlist cursor and keeps the spectrum source bound to the
    current track.

    Every operation on an empty playlist is a no-op.
    """

    def __init__(
        self,
        tracks: Sequence,
        source: SpectrumSource | None = None,
    ):
        """
        Initialize the controller.

        Args:
            tracks: Ordered playlist. Tracks need play_loop(), pause(),
                stop() and is_playing.
            source: Spectrum source to rebind on track changes.
        """
        self._tracks = list(tracks)
        self._index = 0
        self.source = source or SpectrumSource()
        self.label = PLAY_LABEL

        if self._tracks:
            self.source.set_input(self.current_track)

    @property
    def tracks(self) -> tuple:
        return tuple(self._tracks)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current_track(self):
        if not self._tracks:
            return None
        return self._tracks[self._index]

    @property
    def is_playing(self) -> bool:
        track = self.current_track
        return track is not None and track.is_playing

    def toggle_play(self):
        """Pause the current track if playing, otherwise start it looping."""
        track = self.current_track
        if track is None:
            return

        if track.is_playing:
            track.pause()
            self.label = PLAY_LABEL
        else:
            track.play_loop()
            self.label = PAUSE_LABEL

    def next(self):
        """Switch to the following track, wrapping past the end."""
        self._step(1)

    def previous(self):
        """Switch to the preceding track, wrapping before the start."""
        self._step(-1)

    def _step(self, offset: int):
        if not self._tracks:
            return

        track = self.current_track
        if track.is_playing:
            track.stop()

        count = len(self._tracks)
        self._index = (self._index + offset + count) % count

        track = self.current_track
        self.source.set_input(track)
        track.play_loop()
        self.label = PAUSE_LABEL
