"""
Decoded audio tracks with looping transport.

A Track keeps its mono PCM samples for analysis and, when the pygame
mixer is running, a Sound for audible output. The play head is tracked
against a monotonic clock so analysis follows playback whether or not
an audio device is present.
"""

import time
from pathlib import Path
from typing import Callable, Union

import librosa
import numpy as np
import pygame

STOPPED = "stopped"
PLAYING = "playing"
PAUSED = "paused"


def make_sound(samples: np.ndarray, sample_rate: int) -> pygame.mixer.Sound | None:
    """
    Build a pygame Sound from mono float samples.

    Returns None when the mixer is not initialised.
    """
    mixer_info = pygame.mixer.get_init()
    if mixer_info is None:
        return None
    frequency, _, channels = mixer_info

    if frequency != sample_rate:
        samples = librosa.resample(samples, orig_sr=sample_rate, target_sr=frequency)

    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    if channels > 1:
        pcm = np.repeat(pcm[:, np.newaxis], channels, axis=1)
    return pygame.sndarray.make_sound(np.ascontiguousarray(pcm))


class Track:
    """One entry of the playlist."""

    def __init__(
        self,
        samples: np.ndarray,
        sample_rate: int,
        name: str = "track",
        sound: pygame.mixer.Sound | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize a track.

        Args:
            samples: Mono PCM samples in [-1, 1].
            sample_rate: Sample rate of `samples`.
            name: Display name.
            sound: Mixer sound for audible output, if any.
            clock: Monotonic time source in seconds.
        """
        self.samples = np.asarray(samples, dtype=np.float32)
        self.sample_rate = sample_rate
        self.name = name
        self.sound = sound
        self._clock = clock
        self._channel = None
        self._state = STOPPED
        self._offset = 0.0  # Seconds played before the current run
        self._started_at = 0.0

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        sample_rate: int = 44100,
    ) -> "Track":
        """Decode an audio file to mono samples at `sample_rate`."""
        path = Path(path)
        y, sr = librosa.load(path, sr=sample_rate, mono=True)
        return cls(y, sr, name=path.stem, sound=make_sound(y, sr))

    def __repr__(self) -> str:
        return f"Track({self.name!r}, {self.duration:.1f}s, {self._state})"

    @property
    def duration(self) -> float:
        return len(self.samples) / self.sample_rate

    @property
    def is_playing(self) -> bool:
        return self._state == PLAYING

    @property
    def is_paused(self) -> bool:
        return self._state == PAUSED

    @property
    def elapsed(self) -> float:
        """Seconds of playback since the last stop, not wrapped."""
        if self._state == PLAYING:
            return self._offset + (self._clock() - self._started_at)
        return self._offset

    @property
    def position(self) -> int:
        """Sample index of the play head; wraps because playback loops."""
        if len(self.samples) == 0:
            return 0
        return int(self.elapsed * self.sample_rate) % len(self.samples)

    def window(self, size: int) -> np.ndarray:
        """
        The `size` samples ending at the play head.

        Before the first pass reaches `size` samples the window is zero-padded
        at the front; once the track has looped it wraps around the end.
        """
        end = self.position
        start = end - size
        if start >= 0:
            return self.samples[start:end]
        if self.elapsed * self.sample_rate < len(self.samples):
            return np.pad(self.samples[:end], (-start, 0))
        return self.samples.take(np.arange(start, end), mode="wrap")

    @property
    def channel(self) -> pygame.mixer.Channel | None:
        """Mixer channel holding this track's sound, if any."""
        return self._channel

    def _start_sound(self):
        channel = self.sound.play(loops=-1)
        if channel is None:
            # Every channel is busy; take over the one that has played longest
            channel = pygame.mixer.find_channel(True)
            if channel is not None:
                channel.play(self.sound, loops=-1)
        self._channel = channel

    def _owns_channel(self) -> bool:
        return self._channel is not None and self._channel.get_sound() is self.sound

    def play_loop(self):
        """Resume if paused, otherwise start from the top and loop forever."""
        if self._state == PLAYING:
            return
        if self._state == PAUSED:
            if self._owns_channel():
                self._channel.unpause()
            elif self.sound is not None:
                # Our channel went to another track while paused
                self._offset = 0.0
                self._start_sound()
        else:
            self._offset = 0.0
            if self.sound is not None:
                self._start_sound()
        self._started_at = self._clock()
        self._state = PLAYING

    def pause(self):
        """Pause, keeping the play head."""
        if self._state != PLAYING:
            return
        self._offset = self.elapsed
        if self._owns_channel():
            self._channel.pause()
        self._state = PAUSED

    def stop(self):
        """Stop and rewind to the start."""
        if self._owns_channel():
            self._channel.stop()
        self._channel = None
        self._offset = 0.0
        self._state = STOPPED
