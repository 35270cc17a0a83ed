"""
Frame orchestration for the Songlines sketch.

Ties playback, spectrum analysis, note energy and circle animation
together and runs the pygame loop.
"""

from typing import Sequence

import numpy as np
import pygame

from songlines.config import NOTE_BANDS, SketchConfig
from songlines.core.animation import EnergyMapper
from songlines.core.bands import note_energies
from songlines.core.spectrum import SpectrumAnalyzer, SpectrumSource
from songlines.layout import build_layout
from songlines.player import PlaybackController
from songlines.visualizers.circles import CircleRenderer


class Sketch:
    """
    Owns every piece of sketch state for the lifetime of the window.

    Control actions are applied from the event queue before update(),
    so they never interleave with a frame.
    """

    def __init__(
        self,
        tracks: Sequence,
        config: SketchConfig | None = None,
        seed: int | None = None,
    ):
        """
        Initialize the sketch.

        Args:
            tracks: Playlist in order.
            config: Sketch configuration. Uses defaults if None.
            seed: Seed for layout and texture randomness.
        """
        self.config = config or SketchConfig()
        self.size = self.config.size
        rng = np.random.default_rng(seed)

        self.layout = build_layout(
            self.size,
            rng=rng,
            config=self.config.layout,
            animation=self.config.animation,
        )
        self.source = SpectrumSource(SpectrumAnalyzer(self.config.spectrum))
        self.controller = PlaybackController(tracks, self.source)
        self.mapper = EnergyMapper(self.config.animation)
        self.renderer = CircleRenderer(
            self.config.layout,
            seed=int(rng.integers(2**31)),
            debug=self.config.debug,
        )
        self.running = False

    def update(self) -> dict[str, float]:
        """
        Advance one frame of audio-reactive animation.

        Returns:
            Note energies used this frame (empty when nothing plays).
        """
        energies = {}
        notes = self.layout.note_elements

        if self.controller.is_playing:
            spectrum = self.source.analyze()
            energies = note_energies(spectrum, NOTE_BANDS, self.source.max_frequency)
            for element in notes:
                self.mapper.apply(element, energies[element.note.name])
        else:
            for element in notes:
                self.mapper.hold(element)

        for element in notes:
            element.animation.advance()

        return energies

    def status(self) -> str:
        track = self.controller.current_track
        if track is None:
            return "No tracks loaded"
        count = len(self.controller.tracks)
        return (
            f"[{self.controller.label}]  {self.controller.index + 1}/{count}  {track.name}"
            "   space: play/pause  ←/→: previous/next"
        )

    def resize(self, width: int, height: int):
        """Keep the canvas square and reposition the circles."""
        self.size = min(width, height)
        self.layout.resize(self.size)

    def handle_event(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.VIDEORESIZE:
            self.resize(event.w, event.h)
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.running = False
            elif event.key == pygame.K_SPACE:
                self.controller.toggle_play()
            elif event.key in (pygame.K_RIGHT, pygame.K_n):
                self.controller.next()
            elif event.key in (pygame.K_LEFT, pygame.K_p):
                self.controller.previous()

    def run(self):
        """Open the window and loop until closed."""
        size = self.size
        screen = pygame.display.set_mode((size, size), pygame.RESIZABLE)
        pygame.display.set_caption("Songlines")
        clock = pygame.time.Clock()

        if self.config.autoplay:
            self.controller.toggle_play()

        self.running = True
        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)

            self.update()

            size = self.size
            if screen.get_size() != (size, size):
                screen = pygame.display.set_mode((size, size), pygame.RESIZABLE)
            self.renderer.render(screen, self.layout, self.status())
            pygame.display.flip()
            clock.tick(self.config.fps)

        for track in self.controller.tracks:
            track.stop()
