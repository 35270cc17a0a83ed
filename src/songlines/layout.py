"""
Fixed circle layout.

Twenty-five circles sit on five parallel diagonals. Seven of them are
bound to the notes C..B; a random subset forms the network whose
nearby members are joined by lines.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from songlines.config import (
    AnimationConfig,
    LayoutConfig,
    NOTE_BANDS,
    NOTE_CIRCLE_INDICES,
    NoteBand,
)
from songlines.core.animation import AnimationState


class OuterPattern(Enum):
    DOTS = 0
    RADIATING_LINES = 1
    STRIPED_RINGS = 2
    RADIAL_WAVE = 3


class MiddlePattern(Enum):
    CONCENTRIC_DOTS = 0
    U_SHAPES = 1
    SOLID_RINGS = 2
    CONCENTRIC_RINGS = 3


class InnerPattern(Enum):
    BLOB = 0
    SPIRAL = 1


@dataclass
class VisualElement:
    """One circle of the layout."""

    x: float
    y: float
    r: float
    outer: OuterPattern
    middle: MiddlePattern
    inner: InnerPattern
    note: NoteBand | None = None
    animation: AnimationState | None = None
    active: bool = False
    # Seeds the hand-drawn jitter so a circle keeps its character
    seed: int = 0

    @property
    def is_note_circle(self) -> bool:
        return self.note is not None


# (count, start x, start y) as fractions of the canvas; every line steps
# by size / 4.8 in both directions.
_LINES = (
    (5, 1 / 7.1, 1 / 7.1),
    (5, 1 / 2, 2 / 20),
    (5, 4 / 5, 0.0),
    (5, 1 / 20, 1 / 2.2),
    (5, 0.0, 8 / 10),
)
_STEP = 1 / 4.8


def _line_positions(size: float) -> list[tuple[float, float]]:
    positions = []
    for count, start_x, start_y in _LINES:
        for i in range(count):
            positions.append(
                (size * start_x + size * _STEP * i, size * start_y + size * _STEP * i)
            )
    return positions


@dataclass
class Layout:
    """All circles of the sketch and the network subset."""

    size: float
    elements: list[VisualElement]
    connected: list[VisualElement] = field(default_factory=list)
    config: LayoutConfig = field(default_factory=LayoutConfig)

    @property
    def note_elements(self) -> list[VisualElement]:
        return [e for e in self.elements if e.is_note_circle]

    def links(self, max_distance: float | None = None) -> list[tuple[VisualElement, VisualElement]]:
        """Pairs of network circles closer than `max_distance`, size / link_distance_divisor by default."""
        if max_distance is None:
            max_distance = self.size / self.config.link_distance_divisor
        pairs = []
        for i, a in enumerate(self.connected):
            for b in self.connected[i + 1:]:
                if math.dist((a.x, a.y), (b.x, b.y)) < max_distance:
                    pairs.append((a, b))
        return pairs

    def resize(self, size: float):
        """Reposition every circle for a new square canvas size."""
        radius = size / self.config.radius_divisor
        for element, (x, y) in zip(self.elements, _line_positions(size)):
            element.x = x
            element.y = y
            element.r = radius
        self.size = size


def build_layout(
    size: float,
    rng: np.random.Generator | None = None,
    config: LayoutConfig | None = None,
    animation: AnimationConfig | None = None,
) -> Layout:
    """
    Create the fixed circle grid for a square canvas.

    Args:
        size: Canvas edge length in pixels.
        rng: Random source for pattern choice and network membership.
        config: Layout settings.
        animation: Smoothing rates for the note circles.

    Returns:
        Layout with 25 circles, 7 of them bound to notes.
    """
    rng = rng if rng is not None else np.random.default_rng()
    config = config or LayoutConfig()
    animation = animation or AnimationConfig()
    radius = size / config.radius_divisor

    elements = []
    connected = []
    for x, y in _line_positions(size):
        element = VisualElement(
            x=x,
            y=y,
            r=radius,
            outer=OuterPattern(int(rng.integers(len(OuterPattern)))),
            middle=MiddlePattern(int(rng.integers(len(MiddlePattern)))),
            inner=InnerPattern(int(rng.integers(len(InnerPattern)))),
            seed=int(rng.integers(2**31)),
        )
        elements.append(element)
        if rng.random() < config.node_probability:
            connected.append(element)

    for index, band in zip(NOTE_CIRCLE_INDICES, NOTE_BANDS):
        element = elements[index]
        element.note = band
        element.animation = AnimationState.from_config(animation)

    return Layout(size=size, elements=elements, connected=connected, config=config)
