"""
Circle motif renderer.

Draws the layout with pygame:
- Background → dark ground with a shimmering white dot texture
- Songlines → cream lines joining nearby network circles
- Circles → outer / middle / inner hand-drawn patterns
- Note circles → scaled, rotated and glowing from their animation state
"""

import math

import numpy as np
import pygame

from songlines.config import (
    BACKGROUND_COLOR,
    CIRCLE_BASE_PALETTE,
    GLOW_COLOR,
    LINK_COLOR,
    PATTERN_PALETTE,
    LayoutConfig,
)
from songlines.layout import (
    InnerPattern,
    Layout,
    MiddlePattern,
    OuterPattern,
    VisualElement,
)

TWO_PI = 2 * math.pi


class CircleRenderer:
    """
    Renders a Layout onto a pygame Surface.

    Shapes are computed in a circle's local frame and then rotated,
    scaled and translated, so note circles transform as a whole.
    """

    def __init__(
        self,
        config: LayoutConfig | None = None,
        seed: int | None = None,
        debug: bool = False,
    ):
        """
        Initialize the renderer.

        Args:
            config: Layout settings (dot density, glow threshold).
            seed: Seed for the background texture.
            debug: Draw circle indices and canvas bounds.
        """
        self.config = config or LayoutConfig()
        self.rng = np.random.default_rng(seed)
        self.debug = debug
        self._font: pygame.font.Font | None = None

    # --- geometry -------------------------------------------------------

    def _transform(self, element: VisualElement, points: np.ndarray) -> list[tuple[float, float]]:
        """Local (N, 2) points to screen coordinates for this element."""
        scale = 1.0
        rotation = 0.0
        if element.animation is not None:
            scale = element.animation.current_scale
            rotation = element.animation.current_rotation

        cos_r, sin_r = math.cos(rotation), math.sin(rotation)
        xs = (points[:, 0] * cos_r - points[:, 1] * sin_r) * scale + element.x
        ys = (points[:, 0] * sin_r + points[:, 1] * cos_r) * scale + element.y
        return list(zip(xs.tolist(), ys.tolist()))

    def _width(self, element: VisualElement, fraction: float) -> int:
        scale = element.animation.current_scale if element.animation is not None else 1.0
        return max(1, int(round(element.r * fraction * scale)))

    @staticmethod
    def _ring(radius: float, n_points: int, jitter: float, rng: np.random.Generator) -> np.ndarray:
        angles = np.linspace(0.0, TWO_PI, n_points, endpoint=False)
        radii = radius + rng.uniform(-jitter, jitter, n_points)
        return np.column_stack((np.cos(angles) * radii, np.sin(angles) * radii))

    @staticmethod
    def _blob(cx: float, cy: float, size: float, rng: np.random.Generator) -> np.ndarray:
        spin = rng.uniform(0.0, TWO_PI)
        angles = np.linspace(0.0, TWO_PI, 8, endpoint=False) + spin
        radii = size * 0.5 * rng.uniform(0.85, 1.15, 8)
        return np.column_stack((cx + np.cos(angles) * radii, cy + np.sin(angles) * radii))

    # --- primitives -----------------------------------------------------

    def _hand_drawn_circle(
        self,
        surface: pygame.Surface,
        element: VisualElement,
        radius: float,
        rng: np.random.Generator,
        fill=None,
        stroke=None,
        stroke_fraction: float = 0.0,
    ):
        points = self._transform(element, self._ring(radius, 50, radius * 0.01, rng))
        if fill is not None:
            pygame.draw.polygon(surface, fill, points)
        if stroke is not None:
            pygame.draw.polygon(surface, stroke, points, self._width(element, stroke_fraction))

    def _blob_at(self, surface, element, offset, angle, size, color, rng):
        cx, cy = math.cos(angle) * offset, math.sin(angle) * offset
        pygame.draw.polygon(surface, color, self._transform(element, self._blob(cx, cy, size, rng)))

    def _dot_rings(self, surface, element, start, stop, dot_size, spacing, color, rng):
        radius = start
        while radius < stop:
            count = int(TWO_PI * radius / spacing)
            for i in range(count):
                self._blob_at(surface, element, radius, TWO_PI * i / count, dot_size, color, rng)
            radius += spacing

    # --- patterns -------------------------------------------------------

    def _draw_outer(self, surface, element, rng):
        r = element.r
        base = CIRCLE_BASE_PALETTE[rng.integers(len(CIRCLE_BASE_PALETTE))]
        self._hand_drawn_circle(surface, element, r, rng, fill=base, stroke=(0, 0, 0), stroke_fraction=0.01)
        color = PATTERN_PALETTE[rng.integers(len(PATTERN_PALETTE))]

        if element.outer is OuterPattern.DOTS:
            self._dot_rings(surface, element, r * 0.65, r * 0.95, r * 0.07, r * 0.09, color, rng)

        elif element.outer is OuterPattern.RADIATING_LINES:
            width = self._width(element, 0.015)
            for i in range(40):
                angle = TWO_PI * i / 40 + rng.uniform(-0.05, 0.05)
                c, s = math.cos(angle), math.sin(angle)
                line = np.array([[c * r * 0.6, s * r * 0.6], [c * r * 0.95, s * r * 0.95]])
                start, end = self._transform(element, line)
                pygame.draw.line(surface, color, start, end, width)
                self._blob_at(surface, element, r * 0.95, angle, r * 0.03, color, rng)

        elif element.outer is OuterPattern.STRIPED_RINGS:
            for radius in (r * 0.65, r * 0.9):
                fraction = 0.025 * rng.uniform(0.8, 1.2)
                self._hand_drawn_circle(surface, element, radius, rng, stroke=color, stroke_fraction=fraction)

        elif element.outer is OuterPattern.RADIAL_WAVE:
            base_radius = r * 0.73
            angles = np.linspace(0.0, TWO_PI, 240, endpoint=False)
            radii = base_radius + np.sin(angles * 60) * base_radius * 0.3
            radii += rng.uniform(-r * 0.005, r * 0.005, len(angles))
            wave = np.column_stack((np.cos(angles) * radii, np.sin(angles) * radii))
            pygame.draw.polygon(surface, color, self._transform(element, wave), self._width(element, 0.025))

    def _draw_middle(self, surface, element, rng):
        r = element.r
        base = CIRCLE_BASE_PALETTE[rng.integers(len(CIRCLE_BASE_PALETTE))]
        self._hand_drawn_circle(surface, element, r * 0.55, rng, fill=base)
        color = PATTERN_PALETTE[rng.integers(len(PATTERN_PALETTE))]

        if element.middle is MiddlePattern.CONCENTRIC_DOTS:
            dot = r * 0.04
            self._dot_rings(surface, element, r * 0.2, r * 0.5, dot, dot * 1.5, color, rng)

        elif element.middle is MiddlePattern.U_SHAPES:
            width = self._width(element, 0.02)
            half = np.linspace(0.0, math.pi, 12)
            for i in range(8):
                angle = TWO_PI * i / 8
                cx, cy = math.cos(angle) * r * 0.35, math.sin(angle) * r * 0.35
                arc_angles = half + angle + math.pi / 2
                arc = np.column_stack(
                    (cx + np.cos(arc_angles) * r * 0.075, cy + np.sin(arc_angles) * r * 0.075)
                )
                pygame.draw.lines(surface, color, False, self._transform(element, arc), width)

        elif element.middle is MiddlePattern.SOLID_RINGS:
            second = PATTERN_PALETTE[rng.integers(len(PATTERN_PALETTE))]
            self._hand_drawn_circle(surface, element, r * 0.45, rng, fill=color)
            self._hand_drawn_circle(surface, element, r * 0.3, rng, fill=second)

        elif element.middle is MiddlePattern.CONCENTRIC_RINGS:
            for radius in np.linspace(r * 0.3, r * 0.5, 5):
                ring = self._ring(radius, 25, r * 0.025, rng)
                fraction = 0.01 * rng.uniform(0.8, 1.2)
                pygame.draw.polygon(surface, color, self._transform(element, ring), self._width(element, fraction))

    def _draw_inner(self, surface, element, rng):
        r = element.r
        base = CIRCLE_BASE_PALETTE[rng.integers(len(CIRCLE_BASE_PALETTE))]
        self._hand_drawn_circle(surface, element, r * 0.25, rng, fill=base)
        color = PATTERN_PALETTE[rng.integers(len(PATTERN_PALETTE))]

        if element.inner is InnerPattern.BLOB:
            self._blob_at(surface, element, 0.0, 0.0, r * 0.15, color, rng)
        else:
            steps = np.arange(50)
            radii = steps / 50 * r * 0.2
            spiral = np.column_stack((np.cos(steps * 0.4) * radii, np.sin(steps * 0.4) * radii))
            pygame.draw.lines(surface, color, False, self._transform(element, spiral), self._width(element, 0.015))

    def _draw_glow(self, surface, element):
        """Five stacked translucent discs, stronger toward the centre."""
        state = element.animation
        color = element.note.color if element.note is not None else GLOW_COLOR
        outer = element.r * (1.1 + 5 * 0.08) * state.current_scale
        extent = int(math.ceil(outer)) + 1

        glow = pygame.Surface((extent * 2, extent * 2), pygame.SRCALPHA)
        for i in range(5, 0, -1):
            radius = element.r * (1.1 + i * 0.08) * state.current_scale
            alpha = int(min(255, state.current_intensity * 60 / i))
            pygame.draw.circle(glow, (*color, alpha), (extent, extent), radius)
        surface.blit(glow, (element.x - extent, element.y - extent))

    # --- layers ---------------------------------------------------------

    def draw_background(self, surface: pygame.Surface):
        width, height = surface.get_size()
        surface.fill(BACKGROUND_COLOR)

        n_dots = int(width * height * self.config.dot_density)
        xs = self.rng.uniform(0, width, n_dots)
        ys = self.rng.uniform(0, height, n_dots)
        sizes = self.rng.uniform(width * 0.002, width * 0.005, n_dots)
        alphas = self.rng.uniform(100, 200, n_dots)

        dots = pygame.Surface((width, height), pygame.SRCALPHA)
        for x, y, size, alpha in zip(xs, ys, sizes, alphas):
            pygame.draw.circle(dots, (255, 255, 255, int(alpha)), (x, y), max(size / 2, 0.5))
        surface.blit(dots, (0, 0))

    def draw_links(self, surface: pygame.Surface, layout: Layout):
        lines = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        for a, b in layout.links():
            pygame.draw.line(lines, LINK_COLOR, (a.x, a.y), (b.x, b.y), 10)
        surface.blit(lines, (0, 0))

    def draw_element(self, surface: pygame.Surface, element: VisualElement):
        rng = np.random.default_rng(element.seed)

        state = element.animation
        if state is not None and state.current_intensity > self.config.glow_threshold:
            self._draw_glow(surface, element)

        self._hand_drawn_circle(surface, element, element.r * 1.05, rng, fill=BACKGROUND_COLOR)
        self._draw_outer(surface, element, rng)
        self._draw_middle(surface, element, rng)
        self._draw_inner(surface, element, rng)

    def _text(self, surface, text, position, color, size=16):
        if not pygame.font.get_init():
            return
        if self._font is None:
            self._font = pygame.font.Font(None, size + 4)
        label = self._font.render(text, True, color)
        surface.blit(label, position)

    def draw_debug(self, surface: pygame.Surface, layout: Layout):
        """Index every circle; green if it fits the canvas with margin."""
        width, height = surface.get_size()
        for index, element in enumerate(layout.elements):
            margin = element.r * 1.5
            inside = (
                element.x - margin > 0
                and element.x + margin < width
                and element.y - margin > 0
                and element.y + margin < height
            )
            color = (0, 255, 0) if inside else (255, 0, 0)
            box = pygame.Rect(element.x - margin, element.y - margin, margin * 2, margin * 2)
            pygame.draw.rect(surface, color, box, 1)
            self._text(surface, str(index), (element.x, element.y), color)
        pygame.draw.rect(surface, (255, 255, 0), pygame.Rect(5, 5, width - 10, height - 10), 2)

    def draw_status(self, surface: pygame.Surface, status: str):
        height = surface.get_height()
        self._text(surface, status, (12, height - 28), (255, 255, 255))

    def render(self, surface: pygame.Surface, layout: Layout, status: str | None = None):
        """Draw one complete frame."""
        self.draw_background(surface)
        self.draw_links(surface, layout)
        for element in layout.elements:
            self.draw_element(surface, element)
        if self.debug:
            self.draw_debug(surface, layout)
        if status:
            self.draw_status(surface, status)
