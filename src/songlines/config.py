"""
Configuration for the Songlines sketch.

Fixed tables (note bands, palettes, layout indices) live as module
constants; tunable values are grouped in dataclasses with defaults.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NoteBand:
    """A named frequency interval bound to one animated circle."""

    name: str
    low: float  # Hz, inclusive
    high: float  # Hz, inclusive
    center: float  # Hz
    color: tuple[int, int, int] = (255, 200, 100)


# C4..B4, each band widened to roughly one semitone either side so that
# harmonics and slightly detuned notes still register.
NOTE_BANDS: tuple[NoteBand, ...] = (
    NoteBand("C", 246.0, 277.0, 261.63, (255, 110, 80)),
    NoteBand("D", 277.0, 311.0, 293.66, (255, 170, 70)),
    NoteBand("E", 311.0, 349.0, 329.63, (255, 215, 0)),
    NoteBand("F", 349.0, 392.0, 369.99, (190, 220, 120)),
    NoteBand("G", 370.0, 415.0, 392.00, (140, 200, 210)),
    NoteBand("A", 415.0, 466.0, 440.00, (200, 170, 230)),
    NoteBand("B", 466.0, 523.0, 493.88, (255, 160, 190)),
)

# Layout indices of the circles that react to C..B, chosen so all seven
# sit inside the canvas and spread across it.
NOTE_CIRCLE_INDICES: tuple[int, ...] = (1, 5, 8, 11, 15, 19, 23)

BACKGROUND_COLOR = (30, 20, 15)

CIRCLE_BASE_PALETTE = (
    (90, 40, 20),
    (60, 30, 15),
    (40, 45, 35),
    (110, 60, 30),
    (20, 20, 20),
)

PATTERN_PALETTE = (
    (255, 255, 255),
    (255, 240, 200),
    (255, 215, 0),
    (255, 140, 80),
    (160, 180, 140),
    (200, 200, 210),
)

LINK_COLOR = (240, 230, 200, 180)
GLOW_COLOR = (255, 200, 100)


@dataclass
class AnimationConfig:
    """Energy-to-motion mapping for note circles."""

    threshold: float = 50.0  # Energy (0-255) a note must exceed to activate
    max_energy: float = 255.0
    max_scale: float = 1.8
    max_intensity: float = 0.8
    max_rotation_step: float = 0.15  # Radians added per frame at full energy

    # Per-frame smoothing rates; scale reacts first, rotation lags behind
    scale_rate: float = 0.2
    intensity_rate: float = 0.15
    rotation_rate: float = 0.1

    def __post_init__(self):
        for name in ("scale_rate", "intensity_rate", "rotation_rate"):
            rate = getattr(self, name)
            if not 0.0 < rate < 1.0:
                raise ValueError(f"{name} must be in (0, 1), got {rate}")
        if self.threshold >= self.max_energy:
            raise ValueError("threshold must be below max_energy")


@dataclass
class SpectrumConfig:
    """Frequency analysis settings (analyser-node style)."""

    bins: int = 1024
    smoothing: float = 0.85  # Time averaging between consecutive frames
    min_db: float = -100.0
    max_db: float = -30.0
    sample_rate: int = 44100

    def __post_init__(self):
        if self.bins <= 0:
            raise ValueError(f"bins must be positive, got {self.bins}")
        if not 0.0 <= self.smoothing < 1.0:
            raise ValueError(f"smoothing must be in [0, 1), got {self.smoothing}")
        if self.min_db >= self.max_db:
            raise ValueError("min_db must be below max_db")


@dataclass
class LayoutConfig:
    """Circle grid and background texture."""

    radius_divisor: float = 10.0  # Base radius = size / radius_divisor
    node_probability: float = 0.7  # Chance a circle joins the songline network
    link_distance_divisor: float = 2.8  # Link nodes closer than size / divisor
    dot_density: float = 0.004  # Background dots per pixel
    glow_threshold: float = 0.1


@dataclass
class SketchConfig:
    """Top-level configuration for a running sketch."""

    size: int = 800
    fps: int = 60
    debug: bool = False
    autoplay: bool = False
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    spectrum: SpectrumConfig = field(default_factory=SpectrumConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)

    def __post_init__(self):
        if self.size <= 0:
            raise ValueError(f"size must be positive, got {self.size}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
