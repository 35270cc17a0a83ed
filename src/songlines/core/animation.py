"""
Per-circle animation state and energy-to-target mapping.

Each note circle carries current/target values for scale, glow
intensity and rotation. Targets are set from note energy once per
frame; current values then ease toward them by a fixed fraction.
"""

from dataclasses import dataclass

from songlines.config import AnimationConfig


def map_range(
    value: float,
    in_low: float,
    in_high: float,
    out_low: float,
    out_high: float,
) -> float:
    """Linear mapping from one range to another, clamped to the output range."""
    if in_high == in_low:
        return out_low
    t = (value - in_low) / (in_high - in_low)
    t = min(max(t, 0.0), 1.0)
    return out_low + (out_high - out_low) * t


def _lerp(current: float, target: float, factor: float) -> float:
    return current + (target - current) * factor


@dataclass
class AnimationState:
    """Smoothed visual parameters for one circle."""

    current_scale: float = 1.0
    target_scale: float = 1.0
    current_intensity: float = 0.0
    target_intensity: float = 0.0
    current_rotation: float = 0.0
    target_rotation: float = 0.0

    scale_rate: float = 0.2
    intensity_rate: float = 0.15
    rotation_rate: float = 0.1

    @classmethod
    def from_config(cls, config: AnimationConfig) -> "AnimationState":
        return cls(
            scale_rate=config.scale_rate,
            intensity_rate=config.intensity_rate,
            rotation_rate=config.rotation_rate,
        )

    def advance(self):
        """
        Move every current value a fixed fraction toward its target.

        Called once per rendered frame. The step is not scaled by elapsed
        time, so animation speed follows the frame rate.
        """
        self.current_scale = _lerp(self.current_scale, self.target_scale, self.scale_rate)
        self.current_intensity = _lerp(
            self.current_intensity, self.target_intensity, self.intensity_rate
        )
        self.current_rotation = _lerp(
            self.current_rotation, self.target_rotation, self.rotation_rate
        )


class EnergyMapper:
    """
    Sets animation targets of note circles from their note energy.

    Energy is on the 0-255 byte scale. Above the threshold a circle
    swells, glows and keeps turning; at or below it the circle relaxes
    back to rest but keeps its orientation.
    """

    def __init__(self, config: AnimationConfig | None = None):
        self.config = config or AnimationConfig()

    def apply(self, element, energy: float):
        """Update targets of a note-bound element for this frame's energy."""
        cfg = self.config
        state = element.animation

        if energy > cfg.threshold:
            element.active = True
            state.target_scale = map_range(
                energy, cfg.threshold, cfg.max_energy, 1.0, cfg.max_scale
            )
            state.target_intensity = map_range(
                energy, cfg.threshold, cfg.max_energy, 0.0, cfg.max_intensity
            )
            # Accumulates while the note sounds; never wrapped
            state.target_rotation += map_range(
                energy, cfg.threshold, cfg.max_energy, 0.0, cfg.max_rotation_step
            )
        else:
            element.active = False
            state.target_scale = 1.0
            state.target_intensity = 0.0

    def hold(self, element):
        """Relax an element while nothing is playing, freezing its rotation."""
        state = element.animation
        element.active = False
        state.target_scale = 1.0
        state.target_intensity = 0.0
        state.target_rotation = state.current_rotation
