"""Tests for animation smoothing and energy-to-target mapping."""

import pytest

from songlines.config import NOTE_BANDS, AnimationConfig
from songlines.core.animation import AnimationState, EnergyMapper, map_range
from songlines.layout import InnerPattern, MiddlePattern, OuterPattern, VisualElement


@pytest.fixture
def note_element():
    """A single circle bound to the note A."""
    return VisualElement(
        x=100.0,
        y=100.0,
        r=40.0,
        outer=OuterPattern.DOTS,
        middle=MiddlePattern.U_SHAPES,
        inner=InnerPattern.SPIRAL,
        note=NOTE_BANDS[5],
        animation=AnimationState(),
    )


class TestMapRange:
    """Tests for clamped linear mapping."""

    def test_midpoint(self):
        assert map_range(5.0, 0.0, 10.0, 0.0, 1.0) == pytest.approx(0.5)

    def test_clamps_below(self):
        assert map_range(-20.0, 0.0, 10.0, 1.0, 2.0) == 1.0

    def test_clamps_above(self):
        assert map_range(300.0, 50.0, 255.0, 1.0, 1.8) == pytest.approx(1.8)

    def test_degenerate_input_range(self):
        assert map_range(3.0, 2.0, 2.0, 0.5, 1.0) == 0.5


class TestAnimationState:
    """Tests for exponential smoothing toward targets."""

    def test_advance_moves_by_rate(self):
        state = AnimationState(target_scale=2.0, scale_rate=0.25)
        state.advance()
        assert state.current_scale == pytest.approx(1.25)

    def test_converges_without_overshoot(self):
        """C=1.0 toward T=1.8 at r=0.12 passes 1.79 within 50 steps."""
        state = AnimationState(target_scale=1.8, scale_rate=0.12)
        gap = abs(state.target_scale - state.current_scale)

        for _ in range(50):
            state.advance()
            new_gap = abs(state.target_scale - state.current_scale)
            assert new_gap < gap
            assert state.current_scale <= state.target_scale
            gap = new_gap

        assert state.current_scale > 1.79

    def test_attributes_smooth_independently(self):
        state = AnimationState(
            target_scale=2.0,
            target_intensity=1.0,
            target_rotation=1.0,
            scale_rate=0.2,
            intensity_rate=0.15,
            rotation_rate=0.1,
        )
        state.advance()

        assert state.current_scale == pytest.approx(1.2)
        assert state.current_intensity == pytest.approx(0.15)
        assert state.current_rotation == pytest.approx(0.1)

    def test_never_reaches_target_instantly(self):
        state = AnimationState(target_intensity=0.8)
        state.advance()
        assert 0.0 < state.current_intensity < 0.8

    def test_from_config_rates(self):
        config = AnimationConfig(scale_rate=0.3, intensity_rate=0.2, rotation_rate=0.05)
        state = AnimationState.from_config(config)
        assert (state.scale_rate, state.intensity_rate, state.rotation_rate) == (0.3, 0.2, 0.05)

    def test_config_rejects_bad_rate(self):
        with pytest.raises(ValueError):
            AnimationConfig(scale_rate=1.5)


class TestEnergyMapper:
    """Tests for energy-driven targets."""

    def test_threshold_is_exclusive(self, note_element):
        mapper = EnergyMapper()
        mapper.apply(note_element, 50.0)

        assert note_element.active is False
        assert note_element.animation.target_scale == 1.0
        assert note_element.animation.target_intensity == 0.0

    def test_full_energy_hits_maximum(self, note_element):
        mapper = EnergyMapper()
        mapper.apply(note_element, 255.0)

        assert note_element.active is True
        assert note_element.animation.target_scale == pytest.approx(1.8)
        assert note_element.animation.target_intensity == pytest.approx(0.8)
        assert note_element.animation.target_rotation == pytest.approx(0.15)

    def test_rotation_accumulates(self, note_element):
        mapper = EnergyMapper()
        for _ in range(4):
            mapper.apply(note_element, 255.0)
        assert note_element.animation.target_rotation == pytest.approx(0.6)

    def test_rotation_held_when_quiet(self, note_element):
        mapper = EnergyMapper()
        mapper.apply(note_element, 255.0)
        mapper.apply(note_element, 10.0)

        assert note_element.active is False
        assert note_element.animation.target_rotation == pytest.approx(0.15)

    def test_midrange_energy(self, note_element):
        mapper = EnergyMapper(AnimationConfig(threshold=55.0))
        mapper.apply(note_element, 155.0)

        assert note_element.animation.target_scale == pytest.approx(1.4)
        assert note_element.animation.target_intensity == pytest.approx(0.4)

    def test_hold_freezes_rotation(self, note_element):
        state = note_element.animation
        state.current_rotation = 0.4
        state.target_rotation = 2.0
        state.target_scale = 1.6
        note_element.active = True

        EnergyMapper().hold(note_element)

        assert note_element.active is False
        assert state.target_scale == 1.0
        assert state.target_intensity == 0.0
        assert state.target_rotation == 0.4
        state.advance()
        assert state.current_rotation == pytest.approx(0.4)
