"""pygame renderers for the circle layout."""

from songlines.visualizers.circles import CircleRenderer

__all__ = ["CircleRenderer"]
