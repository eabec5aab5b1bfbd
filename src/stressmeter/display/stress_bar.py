"""
Stress Bar Model
=================
Engine-free state of the on-screen stress bar. Follows the accumulator
through its value_changed signal and eases the displayed value toward it.

Color ramp (normalised to the danger threshold):
- below half the threshold: green -> yellow
- up to the threshold: yellow -> red
- at/above the threshold: red (and the bar pulses)
"""

import math

from ..config import settings


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _lerp_color(c1: list, c2: list, t: float) -> list:
    t = min(max(t, 0.0), 1.0)
    return [_lerp(a, b, t) for a, b in zip(c1, c2)]


def stress_to_color(normalized: float, danger_normalized: float,
                    colors: dict = None) -> list:
    """
    Convert a 0-1 stress fraction to an RGB color.

    Args:
        normalized: stress / max
        danger_normalized: danger_threshold / max
        colors: dict with normal/warning/danger RGB lists
    """
    colors = colors or settings.BAR_COLORS
    half = danger_normalized * 0.5
    if normalized < half:
        return _lerp_color(colors["normal"], colors["warning"], normalized / half)
    elif normalized < danger_normalized:
        return _lerp_color(colors["warning"], colors["danger"], (normalized - half) / half)
    return list(colors["danger"])


class StressBar:
    """Display model for one StressAccumulator."""

    def __init__(self, accumulator, lerp_speed: float = settings.BAR_LERP_SPEED,
                 pulse_speed: float = settings.BAR_PULSE_SPEED,
                 pulse_in_danger: bool = True):
        self.accumulator = accumulator
        self.lerp_speed = lerp_speed
        self.pulse_speed = pulse_speed
        self.pulse_in_danger = pulse_in_danger

        self.target = accumulator.current
        self.displayed = self.target
        accumulator.value_changed.connect(self._on_value_changed)

    def _on_value_changed(self, value: float):
        self.target = value

    def close(self):
        """Stop following the accumulator."""
        self.accumulator.value_changed.disconnect(self._on_value_changed)

    def tick(self, dt: float) -> float:
        """Advance the easing animation by dt seconds."""
        if abs(self.displayed - self.target) > 0.01:
            self.displayed = _lerp(self.displayed, self.target, min(1.0, dt * self.lerp_speed))
        if abs(self.displayed - self.target) <= 0.01:
            self.displayed = self.target
        return self.displayed

    @property
    def fill(self) -> float:
        return self.displayed / self.accumulator.max

    @property
    def color(self) -> list:
        acc = self.accumulator
        return stress_to_color(self.fill, acc.danger_threshold / acc.max)

    @property
    def label(self) -> str:
        return f"Stress: {round(self.fill * 100)}%"

    def pulse(self, t: float) -> float:
        """Fill alpha at time t: 0.7-1.0 in the danger zone, else 1.0."""
        if self.pulse_in_danger and self.accumulator.in_danger_zone:
            return math.sin(t * self.pulse_speed) * 0.15 + 0.85
        return 1.0

    def to_dashboard_state(self) -> dict:
        acc = self.accumulator
        return {
            "current": round(acc.current, 2),
            "displayed": round(self.displayed, 2),
            "max": acc.max,
            "danger_threshold": acc.danger_threshold,
            "fill": round(self.fill, 4),
            "color": [round(c, 3) for c in self.color],
            "label": self.label,
            "in_danger_zone": acc.in_danger_zone,
            "exhausted": acc.terminal,
        }
