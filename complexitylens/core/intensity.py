"""
Score-to-intensity mapping.

Scores at or below ``start_complexity`` map to 0, scores at or above
``max_complexity`` map to 1, linear in between. The factor darkens a
fixed base colour.
"""

from dataclasses import dataclass
from typing import Tuple

from complexitylens.config import ComplexityConfig


EPSILON = 1e-9

BASE_COLOR: Tuple[int, int, int] = (255, 200, 200)
DARKEN_AMOUNT = 200

# Per-channel darkening rate (red, green, blue).
CHANNEL_RATES: Tuple[float, float, float] = (0.5, 1.0, 0.5)


@dataclass(frozen=True)
class Intensity:
    """Normalized intensity and the derived RGB colour."""
    factor: float
    rgb: Tuple[int, int, int]

    @property
    def hex(self) -> str:
        return "#{:02x}{:02x}{:02x}".format(*self.rgb)


def intensity_factor(score: int, config: ComplexityConfig) -> float:
    """Map a complexity score onto [0, 1]."""
    span = max(config.max_complexity - config.start_complexity, EPSILON)
    factor = (score - config.start_complexity) / span
    return min(max(factor, 0.0), 1.0)


def color_for(factor: float) -> Tuple[int, int, int]:
    darken = factor * DARKEN_AMOUNT
    return tuple(
        max(int(round(base - darken * rate)), 0)
        for base, rate in zip(BASE_COLOR, CHANNEL_RATES)
    )


def intensity(score: int, config: ComplexityConfig) -> Intensity:
    factor = intensity_factor(score, config)
    return Intensity(factor=factor, rgb=color_for(factor))
