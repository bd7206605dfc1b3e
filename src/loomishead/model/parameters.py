"""
Head Shape Parameters
=====================
This module defines the value object describing the proportions of a head.

Why is this file needed?
------------------------
1. Single Source: Every generator (landmarks, guideline curves, scene) reads
   the same frozen record, so a single evaluation never sees mixed values.
2. Interop: The UI layer speaks camelCase keys (`sideCut`, `eyeLinePos`);
   this module translates them to and from the snake_case fields.

All values except `radius` are dimensionless ratios of the sphere radius.
Position ratios are fractions of the radius along the vertical axis
(0 = equator, positive = up); widths are half-extents, curves are depths.

Classes:
    HeadParameters: The frozen parameter record.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields, replace
import math
from typing import Any, Mapping


@dataclass(frozen=True)
class HeadParameters:
    radius: float = 100.0
    side_cut: float = 0.66

    # Vertical positions (ratio of radius)
    hairline_pos: float = 0.6
    brow_pos: float = 0.0
    eye_line_pos: float = -0.2
    nose_pos: float = -0.7
    mouth_pos: float = -0.95

    # Half-widths (ratio of radius)
    eye_width: float = 0.5
    nose_width: float = 0.15
    mouth_width: float = 0.3

    # How far the line ends curve back (ratio of radius)
    eye_curve: float = 0.15
    nose_curve: float = 0.05
    mouth_curve: float = 0.1

    # Chin and jaw
    chin_pos: float = 0.45
    chin_width: float = 0.25
    chin_curve: float = 0.1
    chin_line_curve: float = 0.3
    jaw_drop: float = 0.3
    jaw_width: float = 0.6

    def validate(self) -> None:
        """Validate parameter values."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not math.isfinite(value):
                raise ValueError(f"{f.name} must be a finite number, got {value!r}")
        if self.radius <= 0.0:
            raise ValueError(f"radius must be > 0, got {self.radius}")

    def replace(self, **changes: float) -> HeadParameters:
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> dict[str, float]:
        """Return a JSON-serializable dict keyed the way the UI names parameters."""
        return {_to_camel(name): value for name, value in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HeadParameters:
        """
        Build parameters from a mapping with camelCase or snake_case keys.
        Missing keys keep their defaults.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, float] = {}
        for key, value in data.items():
            name = _to_snake(key)
            if name not in known:
                raise ValueError(f"Unknown head parameter: {key}")
            values[name] = float(value)
        return cls(**values)


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _to_snake(name: str) -> str:
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in name)
