"""
Geometry utilities for disk covering.

Contains:
- squared_distance: planar coverage distance used by every algorithm
- half_chord: clamped half-length of a disk chord on a vertical line
- boundary_margin: rounding slack that scales with coordinate magnitude
- BoundingBox: axis-aligned box over sites and disks
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Sequence

Point = Sequence[float]


def squared_distance(p: Point, q: Point) -> float:
    """Squared Euclidean distance over the (x, y) components."""
    dx = float(p[0]) - float(q[0])
    dy = float(p[1]) - float(q[1])
    return dx * dx + dy * dy


def squared_distance_3d(p: Point, q: Point) -> float:
    """Squared Euclidean distance including z (not used for coverage)."""
    dz = float(p[2]) - float(q[2])
    return squared_distance(p, q) + dz * dz


def half_chord(radius: float, dx: float) -> float:
    """
    Half the length of the chord cut by a line at horizontal offset dx
    from the center of a disk of the given radius.

    A negative radicand (|dx| slightly above radius through rounding)
    yields a zero-length chord.
    """
    return math.sqrt(max(radius * radius - dx * dx, 0.0))


def half_chords(radius: float, dx: np.ndarray) -> np.ndarray:
    """Vectorized half_chord."""
    return np.sqrt(np.clip(radius * radius - dx * dx, 0.0, None))


def boundary_margin(epsilon: float, radius: float, magnitude: float) -> float:
    """
    Relative shrink for disk reach so coordinates of the given magnitude
    cannot round a covered site past radius. Never below epsilon, capped at 0.5.
    """
    rounding = 64 * np.finfo(float).eps * magnitude / radius
    return float(min(max(epsilon, rounding), 0.5))


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box given by its (x, y, z) min and max corners."""
    min_corner: np.ndarray
    max_corner: np.ndarray

    @classmethod
    def from_points(cls, points: np.ndarray) -> "BoundingBox":
        points = np.asarray(points, dtype=float)
        return cls(np.min(points, axis=0), np.max(points, axis=0))

    def update(self, point: Point, inflate: float = 0.0) -> "BoundingBox":
        """Return the box grown to hold point, optionally inflated by ±inflate."""
        p = np.asarray(point, dtype=float)
        return BoundingBox(
            np.minimum(self.min_corner, p - inflate),
            np.maximum(self.max_corner, p + inflate),
        )

    def contains(self, point: Point, inflate: float = 0.0) -> bool:
        p = np.asarray(point, dtype=float)
        return bool(np.all(p - inflate >= self.min_corner) and np.all(p + inflate <= self.max_corner))

    @property
    def extent(self) -> float:
        """Largest side length of the box."""
        return float(max(self.max_corner - self.min_corner))
