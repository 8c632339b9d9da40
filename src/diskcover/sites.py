"""
Site storage: the point set every covering algorithm reads.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence, Union, runtime_checkable

from .config import InvalidInputError, Point3, SiteArray
from .geometry import BoundingBox


@runtime_checkable
class PositionSource(Protocol):
    """Anything that can hand over a sequence of positions."""

    def positions(self) -> Sequence[Sequence[float]]:
        ...


@dataclass
class ListPositionSource:
    """Plain list of positions, e.g. node locations from a simulation."""
    points: List[Point3] = field(default_factory=list)

    def add(self, point: Sequence[float]) -> None:
        self.points.append(tuple(float(c) for c in point))

    def positions(self) -> List[Point3]:
        return list(self.points)


SiteInput = Union[PositionSource, np.ndarray, Sequence[Sequence[float]]]


def as_site_array(points: SiteInput) -> SiteArray:
    """Convert any accepted site input into an (n, 3) float array."""
    if isinstance(points, PositionSource):
        points = points.positions()

    arr = np.asarray(points, dtype=float)
    if arr.size == 0:
        raise InvalidInputError("cannot cover an empty set of sites")
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise InvalidInputError(f"sites must be 2D or 3D points, got array of shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInputError("site coordinates must be finite")

    if arr.shape[1] == 2:
        arr = np.hstack([arr, np.zeros((len(arr), 1))])
    return arr


class SiteRepository:
    """Owns the sites to cover and their bounding box."""

    def __init__(self, points: Optional[SiteInput] = None):
        self._sites: SiteArray = np.empty((0, 3))
        self.bounds: Optional[BoundingBox] = None
        if points is not None:
            self.set_sites(points)

    def set_sites(self, points: SiteInput) -> None:
        """Replace the stored sites and recompute the bounding box."""
        self._sites = as_site_array(points)
        self.bounds = BoundingBox.from_points(self._sites)

    def get_sites(self) -> List[Point3]:
        return [(float(x), float(y), float(z)) for x, y, z in self._sites]

    @property
    def array(self) -> SiteArray:
        return self._sites

    def size(self) -> int:
        return len(self._sites)

    def __len__(self) -> int:
        return self.size()
