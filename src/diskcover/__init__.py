"""
diskcover - Approximate unit disk cover for 2D point sets.

Usage:
    from diskcover import DiskCoverer, CoverConfig, CoverAlgorithm

    # Basic usage (grid cover)
    coverer = DiskCoverer()
    coverer.set_sites([(0, 0, 0), (3, 4, 0)])
    result = coverer.cover_sites(radius=1.0)
    disks = result.positions()

    # With configuration
    config = CoverConfig(algorithm=CoverAlgorithm.STRIPS, default_height=15.0, verbose=True)
    result = cover_sites(points, 500.0, config=config)

    # Cyclic consumption, e.g. placing one gateway per node
    position = result.get_next()

Covering modes:
    - Grid: hashed lattice, O(n) expected, fastest, most disks
    - Sweep: x-sorted sweep with a y-ordered active window, O(n log n)
    - Strips: best of six phase-shifted strip covers, fewest disks
"""

from .config import (
    CoverAlgorithm,
    CoverConfig,
    CoverError,
    CoverProgress,
    EmptyCoverError,
    InvalidInputError,
    Point3,
)
from .cover import DiskCoverer, cover_sites
from .geometry import BoundingBox, squared_distance
from .result import CoverResult
from .sites import ListPositionSource, PositionSource, SiteRepository

__all__ = [
    "DiskCoverer",
    "cover_sites",
    "CoverAlgorithm",
    "CoverConfig",
    "CoverProgress",
    "CoverResult",
    "CoverError",
    "InvalidInputError",
    "EmptyCoverError",
    "SiteRepository",
    "PositionSource",
    "ListPositionSource",
    "BoundingBox",
    "squared_distance",
    "Point3",
]

__version__ = "0.1.0"
