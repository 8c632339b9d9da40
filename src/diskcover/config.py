"""
Configuration and type definitions for unit disk covering.
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple
from enum import Enum

# Type aliases
Point3 = Tuple[float, float, float]  # (x, y, z)
SiteArray = np.ndarray
CellKey = Tuple[int, int]


class CoverAlgorithm(Enum):
    """Available covering strategies."""
    GRID = 0      # FastCover, hashed lattice (fastest)
    SWEEP = 1     # BLMS, x-sorted sweep with a y-ordered active window
    STRIPS = 2    # LL, six-phase vertical strips (fewest disks)


# Names used in the literature for the same algorithms
ALGORITHM_ALIASES = {
    "fast_cover": CoverAlgorithm.GRID,
    "fastcover": CoverAlgorithm.GRID,
    "blms": CoverAlgorithm.SWEEP,
    "ll": CoverAlgorithm.STRIPS,
}


class CoverError(Exception):
    """Base class for covering errors."""


class InvalidInputError(CoverError, ValueError):
    """Raised when there is nothing to cover or the radius is unusable."""


class EmptyCoverError(CoverError, IndexError):
    """Raised when reading a disk from a cover that holds none."""


@dataclass
class CoverConfig:
    """
    Configuration parameters for the disk cover engine.

    Placement:
        default_height: z coordinate given to every produced disk center

    Algorithm selection:
        algorithm: which covering procedure cover_sites runs
        strip_phases: number of strip offsets tried by the strip cover

    Numerics:
        boundary_epsilon: relative shrink of lattice cells and strip chords
            so rounding never pushes a covered site past the radius

    Output:
        max_coverage_sites: site count above which a verbose run warns
        verbose: print progress while covering
    """
    default_height: float = 1.2
    algorithm: CoverAlgorithm = CoverAlgorithm.GRID
    strip_phases: int = 6
    boundary_epsilon: float = 1e-9
    max_coverage_sites: int = 50000
    verbose: bool = False


@dataclass
class CoverProgress:
    """Tracks the current state of a covering run."""
    sites_processed: int = 0
    total_sites: int = 0
    disks_placed: int = 0
    phase: str = ""

    @property
    def progress_ratio(self) -> float:
        """Fraction of the sites already processed."""
        return self.sites_processed / self.total_sites if self.total_sites > 0 else 0

    def __str__(self) -> str:
        phase_str = f"[{self.phase}] " if self.phase else ""
        return f"{phase_str}Sites: {self.sites_processed}/{self.total_sites} ({self.progress_ratio:.0%}) | Disks: {self.disks_placed}"
