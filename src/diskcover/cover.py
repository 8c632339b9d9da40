import dataclasses
import math
import numbers
import numpy as np
from bisect import bisect_left, insort
from collections import deque
from typing import Deque, List, Optional, Set, Tuple, Union

from .config import (
    ALGORITHM_ALIASES,
    CellKey,
    CoverAlgorithm,
    CoverConfig,
    CoverProgress,
    InvalidInputError,
    Point3,
)
from .geometry import boundary_margin, half_chords, squared_distance
from .result import CoverResult
from .sites import SiteInput, SiteRepository

SQRT2 = math.sqrt(2)
SQRT3 = math.sqrt(3)

AlgorithmChoice = Union[CoverAlgorithm, int, str, None]


def resolve_algorithm(choice: AlgorithmChoice) -> Optional[CoverAlgorithm]:
    """Map an enum member, its value or its name to a CoverAlgorithm (None if unknown)."""
    if isinstance(choice, CoverAlgorithm):
        return choice
    if isinstance(choice, bool):
        return None
    if isinstance(choice, numbers.Integral):
        try:
            return CoverAlgorithm(int(choice))
        except ValueError:
            return None
    if isinstance(choice, str):
        key = choice.strip().lower()
        if key in ALGORITHM_ALIASES:
            return ALGORITHM_ALIASES[key]
        try:
            return CoverAlgorithm[key.upper()]
        except KeyError:
            return None
    return None


class DiskCoverer:
    """Covers a set of sites with disks of a fixed radius using various strategies."""

    def __init__(self, config: Optional[CoverConfig] = None):
        # private copy, set_algorithm must not touch the caller's config
        self.config = dataclasses.replace(config) if config is not None else CoverConfig()
        self.repository = SiteRepository()
        self.result: Optional[CoverResult] = None
        self.progress = CoverProgress()

    def _select(self, choice: AlgorithmChoice) -> CoverAlgorithm:
        algorithm = resolve_algorithm(choice)
        if algorithm is None:
            if self.config.verbose:
                print(f"Unknown algorithm {choice!r}, using {CoverAlgorithm.GRID.name}")
            algorithm = CoverAlgorithm.GRID
        return algorithm

    def set_algorithm(self, choice: AlgorithmChoice) -> CoverAlgorithm:
        """Select the covering procedure. Unknown choices fall back to the grid cover."""
        self.config.algorithm = self._select(choice)
        return self.config.algorithm

    def set_sites(self, points: SiteInput) -> None:
        self.repository.set_sites(points)

    def _new_result(self, radius: float) -> CoverResult:
        return CoverResult(radius, self.repository.size(), self.repository.bounds)

    def _report(self, phase: str, sites_processed: int, disks_placed: int) -> None:
        self.progress = CoverProgress(
            sites_processed=sites_processed,
            total_sites=self.repository.size(),
            disks_placed=disks_placed,
            phase=phase,
        )
        if self.config.verbose:
            print(self.progress)

    def _margin(self, radius: float) -> float:
        """Relative shrink of lattice cells and strip chords for the stored sites."""
        bounds = self.repository.bounds
        magnitude = float(max(np.max(np.abs(bounds.min_corner[:2])), np.max(np.abs(bounds.max_corner[:2]))))
        return boundary_margin(self.config.boundary_epsilon, radius, magnitude + radius)

    # =========================================================================
    # Grid Cover (FastCover)
    # =========================================================================

    def _cover_grid(self, radius: float) -> CoverResult:
        """
        Hashed-lattice greedy cover.

        Cells are squares of width sqrt(2) * radius, so a disk at a cell
        center covers the whole cell. A site opens its cell unless it is
        already covered by an occupied axis-adjacent cell.
        """
        result = self._new_result(radius)
        sites = self.repository.array
        height = self.config.default_height
        radius_sq = radius * radius

        grid_width = SQRT2 * radius * (1.0 - self._margin(radius))
        half_width = grid_width / 2
        near_high = grid_width * 1.5 - radius
        near_low = grid_width * 0.5 - radius

        verticals = np.floor(sites[:, 0] / grid_width).astype(np.int64)
        horizontals = np.floor(sites[:, 1] / grid_width).astype(np.int64)
        occupied: Set[CellKey] = set()

        def center(v: int, h: int) -> Point3:
            return (v * grid_width + half_width, h * grid_width + half_width, height)

        def covered_by(v: int, h: int, site: np.ndarray) -> bool:
            return (v, h) in occupied and squared_distance(site, center(v, h)) <= radius_sq

        for site, v, h in zip(sites, verticals.tolist(), horizontals.tolist()):
            if (v, h) in occupied:
                continue

            x, y = site[0], site[1]
            left = v * grid_width
            bottom = h * grid_width

            if x >= left + near_high and covered_by(v + 1, h, site):
                continue
            if x <= left - near_low and covered_by(v - 1, h, site):
                continue
            if y <= bottom + near_high and covered_by(v, h - 1, site):
                continue
            if y >= bottom - near_low and covered_by(v, h + 1, site):
                continue

            occupied.add((v, h))
            result.add(center(v, h))

        self._report("grid", len(sites), result.size())
        return result

    # =========================================================================
    # Sweep Cover (BLMS)
    # =========================================================================

    def _cover_sweep(self, radius: float) -> CoverResult:
        """
        Sweep the sites left to right, keeping the disks placed within
        radius behind the sweep line in a y-ordered active window.
        An uncovered site gets a disk centered on itself.
        """
        result = self._new_result(radius)
        sites = self.repository.array
        height = self.config.default_height
        radius_sq = radius * radius

        order = np.lexsort((sites[:, 1], sites[:, 0]))

        # (y, x) keys sorted by y; disks enter in non-decreasing x
        window: List[Tuple[float, float]] = []
        placed: Deque[Tuple[float, float]] = deque()

        for index in order:
            x, y = float(sites[index, 0]), float(sites[index, 1])

            while placed and placed[0][1] < x - radius:
                del window[bisect_left(window, placed.popleft())]

            if self._window_covers(window, x, y, radius, radius_sq):
                continue

            key = (y, x)
            insort(window, key)
            placed.append(key)
            result.add((x, y, height))

        self._report("sweep", len(sites), result.size())
        return result

    @staticmethod
    def _window_covers(window: List[Tuple[float, float]], x: float, y: float,
                       radius: float, radius_sq: float) -> bool:
        """Walk outward from y in both directions while the y gap is within radius."""
        start = bisect_left(window, (y, -math.inf))

        j = start
        while j < len(window) and window[j][0] - y <= radius:
            wy, wx = window[j]
            if squared_distance((x, y), (wx, wy)) <= radius_sq:
                return True
            j += 1

        j = start - 1
        while j >= 0 and y - window[j][0] <= radius:
            wy, wx = window[j]
            if squared_distance((x, y), (wx, wy)) <= radius_sq:
                return True
            j -= 1

        return False

    # =========================================================================
    # Strip Cover (LL)
    # =========================================================================

    def _cover_strips(self, radius: float) -> CoverResult:
        """
        Cut the plane into vertical strips of width sqrt(3) * radius and
        cover each strip with disks on its center line, solving the
        one-dimensional interval stabbing problem per strip. Every phase
        offset of the strips is tried and the smallest cover is kept.

        Strips start at the left edge of the sites, and the geometry is
        worked out relative to the lower-left corner of the bounding box.
        """
        sites = self.repository.array
        origin = self.repository.bounds.min_corner[:2]
        local = sites[:, :2] - origin
        margin = self._margin(radius)
        phases = max(1, self.config.strip_phases)
        strip_width = SQRT3 * radius

        best: Optional[List[Tuple[float, float]]] = None
        best_phase = 0
        for phase in range(phases):
            centers = self._strip_phase(local, radius, strip_width, phase * strip_width / phases, margin)
            if self.config.verbose:
                print(f"  Phase {phase}: {len(centers)} disks")
            if best is None or len(centers) < len(best):
                best = centers
                best_phase = phase

        result = self._new_result(radius)
        for x, y in best:
            result.add((origin[0] + x, origin[1] + y, self.config.default_height))

        self._report(f"strips, phase {best_phase}", len(sites), result.size())
        return result

    def _strip_phase(self, sites: np.ndarray, radius: float, strip_width: float,
                     offset: float, margin: float) -> List[Tuple[float, float]]:
        """Disk centers for one strip offset, strips taken left to right."""
        xs, ys = sites[:, 0], sites[:, 1]
        strips = np.floor((xs - offset) / strip_width).astype(np.int64)
        lines = offset + (strips + 0.5) * strip_width

        chords = half_chords(radius, xs - lines) * (1.0 - margin)
        tops = ys + chords
        bottoms = ys - chords

        # strip ascending, then segment top descending
        order = np.lexsort((-tops, strips))

        centers: List[Tuple[float, float]] = []
        current_strip = None
        low = 0.0
        line = 0.0
        for index in order:
            strip = strips[index]
            top, bottom = tops[index], bottoms[index]

            if strip == current_strip and top >= low:
                low = max(low, bottom)
                continue

            if current_strip is not None:
                centers.append((float(line), float(low)))
            current_strip = strip
            line = lines[index]
            low = bottom

        if current_strip is not None:
            centers.append((float(line), float(low)))
        return centers

    # =========================================================================
    # Main Entry Points
    # =========================================================================

    def cover_sites(self, radius: float) -> CoverResult:
        """
        Cover the stored sites with disks of the given radius.

        Strategy selection follows config.algorithm:
        1. GRID: hashed-lattice greedy (fastest, most disks)
        2. SWEEP: active-window sweep (disks centered on sites)
        3. STRIPS: best of the phase-shifted strip covers (fewest disks)

        Returns:
            CoverResult holding the disk centers in generation order.
        """
        if self.repository.size() == 0:
            raise InvalidInputError("no sites to cover, call set_sites first")
        if isinstance(radius, bool) or not (isinstance(radius, numbers.Real) and math.isfinite(radius) and radius > 0):
            raise InvalidInputError(f"radius must be a positive finite number, got {radius!r}")
        radius = float(radius)

        algorithm = self._select(self.config.algorithm)

        if self.config.verbose:
            print(f"Covering {self.repository.size()} sites with radius {radius} ({algorithm.name})")
            if self.repository.size() > self.config.max_coverage_sites:
                print(f"Warning: {self.repository.size()} sites exceeds max_coverage_sites={self.config.max_coverage_sites}")

        if algorithm is CoverAlgorithm.SWEEP:
            self.result = self._cover_sweep(radius)
        elif algorithm is CoverAlgorithm.STRIPS:
            self.result = self._cover_strips(radius)
        else:
            self.result = self._cover_grid(radius)

        if self.config.verbose:
            print(f"Done! {self.result.size()} disks for {self.result.sites_count()} sites")
        return self.result


def cover_sites(points: SiteInput, radius: float, algorithm: AlgorithmChoice = None,
                config: Optional[CoverConfig] = None) -> CoverResult:
    """Cover points with disks of the given radius and return the result."""
    coverer = DiskCoverer(config)
    if algorithm is not None:
        coverer.set_algorithm(algorithm)
    coverer.set_sites(points)
    return coverer.cover_sites(radius)
