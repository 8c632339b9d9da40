"""
Cover result: the disk centers produced by one covering run.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

from .config import EmptyCoverError, Point3
from .geometry import BoundingBox


class CoverResult:
    """
    Append-only list of disk centers with a cyclic read cursor.

    The cursor is interior state: get_next() advances it and every add()
    rewinds it to the first disk. disk_at() offers the same cyclic access
    with an explicit cursor and no hidden state.
    """

    def __init__(self, radius: float, sites_count: int = 0, site_bounds: Optional[BoundingBox] = None):
        self.radius = radius
        self._sites_count = sites_count
        self._disks: List[Point3] = []
        self._cursor = 0
        self.bounds = site_bounds

    def add(self, point: Sequence[float]) -> None:
        """Append a disk center and grow the bounding box by ±radius around it."""
        disk = (float(point[0]), float(point[1]), float(point[2]))
        self._disks.append(disk)
        self._cursor = 0
        if self.bounds is None:
            self.bounds = BoundingBox.from_points([disk]).update(disk, self.radius)
        else:
            self.bounds = self.bounds.update(disk, self.radius)

    def get_next(self) -> Point3:
        """Return the disk under the cursor and advance it, wrapping at the end."""
        disk, self._cursor = self.disk_at(self._cursor)
        return disk

    def disk_at(self, cursor: int) -> Tuple[Point3, int]:
        """Return the disk at cursor (taken cyclically) and the cursor after it."""
        if not self._disks:
            raise EmptyCoverError("cover holds no disks")
        index = cursor % len(self._disks)
        return self._disks[index], (index + 1) % len(self._disks)

    def positions(self) -> List[Point3]:
        return list(self._disks)

    def size(self) -> int:
        return len(self._disks)

    def sites_count(self) -> int:
        return self._sites_count

    @property
    def compression_ratio(self) -> float:
        """Sites per disk."""
        return self._sites_count / len(self._disks) if self._disks else 0.0

    def __len__(self) -> int:
        return len(self._disks)

    def __iter__(self) -> Iterator[Point3]:
        return iter(self._disks)

    def __repr__(self) -> str:
        return f"CoverResult(disks={len(self._disks)}, sites={self._sites_count}, radius={self.radius})"
