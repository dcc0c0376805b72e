from __future__ import annotations

import math
from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

# ~50 km at the equator.
GRID_CELL_SIZE_DEG = 0.5

CellKey = Tuple[int, int]


class SpatialGrid:
    """
    Uniform lat/lng bucket index over a fixed list of points.

    ``nearby`` returns every index in the square block of cells around a
    query point, so callers still have to measure exact distances.
    """

    def __init__(
        self,
        points: Sequence[Tuple[float, float]],
        cell_size_deg: float = GRID_CELL_SIZE_DEG,
    ) -> None:
        self.cell_size_deg = cell_size_deg
        self._cells: Dict[CellKey, List[int]] = defaultdict(list)
        for index, (lat, lng) in enumerate(points):
            self._cells[self.cell_key(lat, lng)].append(index)
        self._size = len(points)

    def __len__(self) -> int:
        return self._size

    def cell_key(self, lat: float, lng: float) -> CellKey:
        return (
            math.floor(lat / self.cell_size_deg),
            math.floor(lng / self.cell_size_deg),
        )

    def nearby(self, lat: float, lng: float, radius_cells: int = 2) -> List[int]:
        center_lat, center_lng = self.cell_key(lat, lng)
        indices: List[int] = []
        for d_lat in range(-radius_cells, radius_cells + 1):
            for d_lng in range(-radius_cells, radius_cells + 1):
                cell = self._cells.get((center_lat + d_lat, center_lng + d_lng))
                if cell:
                    indices.extend(cell)
        return indices
