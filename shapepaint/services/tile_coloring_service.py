from __future__ import annotations
import logging
import numpy as np
from ..models.color import is_black, is_marked
from ..models.tile import Tile
from ..repositories.color_registry import ColorRegistry

logger = logging.getLogger(__name__)


class TileColoringService:
    """
    First-pass coloring of one tile.
    *   Uses only neighbours that are already colored: the pixel above and the pixel to the left.
    *   Row 0 and column 0 are expected to carry colors from the previous
        overlapping tiles, except on the raster's top/left edge where they are seeded here.
    *   No I/O here, works only with Tile objects.
    """
    def __init__(self, registry: ColorRegistry):
        self.registry = registry

    def color(self, tile: Tile, seed_left_column: bool = False, seed_top_row: bool = False) -> Tile:
        if tile.is_empty:
            return tile

        grid = tile.packed().tolist()
        if seed_left_column:
            self._seed_line(grid, [(0, y) for y in range(tile.height)])
        if seed_top_row:
            self._seed_line(grid, [(x, 0) for x in range(tile.width)])
        self._scan(grid)

        tile.set_packed(np.asarray(grid, dtype=np.uint32))
        return tile

    # ─── Internal helpers ──────────────────────────────────────────
    def _seed_line(self, grid: list[list[int]], coords: list[tuple[int, int]]) -> None:
        """
        Color a boundary line where each pixel's only colored neighbour is the
        previous one on the line.
        """
        prev = grid[0][0]
        if is_black(prev):
            prev = self.registry.allocate()
        for x, y in coords:
            c = grid[y][x]
            if is_marked(c):
                c = prev if is_marked(prev) else self.registry.allocate()
            grid[y][x] = c
            prev = c

    def _scan(self, grid: list[list[int]]) -> None:
        for y in range(1, len(grid)):
            above, row = grid[y - 1], grid[y]
            for x in range(1, len(row)):
                if not is_marked(row[x]):
                    continue
                tc, lc = above[x], row[x - 1]
                if is_marked(tc) and is_marked(lc):
                    self.registry.merge(lc, tc)

                if is_marked(tc):
                    row[x] = tc
                elif is_marked(lc):
                    row[x] = lc
                else:
                    row[x] = self.registry.allocate()
