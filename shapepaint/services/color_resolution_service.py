from __future__ import annotations
import logging
import numpy as np
from tqdm import tqdm
from ..models.color import BLACK, WHITE
from ..models.color_allocator import ColorAllocator
from ..models.tile import Tile
from ..repositories.color_registry import ColorRegistry
from ..repositories.raster_repository import RasterRepository

logger = logging.getLogger(__name__)


class ColorResolutionService:
    """
    Second pass: rewrites every labelled pixel with the display color of its
    canonical label. No new equivalences appear here, so tiles do not need
    to overlap. White and black pass through unchanged.
    """
    def __init__(self, registry: ColorRegistry, allocator: ColorAllocator | None = None):
        self.registry = registry
        self.allocator = allocator if allocator is not None else ColorAllocator()

    def display_color(self, label: int) -> int:
        if label in (WHITE, BLACK):
            return label
        return self.allocator.color_for(self.registry.resolve(label))

    def resolve_tile(self, tile: Tile) -> Tile:
        if tile.is_empty:
            return tile
        packed = tile.packed()
        # each distinct label is looked up once, then scattered back
        uniq, inverse = np.unique(packed, return_inverse=True)
        resolved = np.array([self.display_color(int(c)) for c in uniq], dtype=np.uint32)
        tile.set_packed(resolved[inverse].reshape(packed.shape))
        return tile

    def resolve_raster(self, raster: RasterRepository, kernel_dim: int, show_progress: bool = False) -> int:
        """Resolve the whole raster tile by tile. Returns the number of tiles processed."""
        header = raster.header
        total = header.count_anchors(kernel_dim)
        anchors = header.anchors(kernel_dim)
        for x, y in tqdm(anchors, total=total, desc="resolve", ncols=70, disable=not show_progress):
            tile = raster.read_tile(x, y, kernel_dim, kernel_dim)
            raster.store_tile(self.resolve_tile(tile))
        logger.debug(f"Resolved {total} tiles of {kernel_dim}x{kernel_dim}")
        return total

    def reset(self) -> None:
        self.allocator.reset()
