from __future__ import annotations
import logging
import os

from dotenv import load_dotenv
from tqdm import tqdm

from ..models.color_allocator import ColorAllocator
from ..models.paint_result import PaintResult
from ..repositories.color_registry import ColorRegistry
from ..repositories.raster_repository import RasterRepository
from .color_resolution_service import ColorResolutionService
from .tile_coloring_service import TileColoringService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

MIN_KERNEL_DIM = 2


def _env_seed() -> int | None:
    value = os.getenv("RANDOM_SEED")
    return int(value) if value else None


class PainterService:
    """
    Labels every 4-connected shape of marked pixels in a raster with its own color.

    Pass 1 colors overlapping tiles (stride kernel_dim - 1) so the shared row
    and column of neighbouring tiles carry equivalences across tile borders.
    Pass 2 rewrites every pixel with its canonical color (stride kernel_dim).
    Pixel memory is bounded by one kernel_dim x kernel_dim tile; the registry
    and the palette grow with the number of labels and shapes.
    """
    def __init__(self,
                 kernel_dim: int | None = None,
                 seed: int | None = None,
                 show_progress: bool | None = None,
                 allocator: ColorAllocator | None = None):
        """
        Args:
            kernel_dim: tile edge length, clamped to at least 2 (defaults to KERNEL_DIM env var)
            seed: color allocator seed (defaults to RANDOM_SEED env var, unset = random)
            show_progress: draw tqdm bars for both passes (defaults to SHOW_PROGRESS env var)
            allocator: display palette, overrides seed when given
        """
        if kernel_dim is None:
            kernel_dim = int(os.getenv("KERNEL_DIM", "16"))
        if kernel_dim < MIN_KERNEL_DIM:
            logger.warning(f"Kernel size {kernel_dim} too small, using {MIN_KERNEL_DIM}")
            kernel_dim = MIN_KERNEL_DIM
        self.kernel_dim = kernel_dim

        if show_progress is None:
            show_progress = os.getenv("SHOW_PROGRESS", "0") == "1"
        self.show_progress = show_progress

        if allocator is None:
            seed = seed if seed is not None else _env_seed()
            allocator = ColorAllocator(seed=seed)
        self.registry = ColorRegistry()
        self.colorer = TileColoringService(self.registry)
        self.resolver = ColorResolutionService(self.registry, allocator)

    # ─── Public API ────────────────────────────────────────────────
    def paint(self, raster: RasterRepository) -> PaintResult:
        width, height = raster.dimensions()
        logger.info(f"Painting {raster.path} ({width}x{height}) with kernel size {self.kernel_dim}")
        try:
            tiles_colored = self._color_pass(raster)
            tiles_resolved = self.resolver.resolve_raster(raster, self.kernel_dim, self.show_progress)
            raster.flush()
            result = PaintResult(
                shapes=self.registry.ncolors,
                kernel_dim=self.kernel_dim,
                width=width,
                height=height,
                tiles_colored=tiles_colored,
                tiles_resolved=tiles_resolved,
            )
        finally:
            self.registry.reset()
            self.resolver.reset()

        logger.info(f"shapes: {result.shapes}")
        return result

    # ─── Internal helpers ──────────────────────────────────────────
    def _color_pass(self, raster: RasterRepository) -> int:
        stride = self.kernel_dim - 1
        header = raster.header
        total = header.count_anchors(stride)
        for x, y in tqdm(header.anchors(stride), total=total, desc="color", ncols=70,
                         disable=not self.show_progress):
            tile = raster.read_tile(x, y, self.kernel_dim, self.kernel_dim)
            self.colorer.color(tile, seed_left_column=(x == 0), seed_top_row=(y == 0))
            raster.store_tile(tile)
        logger.debug(f"Colored {total} tiles, {self.registry.allocated} labels, {self.registry.ncolors} live")
        return total
