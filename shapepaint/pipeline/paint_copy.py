from __future__ import annotations
from pathlib import Path
from typing import Union
import logging

from ..models.paint_result import PaintResult
from ..services.painter_service import PainterService
from ..services.raster_service import RasterService

logger = logging.getLogger(__name__)

raster_service = RasterService()


def paint_copy(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    kernel_dim: int | None = None,
    seed: int | None = None,
    show_progress: bool | None = None,
) -> PaintResult:
    """
    Copy input_path to output_path and label the shapes of the copy in place.

    Args:
        input_path: black/white P6 raster, left unmodified
        output_path: destination of the painted raster
        kernel_dim: tile edge length (see PainterService)
        seed: color allocator seed
        show_progress: draw progress bars

    Returns:
        PaintResult: shape count and tiling statistics
    """
    raster_service.copy(input_path, output_path)
    painter = PainterService(kernel_dim=kernel_dim, seed=seed, show_progress=show_progress)
    with raster_service.open(output_path) as raster:
        result = painter.paint(raster)
    logger.info(f"Painted {output_path}: {result.shapes} shapes")
    return result
