from __future__ import annotations
from dataclasses import dataclass


@dataclass
class PaintResult:
    """
    Summary of one paint run over a raster.
    """
    shapes: int          # live representative colors after resolution
    kernel_dim: int      # tile edge length used for both passes
    width: int
    height: int
    tiles_colored: int   # first pass, overlapping tiles
    tiles_resolved: int  # second pass, non-overlapping tiles
