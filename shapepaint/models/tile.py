from __future__ import annotations
from dataclasses import dataclass
import numpy as np
from .color import pack, unpack


@dataclass
class Tile:
    """
    In-memory window into a raster.
    pixels has shape (H, W, 3), dtype uint8, RGB order; (x, y) is the anchor
    of its top-left pixel in the raster.
    """
    x: int
    y: int
    pixels: np.ndarray

    @classmethod
    def empty(cls, x: int = 0, y: int = 0) -> Tile:
        return cls(x, y, np.zeros((0, 0, 3), dtype=np.uint8))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def packed(self) -> np.ndarray:
        return pack(self.pixels)

    def set_packed(self, packed: np.ndarray) -> None:
        if packed.shape != self.pixels.shape[:2]:
            raise ValueError(f"Packed shape {packed.shape} does not match tile {self.pixels.shape[:2]}")
        self.pixels = unpack(packed)
