from __future__ import annotations
from dataclasses import dataclass

BYTES_PER_PIXEL = 3


@dataclass(frozen=True)
class RasterHeader:
    """
    Parsed header of a binary PPM (P6) raster.
    data_offset is where the first pixel byte lives in the file.
    """
    width: int
    height: int
    maxval: int
    data_offset: int

    @property
    def row_bytes(self) -> int:
        return self.width * BYTES_PER_PIXEL

    @property
    def body_bytes(self) -> int:
        return self.row_bytes * self.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def pixel_offset(self, x: int, y: int) -> int:
        return self.data_offset + y * self.row_bytes + x * BYTES_PER_PIXEL

    def anchors(self, stride: int):
        """Yield tile anchors row by row, left to right, top to bottom."""
        for y in range(0, self.height, stride):
            for x in range(0, self.width, stride):
                yield x, y

    def count_anchors(self, stride: int) -> int:
        return len(range(0, self.width, stride)) * len(range(0, self.height, stride))
