from __future__ import annotations
from pathlib import Path
from typing import BinaryIO, Union
import logging
import os

import numpy as np

from ..models.raster import BYTES_PER_PIXEL, RasterHeader
from ..models.tile import Tile

logger = logging.getLogger(__name__)

MAGIC = b"P6"
MAXVAL = 255


class RasterFormatError(ValueError):
    """The file is not a binary PPM raster this package can process."""


def _clamp(v: int, lo: int, hi: int) -> int:
    return lo if v < lo else hi if v > hi else v


class RasterRepository:
    """
    Random-access pixel store over a binary PPM (P6) file on disk.
    *   Only one tile is ever held in memory; every read/write is a seek per tile row.
    *   Rectangles are clamped to the raster; anchors outside it give empty tiles.
    """
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._fh: BinaryIO = open(self.path, "r+b")
        try:
            self.header = self._read_header(self._fh)
            self._check_body()
        except Exception:
            self._fh.close()
            raise
        logger.debug(f"Opened raster {self.path} ({self.header.width}x{self.header.height})")

    # ─── Lifecycle ─────────────────────────────────────────────────
    def __enter__(self) -> RasterRepository:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if not self._fh.closed:
            self._fh.close()

    def flush(self) -> None:
        self._fh.flush()

    # ─── Header parsing ────────────────────────────────────────────
    @staticmethod
    def _read_header(fh: BinaryIO) -> RasterHeader:
        """
        Reads magic, width, height and maxval. Tokens are whitespace separated,
        '#' starts a comment that runs to end of line, and exactly one
        whitespace byte follows maxval.
        """
        tokens: list[bytes] = []
        token = b""
        while len(tokens) < 4:
            byte = fh.read(1)
            if not byte:
                raise RasterFormatError("Truncated PPM header")
            if byte == b"#":
                fh.readline()
                byte = b"\n"
            if byte.isspace():
                if token:
                    tokens.append(token)
                    token = b""
                continue
            token += byte

        magic, width, height, maxval = tokens
        if magic != MAGIC:
            raise RasterFormatError(f"Unsupported magic {magic!r}, expected {MAGIC!r}")
        try:
            width, height, maxval = int(width), int(height), int(maxval)
        except ValueError as err:
            raise RasterFormatError(f"Invalid PPM dimensions: {err}") from err
        if width < 0 or height < 0:
            raise RasterFormatError(f"Negative PPM dimensions {width}x{height}")
        if maxval != MAXVAL:
            raise RasterFormatError(f"Unsupported maxval {maxval}, expected {MAXVAL}")
        return RasterHeader(width=width, height=height, maxval=maxval, data_offset=fh.tell())

    def _check_body(self) -> None:
        size = os.fstat(self._fh.fileno()).st_size
        expected = self.header.data_offset + self.header.body_bytes
        if size < expected:
            raise RasterFormatError(f"Raster body truncated: {size} bytes, expected {expected}")

    # ─── Public API ────────────────────────────────────────────────
    def dimensions(self) -> tuple[int, int]:
        return self.header.width, self.header.height

    def read_tile(self, x: int, y: int, width: int, height: int) -> Tile:
        if not self.header.contains(x, y):
            return Tile.empty(x, y)
        width = _clamp(width, 0, self.header.width - x)
        height = _clamp(height, 0, self.header.height - y)

        pixels = np.empty((height, width, BYTES_PER_PIXEL), dtype=np.uint8)
        row_len = width * BYTES_PER_PIXEL
        for row in range(height):
            self._fh.seek(self.header.pixel_offset(x, y + row))
            chunk = self._fh.read(row_len)
            if len(chunk) != row_len:
                raise RasterFormatError(f"Short read at row {y + row} of {self.path}")
            pixels[row] = np.frombuffer(chunk, dtype=np.uint8).reshape(width, BYTES_PER_PIXEL)
        return Tile(x, y, pixels)

    def write_tile(self, x: int, y: int, tile: Tile) -> None:
        if not self.header.contains(x, y):
            return
        width = _clamp(tile.width, 0, self.header.width - x)
        height = _clamp(tile.height, 0, self.header.height - y)

        for row in range(height):
            self._fh.seek(self.header.pixel_offset(x, y + row))
            self._fh.write(np.ascontiguousarray(tile.pixels[row, :width]).tobytes())

    def store_tile(self, tile: Tile) -> None:
        """Write a tile back at its own anchor."""
        self.write_tile(tile.x, tile.y, tile)

    @staticmethod
    def create(path: Union[str, Path], dim: int, rng: np.random.Generator | None = None) -> Path:
        """
        Write a dim x dim raster where every pixel is black or white by a
        fair coin flip. Rows are generated one at a time.
        """
        if dim <= 0:
            raise ValueError(f"Raster dimension must be positive, got {dim}")
        path = Path(path)
        rng = rng or np.random.default_rng()
        with open(path, "wb") as fh:
            fh.write(b"%s\n%d %d\n%d\n" % (MAGIC, dim, dim, MAXVAL))
            for _ in range(dim):
                marked = rng.integers(0, 2, size=dim).astype(bool)
                values = np.where(marked, 0, 255).astype(np.uint8)
                fh.write(np.repeat(values, BYTES_PER_PIXEL).tobytes())
        logger.info(f"Generated {dim}x{dim} raster at {path}")
        return path
