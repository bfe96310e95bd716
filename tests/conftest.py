"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
from PIL import Image


def pixels_from_rows(rows: list[str]) -> np.ndarray:
    """'#' is a marked (black) pixel, anything else is white."""
    h, w = len(rows), len(rows[0])
    pixels = np.full((h, w, 3), 255, dtype=np.uint8)
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch == "#":
                pixels[y, x] = 0
    return pixels


def marked_mask(pixels: np.ndarray) -> np.ndarray:
    return (pixels != 255).any(axis=2)


@pytest.fixture
def write_ppm(tmp_path):
    def _write(name: str, pixels: np.ndarray) -> Path:
        path = tmp_path / name
        Image.fromarray(pixels).save(path, format="PPM")
        return path
    return _write


@pytest.fixture
def read_ppm():
    def _read(path: Path) -> np.ndarray:
        with Image.open(path) as img:
            return np.asarray(img.convert("RGB")).copy()
    return _read


@pytest.fixture
def rows_to_pixels():
    return pixels_from_rows


@pytest.fixture
def mask_of():
    return marked_mask
