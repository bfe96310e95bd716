from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class Color:
    """
    Value-object for one RGB pixel.
    Everything past the repository layer works with the packed integer form
    (r << 16 | g << 8 | b) so colors can key dicts and compare cheaply.
    """
    r: int
    g: int
    b: int

    @property
    def packed(self) -> int:
        return (self.r << 16) | (self.g << 8) | self.b

    @classmethod
    def from_packed(cls, value: int) -> Color:
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


WHITE = Color(255, 255, 255).packed   # unmarked background
BLACK = Color(0, 0, 0).packed         # marked, not yet colored


def is_marked(value: int) -> bool:
    return value != WHITE


def is_black(value: int) -> bool:
    return value == BLACK


def pack(pixels: np.ndarray) -> np.ndarray:
    """(H, W, 3) uint8 → (H, W) uint32 packed colors."""
    p = pixels.astype(np.uint32)
    return (p[..., 0] << 16) | (p[..., 1] << 8) | p[..., 2]


def unpack(packed: np.ndarray) -> np.ndarray:
    """(H, W) packed colors → (H, W, 3) uint8."""
    packed = np.asarray(packed, dtype=np.uint32)
    out = np.empty(packed.shape + (3,), dtype=np.uint8)
    out[..., 0] = (packed >> 16) & 0xFF
    out[..., 1] = (packed >> 8) & 0xFF
    out[..., 2] = packed & 0xFF
    return out
