from __future__ import annotations
import logging
import numpy as np
from .color import BLACK, WHITE, Color

logger = logging.getLogger(__name__)

MAX_DRAWS = 32


class ColorAllocator:
    """
    Hands out the display colors of finished shapes.
    *   Channels are drawn from [low, high) so a shape color is never black or white.
    *   Never returns the same color twice until reset().
    *   Once the mid range is used up (or too crowded to sample), colors spill
        into the rest of the 24-bit space, skipping the black/white sentinels.
    *   A fixed seed reproduces the exact sequence of colors.
    """
    def __init__(self, seed: int | None = None, low: int = 50, high: int = 200):
        if not 0 < low < high <= 255:
            raise ValueError(f"Invalid channel range [{low}, {high})")
        self.seed = seed
        self.low = low
        self.high = high
        self.capacity = (high - low) ** 3
        self._rng = np.random.default_rng(seed)
        self._issued: set[int] = set()
        self._by_label: dict[int, int] = {}
        self._spill = BLACK + 1
        self._spilled = False
        self._mid_count = 0

    def __len__(self) -> int:
        return len(self._issued)

    def next_color(self) -> int:
        """Return a packed color that has not been handed out yet."""
        if self._mid_count < self.capacity:
            for _ in range(MAX_DRAWS):
                r, g, b = (int(v) for v in self._rng.integers(self.low, self.high, size=3))
                color = Color(r, g, b).packed
                if color not in self._issued:
                    self._issued.add(color)
                    self._mid_count += 1
                    return color
        return self._next_spill()

    def color_for(self, label: int) -> int:
        """Display color of a canonical shape label, stable until reset()."""
        color = self._by_label.get(label)
        if color is None:
            color = self._by_label[label] = self.next_color()
        return color

    def reset(self) -> None:
        """Forget issued colors and restart the sequence from the seed."""
        logger.debug(f"Resetting allocator after {len(self._issued)} colors")
        self._rng = np.random.default_rng(self.seed)
        self._issued.clear()
        self._by_label.clear()
        self._spill = BLACK + 1
        self._spilled = False
        self._mid_count = 0

    def _next_spill(self) -> int:
        while self._spill in self._issued:
            self._spill += 1
        if self._spill >= WHITE:
            raise RuntimeError(f"Color space exhausted after {len(self._issued)} colors")
        color = self._spill
        if not self._spilled:
            logger.warning(f"Mid-range palette crowded after {len(self._issued)} colors, "
                           f"continuing from {Color.from_packed(color).to_hex()}")
            self._spilled = True
        self._issued.add(color)
        self._spill += 1
        return color
