from __future__ import annotations
import logging
from ..models.color import BLACK, WHITE

logger = logging.getLogger(__name__)


class ColorRegistry:
    """
    Equivalences between shape labels discovered independently.

    Labels are the values first-pass pixels carry: a counter over the 24-bit
    pixel space, skipping the black/white sentinels. Display colors are
    chosen later, per canonical label, by the resolution pass.

    Each entry maps a label to the label it was merged into. Entries are only
    ever added between two distinct canonical labels, so chains stay acyclic
    and resolve() always terminates. ncolors counts the live (unmerged)
    representatives.
    """
    def __init__(self):
        self._merged_into: dict[int, int] = {}
        self._next_label = BLACK + 1
        self.ncolors = 0

    def __len__(self) -> int:
        return len(self._merged_into)

    @property
    def allocated(self) -> int:
        return self._next_label - (BLACK + 1)

    def resolve(self, color: int) -> int:
        """Follow the merge chain from color to its canonical representative."""
        while color in self._merged_into:
            color = self._merged_into[color]
        return color

    def merge(self, a: int, b: int) -> bool:
        """
        Unify the shapes of a and b. Returns False when they already share a
        representative (including a == b).
        """
        root_a = self.resolve(a)
        root_b = self.resolve(b)
        if root_a == root_b:
            return False
        self._merged_into[root_a] = root_b
        self.ncolors -= 1
        return True

    def allocate(self) -> int:
        if self._next_label >= WHITE:
            raise RuntimeError(f"Label space exhausted after {self.allocated} labels")
        label = self._next_label
        self._next_label += 1
        self.ncolors += 1
        return label

    def reset(self) -> None:
        logger.debug(f"Resetting registry ({len(self._merged_into)} merges, {self.ncolors} live colors)")
        self._merged_into.clear()
        self._next_label = BLACK + 1
        self.ncolors = 0
