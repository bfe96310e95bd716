from __future__ import annotations
from pathlib import Path
from typing import Union
import logging
import os
import shutil

import numpy as np
from dotenv import load_dotenv

from ..repositories.raster_repository import RasterRepository

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class RasterService:
    """File-level helpers around RasterRepository. No coloring logic here."""
    def __init__(self):
        self.raster_repository = RasterRepository
        env_seed = os.getenv("RANDOM_SEED")
        self.default_seed = int(env_seed) if env_seed else None

    def open(self, path: Union[str, Path]) -> RasterRepository:
        """Open an existing raster for in-place tile access."""
        return self.raster_repository(path)

    def generate(self, path: Union[str, Path], dim: int, seed: int | None = None) -> Path:
        """Write a random black/white raster of square size dim (seed defaults to RANDOM_SEED)."""
        if seed is None:
            seed = self.default_seed
        return self.raster_repository.create(path, dim, rng=np.random.default_rng(seed))

    @staticmethod
    def copy(src: Union[str, Path], dst: Union[str, Path]) -> Path:
        """Byte-for-byte copy, so painting the copy leaves src untouched."""
        src, dst = Path(src), Path(dst)
        if src.resolve() == dst.resolve():
            raise ValueError(f"Input and output are the same file: {src}")
        shutil.copyfile(src, dst)
        logger.debug(f"Copied {src} → {dst}")
        return dst
