"""
FeatureExtractor: turns a scalar grid into a FeatureDataset.

Each grid cell becomes one record holding its intensity, the mean and
population standard deviation of its clamped 3x3x3 neighborhood, and the
magnitude of its central-difference gradient.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum

import numpy as np

from volbrush.constants import SUPPORTED_SAMPLE_DTYPE
from volbrush.dataset import FeatureDataset
from volbrush.features.config import FeatureConfig
from volbrush.features.kernels import extract_features_numba
from volbrush.grid import ScalarGrid

logger = logging.getLogger(__name__)


class ExtractionStatus(Enum):
    OK = "ok"
    SKIPPED_UNSUPPORTED = "skipped_unsupported"


@dataclass(frozen=True)
class ExtractionResult:
    """
    Outcome of one extraction run.

    Attributes:
        status: OK, or SKIPPED_UNSUPPORTED when the grid dtype is not accepted
        dataset: The produced dataset, or the previous one (possibly None) when skipped
    """

    status: ExtractionStatus
    dataset: FeatureDataset | None

    @property
    def skipped(self) -> bool:
        return self.status is ExtractionStatus.SKIPPED_UNSUPPORTED


class FeatureExtractor:
    """
    Per-cell neighborhood statistics extractor.

    Only grids with ``uint16`` samples are processed; any other grid leaves the
    previous output untouched and reports SKIPPED_UNSUPPORTED.

    Example:
        >>> extractor = FeatureExtractor()
        >>> result = extractor(ScalarGrid(volume))
        >>> if result.status is ExtractionStatus.OK:
        ...     dataset = result.dataset
    """

    __slots__ = ("config", "_dataset")

    def __init__(self, config: FeatureConfig | None = None):
        self.config = config if config is not None else FeatureConfig()
        self._dataset: FeatureDataset | None = None

    @property
    def dataset(self) -> FeatureDataset | None:
        """Most recent output (None before the first successful run)."""
        return self._dataset

    def extract(self, grid: ScalarGrid | np.ndarray) -> ExtractionResult:
        """
        Extract features from a grid.

        Args:
            grid: ScalarGrid, or a ``(dimZ, dimY, dimX)`` array

        Returns:
            ExtractionResult with the new dataset, or the previous one when skipped
        """
        if not isinstance(grid, ScalarGrid):
            grid = ScalarGrid(grid)

        if not grid.is_supported:
            logger.warning(
                "[FeatureExtractor] Skipping grid with dtype %s (only %s is supported)",
                grid.dtype,
                SUPPORTED_SAMPLE_DTYPE,
            )
            return ExtractionResult(ExtractionStatus.SKIPPED_UNSUPPORTED, self._dataset)

        n = len(grid)
        target = self._target(n)

        start = time.perf_counter()
        extract_features_numba(
            grid.samples,
            self.config.include_std_dev,
            self.config.include_gradient,
            float(self.config.std_dev_sentinel),
            float(self.config.gradient_sentinel),
            target.element_index,
            target.values,
        )
        elapsed_ms = (time.perf_counter() - start) * 1000

        # Sorted by construction
        if not target.is_sorted():
            target = target.sort_by_index()

        self._dataset = target
        dim_x, dim_y, dim_z = grid.dimensions
        logger.info(
            "[FeatureExtractor] Extracted %d records from %dx%dx%d grid in %.2f ms",
            n,
            dim_x,
            dim_y,
            dim_z,
            elapsed_ms,
        )
        return ExtractionResult(ExtractionStatus.OK, target)

    def _target(self, n: int) -> FeatureDataset:
        if self.config.reuse_buffers and self._dataset is not None and len(self._dataset) == n:
            logger.debug("[FeatureExtractor] Reusing output buffers for %d records", n)
            return self._dataset
        return FeatureDataset.empty(n)

    def __call__(self, grid: ScalarGrid | np.ndarray) -> ExtractionResult:
        return self.extract(grid)

    def reset(self) -> None:
        """Drop the persistent output."""
        self._dataset = None

    def __repr__(self) -> str:
        size = len(self._dataset) if self._dataset is not None else 0
        return f"FeatureExtractor(records={size}, std_dev={self.config.include_std_dev})"
