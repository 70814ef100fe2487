"""
DatasetReducer: deterministic fractional subsampling of a FeatureDataset.

Drops roughly ``drop_ratio`` of the records while spreading the kept ones
evenly over the input order. The input dataset is never modified.
"""

from __future__ import annotations

import logging
import sys

# Python 3.10 compatibility: Self was added in Python 3.11
if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

import numpy as np

from volbrush.constants import DEFAULT_DROP_RATIO, DROP_RATIO_MAX, DROP_RATIO_MIN
from volbrush.dataset import FeatureDataset
from volbrush.reduction.kernels import (
    compute_output_indices_and_count,
    fractional_keep_mask_numba,
    gather_records_parallel,
)
from volbrush.validators import check_range, validate_range

logger = logging.getLogger(__name__)


class DatasetReducer:
    """
    Fractional-accumulator data reducer.

    Example:
        >>> reducer = DatasetReducer(drop_ratio=0.5)
        >>> smaller = reducer(dataset)
        >>> len(smaller)  # ~ len(dataset) / 2
    """

    __slots__ = ("_drop_ratio",)

    def __init__(self, drop_ratio: float = DEFAULT_DROP_RATIO):
        self._drop_ratio = check_range(
            drop_ratio, DROP_RATIO_MIN, DROP_RATIO_MAX, "drop_ratio", max_inclusive=False
        )
        logger.debug("[DatasetReducer] Initialized with drop_ratio=%s", self._drop_ratio)

    @property
    def drop_ratio(self) -> float:
        """Fraction of records to drop, in [0, 1)."""
        return self._drop_ratio

    @drop_ratio.setter
    def drop_ratio(self, value: float) -> None:
        self._drop_ratio = check_range(
            value, DROP_RATIO_MIN, DROP_RATIO_MAX, "drop_ratio", max_inclusive=False
        )

    @validate_range(DROP_RATIO_MIN, DROP_RATIO_MAX, "drop_ratio", max_inclusive=False)
    def drop(self, drop_ratio: float) -> Self:
        """
        Set the drop ratio.

        Args:
            drop_ratio: Fraction of records to drop, in [0, 1)

        Returns:
            Self for method chaining
        """
        self._drop_ratio = float(drop_ratio)
        return self

    @property
    def keep_fraction(self) -> float:
        return 1.0 - self._drop_ratio

    def get_mask(self, dataset: FeatureDataset) -> np.ndarray:
        """
        Compute the keep mask without copying data.

        Args:
            dataset: Input dataset

        Returns:
            Boolean array of shape (N,) where True = keep record
        """
        mask = np.empty(len(dataset), dtype=np.bool_)
        fractional_keep_mask_numba(self.keep_fraction, mask)
        return mask

    def apply(self, dataset: FeatureDataset) -> FeatureDataset:
        """
        Produce a new, reduced dataset.

        Args:
            dataset: Input dataset (left unchanged)

        Returns:
            New FeatureDataset sorted by element index
        """
        n_total = len(dataset)
        logger.info(
            "[DatasetReducer] Filtering out %.1f%% of %d records",
            self._drop_ratio * 100,
            n_total,
        )

        mask = self.get_mask(dataset)
        out_indices = np.empty(n_total, dtype=np.int64)
        num_kept = compute_output_indices_and_count(mask, out_indices)

        reduced = FeatureDataset.empty(num_kept)
        gather_records_parallel(
            mask,
            out_indices,
            dataset.element_index,
            dataset.values,
            reduced.element_index,
            reduced.values,
        )

        if not reduced.is_sorted():
            reduced = reduced.sort_by_index()

        logger.info(
            "[DatasetReducer] Kept %d/%d records (%.1f%%)",
            num_kept,
            n_total,
            100 * num_kept / n_total if n_total > 0 else 0.0,
        )
        return reduced

    def __call__(self, dataset: FeatureDataset) -> FeatureDataset:
        return self.apply(dataset)

    def reset(self) -> Self:
        """Restore the default drop ratio (keep everything)."""
        self._drop_ratio = DEFAULT_DROP_RATIO
        return self

    def __len__(self) -> int:
        """Number of active operations (0 when nothing is dropped)."""
        return 0 if self._drop_ratio == 0.0 else 1

    def __repr__(self) -> str:
        return f"DatasetReducer(drop_ratio={self._drop_ratio})"
