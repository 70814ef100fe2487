"""
Feature dataset shared by every volbrush stage.

Columnar storage of per-element feature records: one ``uint64`` element index
and a fixed 4-vector of ``float32`` values per record. Records are kept sorted
ascending by element index with no duplicates.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np

from volbrush.constants import FEATURE_NAMES, INDEX_DTYPE, NUM_FEATURES, VALUE_DTYPE
from volbrush.validators import validate_choices


@dataclass(frozen=True)
class FeatureRecord:
    """
    Single element of a FeatureDataset.

    Attributes:
        element_index: Linear position of the element in the source grid
        values: (intensity, mean, std_dev, gradient_magnitude)
    """

    element_index: int
    values: tuple[float, float, float, float]


class FeatureDataset:
    """
    Ordered collection of feature records.

    Attributes:
        element_index: Element indices [N] (uint64)
        values: Feature values [N, 4] (float32), columns in FEATURE_NAMES order

    Example:
        >>> ds = FeatureDataset([0, 1], [[10, 15, 5, 5], [20, 15, 5, 5]])
        >>> len(ds)
        2
        >>> ds[1].values[0]
        20.0
    """

    __slots__ = ("element_index", "values")

    def __init__(self, element_index: np.ndarray | Iterable[int], values: np.ndarray | Iterable):
        self.element_index = np.asarray(element_index, dtype=INDEX_DTYPE).reshape(-1)
        values = np.asarray(values, dtype=VALUE_DTYPE)
        if values.size == 0:
            values = values.reshape(0, NUM_FEATURES)
        self.values = values

        if self.values.ndim != 2 or self.values.shape[1] != NUM_FEATURES:
            raise ValueError(
                f"values must be [N, {NUM_FEATURES}], got shape {self.values.shape}"
            )
        if len(self.element_index) != len(self.values):
            raise ValueError(
                f"element_index length {len(self.element_index)} doesn't match "
                f"values length {len(self.values)}"
            )

    @classmethod
    def empty(cls, size: int = 0) -> FeatureDataset:
        """Allocate an uninitialized dataset of ``size`` records."""
        return cls(
            np.empty(size, dtype=INDEX_DTYPE),
            np.empty((size, NUM_FEATURES), dtype=VALUE_DTYPE),
        )

    @classmethod
    def from_records(cls, records: Iterable[FeatureRecord]) -> FeatureDataset:
        records = list(records)
        if not records:
            return cls.empty()
        return cls(
            [r.element_index for r in records],
            [r.values for r in records],
        )

    def __len__(self) -> int:
        return len(self.element_index)

    def __getitem__(self, i: int) -> FeatureRecord:
        row = self.values[i]
        return FeatureRecord(
            int(self.element_index[i]),
            (float(row[0]), float(row[1]), float(row[2]), float(row[3])),
        )

    def __iter__(self) -> Iterator[FeatureRecord]:
        for i in range(len(self)):
            yield self[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeatureDataset):
            return NotImplemented
        return np.array_equal(self.element_index, other.element_index) and np.array_equal(
            self.values, other.values
        )

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> FeatureDataset:
        return FeatureDataset(self.element_index.copy(), self.values.copy())

    def copy_slice(self, selection: np.ndarray | slice) -> FeatureDataset:
        """
        Create an independent dataset from a boolean mask, index array or slice.

        Args:
            selection: Boolean mask [N], integer indices, or slice

        Returns:
            New FeatureDataset (arrays are copies)
        """
        if isinstance(selection, np.ndarray) and selection.dtype == bool:
            if selection.shape != (len(self),):
                raise ValueError(
                    f"mask shape {selection.shape} doesn't match dataset length {len(self)}"
                )
        return FeatureDataset(
            np.array(self.element_index[selection], copy=True),
            np.array(self.values[selection], copy=True),
        )

    def sort_by_index(self) -> FeatureDataset:
        """Return a new dataset stably sorted by element index."""
        order = np.argsort(self.element_index, kind="stable")
        return FeatureDataset(self.element_index[order], self.values[order])

    def is_sorted(self) -> bool:
        """True when element indices are strictly increasing."""
        if len(self) < 2:
            return True
        return bool(np.all(self.element_index[1:] > self.element_index[:-1]))

    def validate(self) -> None:
        """
        Check the ordering invariant.

        Raises:
            ValueError: If element indices are unsorted or duplicated
        """
        if not self.is_sorted():
            raise ValueError("element_index must be strictly increasing (sorted, unique)")

    @validate_choices(set(FEATURE_NAMES), "name")
    def feature(self, name: str) -> np.ndarray:
        """Column of values for a feature name (view, not a copy)."""
        return self.values[:, FEATURE_NAMES.index(name)]

    def value_ranges(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Per-feature minimum and maximum.

        Returns:
            (min [4], max [4]); zeros for an empty dataset
        """
        if len(self) == 0:
            zeros = np.zeros(NUM_FEATURES, dtype=VALUE_DTYPE)
            return zeros, zeros.copy()
        return self.values.min(axis=0), self.values.max(axis=0)

    def __repr__(self) -> str:
        return f"FeatureDataset({len(self)} records)"
