"""
Protocol definitions for volbrush pipeline interfaces.

Defines the common interface that dataset-to-dataset stages implement.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from volbrush.dataset import FeatureDataset


@runtime_checkable
class DatasetStage(Protocol):
    """
    Protocol for stages that map a FeatureDataset to a new FeatureDataset.

    Stages must not modify their input; the returned dataset is owned by the
    caller.
    """

    def apply(self, dataset: FeatureDataset) -> FeatureDataset:
        """
        Apply the stage to a dataset.

        Args:
            dataset: Input dataset (left unchanged)

        Returns:
            New FeatureDataset
        """
        ...

    def __call__(self, dataset: FeatureDataset) -> FeatureDataset:
        ...


@runtime_checkable
class SelectionListener(Protocol):
    """Callable notified whenever a selection set is republished."""

    def __call__(self, name: str, indices: frozenset[int]) -> None:
        ...
