"""
Pipeline composing extraction, reduction and the interactive view.

Example:
    >>> from volbrush import Pipeline, ScalarGrid
    >>>
    >>> pipeline = (
    ...     Pipeline()
    ...     .features(FeatureConfig(include_std_dev=True))
    ...     .drop(0.75)
    ...     .view(InteractiveFilter())
    ... )
    >>> dataset = pipeline(ScalarGrid(volume))
"""

from __future__ import annotations

import logging
import sys

# Python 3.10 compatibility: Self was added in Python 3.11
if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from volbrush.dataset import FeatureDataset
from volbrush.features.config import FeatureConfig
from volbrush.features.extractor import ExtractionStatus, FeatureExtractor
from volbrush.filter.interactive import InteractiveFilter
from volbrush.grid import ScalarGrid
from volbrush.protocols import DatasetStage
from volbrush.reduction.reducer import DatasetReducer

logger = logging.getLogger(__name__)


class Pipeline:
    """
    grid -> FeatureExtractor -> [DatasetReducer] -> [InteractiveFilter]

    Each stage hands a new dataset to the next. A skipped extraction leaves
    the previous output in place and nothing downstream is re-run.
    """

    __slots__ = ("extractor", "reducer", "interactive", "_output")

    def __init__(
        self,
        extractor: FeatureExtractor | None = None,
        reducer: DatasetStage | None = None,
        interactive: InteractiveFilter | None = None,
    ):
        self.extractor = extractor if extractor is not None else FeatureExtractor()
        self.reducer = reducer
        self.interactive = interactive
        self._output: FeatureDataset | None = None

    def features(self, config: FeatureConfig) -> Self:
        """Replace the extractor with one using ``config``."""
        self.extractor = FeatureExtractor(config)
        return self

    def drop(self, drop_ratio: float) -> Self:
        """
        Reduce extracted datasets by ``drop_ratio`` (0.0 removes the reducer).

        Args:
            drop_ratio: Fraction of records to drop, in [0, 1)

        Returns:
            Self for method chaining
        """
        reducer = DatasetReducer(drop_ratio)
        self.reducer = reducer if reducer.drop_ratio > 0.0 else None
        return self

    def view(self, interactive: InteractiveFilter) -> Self:
        """Attach the interactive filter that receives the final dataset."""
        self.interactive = interactive
        return self

    @property
    def output(self) -> FeatureDataset | None:
        """Dataset handed downstream by the last successful run."""
        return self._output

    def run(self, grid: ScalarGrid) -> FeatureDataset | None:
        """
        Execute the pipeline on a grid.

        Args:
            grid: Input grid

        Returns:
            The final dataset, or the previous output when extraction was skipped
        """
        result = self.extractor(grid)
        if result.status is ExtractionStatus.SKIPPED_UNSUPPORTED:
            logger.info("[Pipeline] Extraction skipped, keeping previous output")
            return self._output

        dataset = result.dataset
        if self.reducer is not None:
            dataset = self.reducer(dataset)

        self._output = dataset
        if self.interactive is not None:
            self.interactive.set_dataset(dataset)

        logger.info("[Pipeline] Produced %d records", len(dataset))
        return dataset

    def __call__(self, grid: ScalarGrid) -> FeatureDataset | None:
        return self.run(grid)

    def __repr__(self) -> str:
        stages = ["extract"]
        if self.reducer is not None:
            stages.append(repr(self.reducer))
        if self.interactive is not None:
            stages.append("view")
        return f"Pipeline({' -> '.join(stages)})"
