"""
volbrush - Volume feature brushing

Per-voxel feature extraction, order-preserving data reduction, and
interactive parallel-coordinates brushing and linking for 3-D scalar grids.

Features:
- Neighborhood statistics per cell: intensity, local mean, local std-dev, gradient magnitude
- Deterministic fractional-accumulator reduction that spreads kept records evenly
- Lower/Upper range handles per feature axis with clamped dragging
- Pick-encoded hit testing of handles and lines on CPU render targets
- Brushing and linking index sets published to any number of subscribers

Example - Full pipeline:
    >>> import numpy as np
    >>> from volbrush import InteractiveFilter, Pipeline, ScalarGrid, SelectionState
    >>>
    >>> volume = np.random.randint(0, 4096, size=(32, 32, 32), dtype=np.uint16)
    >>> selection = SelectionState()
    >>> pipeline = Pipeline().drop(0.9).view(InteractiveFilter(selection=selection))
    >>> dataset = pipeline(ScalarGrid(volume))

Example - Individual stages:
    >>> from volbrush import DatasetReducer, FeatureExtractor
    >>>
    >>> result = FeatureExtractor()(ScalarGrid(volume))
    >>> reduced = DatasetReducer(drop_ratio=0.5)(result.dataset)
"""

__version__ = "0.1.0"

from volbrush.constants import FEATURE_NAMES, NUM_FEATURES
from volbrush.dataset import FeatureDataset, FeatureRecord
from volbrush.features import ExtractionResult, ExtractionStatus, FeatureConfig, FeatureExtractor
from volbrush.filter import (
    UI_RANGES,
    AxisEdge,
    AxisHandle,
    AxisHandleSet,
    FilterConfig,
    InteractiveFilter,
    MouseButton,
    PickResult,
    PointerEvent,
    RenderTarget,
    SelectionState,
)
from volbrush.grid import ScalarGrid
from volbrush.pipeline import Pipeline
from volbrush.protocols import DatasetStage
from volbrush.reduction import DatasetReducer

__all__ = [
    # Version
    "__version__",
    # Data structures
    "ScalarGrid",
    "FeatureDataset",
    "FeatureRecord",
    "FEATURE_NAMES",
    "NUM_FEATURES",
    # Stages
    "Pipeline",
    "FeatureExtractor",
    "FeatureConfig",
    "ExtractionResult",
    "ExtractionStatus",
    "DatasetReducer",
    # Interactive filter
    "InteractiveFilter",
    "FilterConfig",
    "UI_RANGES",
    "AxisEdge",
    "AxisHandle",
    "AxisHandleSet",
    "SelectionState",
    "PointerEvent",
    "MouseButton",
    "PickResult",
    "RenderTarget",
    # Protocols
    "DatasetStage",
]
