"""
Dataset reduction module.

Deterministic, order-preserving subsampling of a FeatureDataset.

Example:
    >>> from volbrush.reduction import DatasetReducer
    >>> reduced = DatasetReducer(drop_ratio=0.75)(dataset)
"""

from volbrush.reduction.reducer import DatasetReducer

__all__ = ["DatasetReducer"]
