"""
Feature extraction module.

Turns a dense uint16 scalar grid into a FeatureDataset with one record per
cell: intensity, local mean, local standard deviation, gradient magnitude.

Example:
    >>> from volbrush.features import FeatureExtractor
    >>> result = FeatureExtractor()(grid)
    >>> result.dataset.values[:, 1]  # local means
"""

from volbrush.features.config import FeatureConfig
from volbrush.features.extractor import ExtractionResult, ExtractionStatus, FeatureExtractor

__all__ = [
    "FeatureExtractor",
    "FeatureConfig",
    "ExtractionResult",
    "ExtractionStatus",
]
