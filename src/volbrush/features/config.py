"""
Feature extraction configuration.

Selects which derived measures are computed. Disabled measures keep their
column in the feature vector and are filled with a sentinel.
"""

from dataclasses import dataclass

from volbrush.constants import GRADIENT_SENTINEL, STD_DEV_SENTINEL


@dataclass
class FeatureConfig:
    """
    Configuration for feature extraction.

    Attributes:
        include_std_dev: Compute local standard deviation (else sentinel)
        include_gradient: Compute gradient magnitude (else sentinel)
        reuse_buffers: Overwrite the previous output arrays when the element count repeats
            (earlier outputs then change under their holders)
        std_dev_sentinel: Value written when std-dev is disabled
        gradient_sentinel: Value written when gradient is disabled
    """

    include_std_dev: bool = True
    include_gradient: bool = True
    reuse_buffers: bool = False
    std_dev_sentinel: float = STD_DEV_SENTINEL
    gradient_sentinel: float = GRADIENT_SENTINEL

    def __post_init__(self):
        """Validate configuration parameters."""
        for name in ("include_std_dev", "include_gradient", "reuse_buffers"):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a bool, got {type(getattr(self, name)).__name__}")

        # Sentinels must not collide with real (non-negative) measures
        if self.std_dev_sentinel >= 0.0:
            raise ValueError("std_dev_sentinel must be negative")
        if self.gradient_sentinel >= 0.0:
            raise ValueError("gradient_sentinel must be negative")
