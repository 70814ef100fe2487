"""
Scalar grid input boundary.

Wraps a dense 3-D numpy array so that its C-order flat index equals the
element index used throughout volbrush: ``x + y*dimX + z*dimX*dimY``.
"""

from __future__ import annotations

import numpy as np

from volbrush.constants import SUPPORTED_SAMPLE_DTYPE


class ScalarGrid:
    """
    Read-only view of a dense 3-D scalar grid.

    Samples are stored with shape ``(dimZ, dimY, dimX)``; ``dimensions``
    reports them as ``(dimX, dimY, dimZ)``.

    Example:
        >>> grid = ScalarGrid(np.array([[[10, 20]]], dtype=np.uint16))
        >>> grid.dimensions
        (2, 1, 1)
        >>> grid.voxel(1, 0, 0)
        20.0
    """

    __slots__ = ("_samples",)

    def __init__(self, samples: np.ndarray):
        samples = np.asarray(samples)
        if samples.ndim != 3:
            raise ValueError(f"samples must be 3-D (z, y, x), got shape {samples.shape}")
        if samples.size == 0:
            raise ValueError("samples cannot be empty")
        self._samples = np.ascontiguousarray(samples)

    @classmethod
    def from_xyz(cls, samples: np.ndarray) -> ScalarGrid:
        """Build a grid from an array indexed ``[x, y, z]``."""
        samples = np.asarray(samples)
        if samples.ndim != 3:
            raise ValueError(f"samples must be 3-D (x, y, z), got shape {samples.shape}")
        return cls(np.transpose(samples, (2, 1, 0)))

    @property
    def samples(self) -> np.ndarray:
        """Underlying ``(dimZ, dimY, dimX)`` array."""
        return self._samples

    @property
    def dimensions(self) -> tuple[int, int, int]:
        dim_z, dim_y, dim_x = self._samples.shape
        return int(dim_x), int(dim_y), int(dim_z)

    @property
    def dtype(self) -> np.dtype:
        return self._samples.dtype

    @property
    def is_supported(self) -> bool:
        """Whether the sample representation is the one the extractor accepts."""
        return self._samples.dtype == SUPPORTED_SAMPLE_DTYPE

    def linear_index(self, x: int, y: int, z: int) -> int:
        dim_x, dim_y, _ = self.dimensions
        return x + y * dim_x + z * dim_x * dim_y

    def voxel(self, x: int, y: int, z: int) -> float:
        return float(self._samples[z, y, x])

    def voxel_at(self, index: int) -> float:
        return float(self._samples.reshape(-1)[index])

    def __len__(self) -> int:
        return int(self._samples.size)

    def __repr__(self) -> str:
        dim_x, dim_y, dim_z = self.dimensions
        return f"ScalarGrid({dim_x}x{dim_y}x{dim_z}, dtype={self.dtype})"
