"""
CPU render targets.

A RenderTarget is an RGBA float32 image with row 0 at the bottom (device
y = -1), matching texture orientation. Pointer coordinates arrive with the
origin at the top-left and are flipped on lookup.
"""

from __future__ import annotations

import numpy as np

from volbrush.constants import CLEAR_COLOR
from volbrush.filter.kernels import draw_polylines_numba, draw_triangles_numba


class RenderTarget:
    """
    Clearable, readable RGBA surface.

    Example:
        >>> target = RenderTarget(64, 64)
        >>> target.clear()
        >>> target.draw_triangles(vertices, colors)
        >>> target.texel(10, 20)
    """

    __slots__ = ("_pixels",)

    def __init__(self, width: int, height: int):
        self._pixels = self._allocate(width, height)

    @staticmethod
    def _allocate(width: int, height: int) -> np.ndarray:
        if width < 1 or height < 1:
            raise ValueError(f"Surface size must be positive, got {width}x{height}")
        return np.zeros((height, width, 4), dtype=np.float32)

    @property
    def pixels(self) -> np.ndarray:
        """Surface data [H, W, 4], row 0 at the bottom."""
        return self._pixels

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) in pixels."""
        return self._pixels.shape[1], self._pixels.shape[0]

    def resize(self, width: int, height: int) -> None:
        if (width, height) != self.size:
            self._pixels = self._allocate(width, height)

    def clear(self, color: tuple[float, float, float, float] = CLEAR_COLOR) -> None:
        self._pixels[...] = np.asarray(color, dtype=np.float32)

    def contains(self, x: int, y: int) -> bool:
        """Whether a pointer coordinate lies on the surface."""
        width, height = self.size
        return 0 <= int(x) < width and 0 <= int(y) < height

    def screen_to_texel(self, x: int, y: int) -> tuple[int, int]:
        """Flip a top-left-origin pointer coordinate into texel space, clamped."""
        width, height = self.size
        col = min(max(int(x), 0), width - 1)
        row = min(max(height - 1 - int(y), 0), height - 1)
        return col, row

    def screen_to_ndc(self, x: int, y: int) -> tuple[float, float]:
        """Device coordinates of the center of the pixel under the pointer."""
        width, height = self.size
        col, row = self.screen_to_texel(x, y)
        return ((col + 0.5) / width - 0.5) * 2.0, ((row + 0.5) / height - 0.5) * 2.0

    def ndc_to_screen(self, x: float, y: float) -> tuple[int, int]:
        """Pointer coordinate of the pixel containing a device position."""
        width, height = self.size
        col = min(max(int(np.floor((x + 1.0) * 0.5 * width)), 0), width - 1)
        row = min(max(int(np.floor((y + 1.0) * 0.5 * height)), 0), height - 1)
        return col, height - 1 - row

    def texel(self, x: int, y: int) -> np.ndarray:
        """
        Read back the color under a pointer coordinate.

        Args:
            x: Pointer column (origin left)
            y: Pointer row (origin top)

        Returns:
            RGBA [4] (copy)
        """
        col, row = self.screen_to_texel(x, y)
        return self._pixels[row, col].copy()

    def draw_polylines(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
        mask: np.ndarray,
        colors: np.ndarray,
    ) -> None:
        """Draw one polyline per masked row of ``ys`` through the axes at ``xs``."""
        draw_polylines_numba(
            self._pixels,
            np.ascontiguousarray(xs, dtype=np.float32),
            np.ascontiguousarray(ys, dtype=np.float32),
            np.ascontiguousarray(mask, dtype=np.bool_),
            np.ascontiguousarray(colors, dtype=np.float32),
        )

    def draw_triangles(self, vertices: np.ndarray, colors: np.ndarray) -> None:
        """Draw filled triangles given as [T, 3, 2] device coordinates."""
        draw_triangles_numba(
            self._pixels,
            np.ascontiguousarray(vertices, dtype=np.float32),
            np.ascontiguousarray(colors, dtype=np.float32),
        )

    def __repr__(self) -> str:
        width, height = self.size
        return f"RenderTarget({width}x{height})"
