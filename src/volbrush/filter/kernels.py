"""
Numba-optimized kernels for the interactive filter.

Provides the per-axis range predicate and the rasterizers used to draw lines
and handles into RGBA float32 surfaces. Surfaces are indexed ``[row, col, c]``
with row 0 at the bottom (device y = -1). Rasterizers run sequentially since
draw order decides which entity owns a pixel.
"""

import numpy as np
from numba import njit, prange


@njit(parallel=True, cache=True, nogil=True)
def axis_range_mask_numba(
    coords: np.ndarray,
    lower: np.ndarray,
    upper: np.ndarray,
    out: np.ndarray,
) -> None:
    """
    Strict per-axis range test.

    Args:
        coords: Axis coordinates [N, K]
        lower: Lower handle y per axis [K]
        upper: Upper handle y per axis [K]
        out: Output mask [N] (modified in-place), True = inside every range
    """
    n = coords.shape[0]
    n_axes = coords.shape[1]

    for i in prange(n):
        passed = True
        for k in range(n_axes):
            v = coords[i, k]
            if not (v > lower[k] and v < upper[k]):
                passed = False
                break
        out[i] = passed


@njit(cache=True, nogil=True)
def draw_polylines_numba(
    surface: np.ndarray,
    xs: np.ndarray,
    ys: np.ndarray,
    mask: np.ndarray,
    colors: np.ndarray,
) -> None:
    """
    Rasterize one polyline per masked row.

    Each segment is walked column by column; every column is filled over the
    vertical span the segment covers there, so steep segments stay connected.
    Parts outside the surface are clipped.

    Args:
        surface: Target surface [H, W, 4] (modified in-place)
        xs: Axis x positions in device coordinates [K]
        ys: Vertex y positions in device coordinates [N, K]
        mask: Rows to draw [N]
        colors: RGBA per row [N, 4]
    """
    height = surface.shape[0]
    width = surface.shape[1]
    n = ys.shape[0]
    n_axes = xs.shape[0]

    for i in range(n):
        if not mask[i]:
            continue
        for k in range(n_axes - 1):
            px0 = (xs[k] + 1.0) * 0.5 * width
            px1 = (xs[k + 1] + 1.0) * 0.5 * width
            py0 = (ys[i, k] + 1.0) * 0.5 * height
            py1 = (ys[i, k + 1] + 1.0) * 0.5 * height
            dx = px1 - px0
            if dx <= 0.0:
                continue
            slope = (py1 - py0) / dx

            c0 = max(int(np.floor(px0)), 0)
            c1 = min(int(np.floor(px1)), width - 1)
            for col in range(c0, c1 + 1):
                xa = max(float(col), px0)
                xb = min(float(col + 1), px1)
                ya = py0 + (xa - px0) * slope
                yb = py0 + (xb - px0) * slope
                lo = min(ya, yb)
                hi = max(ya, yb)
                if hi < 0.0 or lo >= height:
                    continue
                r0 = int(np.floor(max(lo, 0.0)))
                r1 = int(np.floor(min(hi, height - 1.0)))
                for row in range(r0, r1 + 1):
                    surface[row, col, 0] = colors[i, 0]
                    surface[row, col, 1] = colors[i, 1]
                    surface[row, col, 2] = colors[i, 2]
                    surface[row, col, 3] = colors[i, 3]


@njit(cache=True, nogil=True)
def draw_triangles_numba(
    surface: np.ndarray,
    vertices: np.ndarray,
    colors: np.ndarray,
) -> None:
    """
    Rasterize filled triangles by testing pixel centers.

    Args:
        surface: Target surface [H, W, 4] (modified in-place)
        vertices: Triangle vertices in device coordinates [T, 3, 2]
        colors: RGBA per triangle [T, 4]
    """
    height = surface.shape[0]
    width = surface.shape[1]

    for t in range(vertices.shape[0]):
        ax = (vertices[t, 0, 0] + 1.0) * 0.5 * width
        ay = (vertices[t, 0, 1] + 1.0) * 0.5 * height
        bx = (vertices[t, 1, 0] + 1.0) * 0.5 * width
        by = (vertices[t, 1, 1] + 1.0) * 0.5 * height
        cx = (vertices[t, 2, 0] + 1.0) * 0.5 * width
        cy = (vertices[t, 2, 1] + 1.0) * 0.5 * height

        area = (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)
        if area == 0.0:
            continue

        c0 = int(np.floor(max(min(ax, bx, cx), 0.0)))
        c1 = int(np.floor(min(max(ax, bx, cx), width - 1.0)))
        r0 = int(np.floor(max(min(ay, by, cy), 0.0)))
        r1 = int(np.floor(min(max(ay, by, cy), height - 1.0)))

        for row in range(r0, r1 + 1):
            py = row + 0.5
            for col in range(c0, c1 + 1):
                px = col + 0.5
                w0 = (bx - ax) * (py - ay) - (by - ay) * (px - ax)
                w1 = (cx - bx) * (py - by) - (cy - by) * (px - bx)
                w2 = (ax - cx) * (py - cy) - (ay - cy) * (px - cx)
                if area > 0.0:
                    inside = w0 >= 0.0 and w1 >= 0.0 and w2 >= 0.0
                else:
                    inside = w0 <= 0.0 and w1 <= 0.0 and w2 <= 0.0
                if inside:
                    surface[row, col, 0] = colors[t, 0]
                    surface[row, col, 1] = colors[t, 1]
                    surface[row, col, 2] = colors[t, 2]
                    surface[row, col, 3] = colors[t, 3]
