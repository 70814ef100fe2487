"""
Pick encoding: entity identity stored in surface colors.

The red channel carries ``(handle_id + 1) / 255`` so that 0 reads as "no
handle". Lines carry ``element_index + 1`` split into three 16-bit chunks
stored as exact integers in the green (low), blue (mid) and alpha (high)
float32 channels, so 0 reads as "no line".
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from volbrush.constants import (
    LINE_CHANNEL_BITS,
    LINE_CHANNEL_MASK,
    MAX_HANDLES,
    MAX_LINE_ID,
    NO_PICK,
    PICK_HANDLE_LEVELS,
)


@dataclass(frozen=True)
class PickResult:
    """
    Decoded pick texel.

    Attributes:
        handle_id: Handle under the pixel, or -1
        line_id: Element index of the line under the pixel, or -1
    """

    handle_id: int = NO_PICK
    line_id: int = NO_PICK

    @property
    def hit_handle(self) -> bool:
        return self.handle_id != NO_PICK

    @property
    def hit_line(self) -> bool:
        return self.line_id != NO_PICK


def encode_handle(handle_id: int) -> tuple[float, float, float, float]:
    """RGBA pick color of a handle."""
    if not 0 <= handle_id < MAX_HANDLES:
        raise ValueError(f"handle_id must be in [0, {MAX_HANDLES}), got {handle_id}")
    return ((handle_id + 1) / PICK_HANDLE_LEVELS, 0.0, 0.0, 0.0)


def encode_lines(element_index: np.ndarray) -> np.ndarray:
    """
    RGBA pick colors of lines.

    Args:
        element_index: Element indices [N]

    Returns:
        Colors [N, 4] (float32), red channel zero

    Raises:
        ValueError: If an index does not fit the line channels
    """
    element_index = np.asarray(element_index, dtype=np.uint64)
    colors = np.zeros((len(element_index), 4), dtype=np.float32)
    if len(element_index) == 0:
        return colors

    if int(element_index.max()) >= MAX_LINE_ID:
        raise ValueError(
            f"element index {int(element_index.max())} exceeds the pick encoding limit {MAX_LINE_ID - 1}"
        )

    ids = element_index + np.uint64(1)
    mask = np.uint64(LINE_CHANNEL_MASK)
    shift = np.uint64(LINE_CHANNEL_BITS)
    colors[:, 1] = (ids & mask).astype(np.float32)
    colors[:, 2] = ((ids >> shift) & mask).astype(np.float32)
    colors[:, 3] = ((ids >> (shift * np.uint64(2))) & mask).astype(np.float32)
    return colors


def decode_handle(red: float) -> int:
    """Handle id from the red channel, -1 for none."""
    return int(round(float(red) * PICK_HANDLE_LEVELS)) - 1


def decode_line(green: float, blue: float, alpha: float) -> int:
    """Element index from the line channels, -1 for none."""
    line_id = (
        int(round(float(green)))
        | (int(round(float(blue))) << LINE_CHANNEL_BITS)
        | (int(round(float(alpha))) << (2 * LINE_CHANNEL_BITS))
    )
    return line_id - 1


def decode_texel(texel: np.ndarray) -> PickResult:
    """
    Resolve a pick texel; the handle channel takes precedence over lines.

    Args:
        texel: RGBA [4]

    Returns:
        PickResult with at most one of handle_id / line_id set
    """
    handle_id = decode_handle(texel[0])
    if handle_id != NO_PICK:
        return PickResult(handle_id=handle_id)
    return PickResult(line_id=decode_line(texel[1], texel[2], texel[3]))
