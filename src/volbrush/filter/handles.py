"""
Axis handles and the drag state machine.

Every axis carries a Lower and an Upper handle. Handle ids are
``2 * axis_index + edge`` so the pair of an axis is ``(2k, 2k + 1)``; the id
is also what the pick surface encodes in its red channel.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from volbrush.constants import MAX_HANDLES, NDC_MAX, NDC_MIN, NO_PICK, NUM_FEATURES

logger = logging.getLogger(__name__)


class AxisEdge(IntEnum):
    LOWER = 0
    UPPER = 1


@dataclass
class AxisHandle:
    """
    Draggable range marker on one axis.

    Attributes:
        edge: LOWER or UPPER bound of the axis range
        axis_index: Axis the handle belongs to
        position: (x, y) in device coordinates
    """

    edge: AxisEdge
    axis_index: int
    position: tuple[float, float]

    @property
    def handle_id(self) -> int:
        return 2 * self.axis_index + int(self.edge)

    @property
    def y(self) -> float:
        return self.position[1]

    def set_y(self, y: float) -> None:
        self.position = (self.position[0], float(y))


class AxisHandleSet:
    """
    Ordered Lower/Upper handle pairs plus single-capture drag state.

    States:
        Idle: no handle captured (``captured == -1``)
        Dragging: one handle captured until end_drag()

    Example:
        >>> handles = AxisHandleSet(axis_count=4)
        >>> handles.begin_drag(0)  # lower handle of axis 0
        True
        >>> handles.drag_to(0.5)
        0.5
        >>> handles.end_drag()
    """

    __slots__ = ("_handles", "_axis_count", "_captured")

    def __init__(self, axis_count: int = NUM_FEATURES):
        if axis_count < 2:
            raise ValueError(f"axis_count must be at least 2, got {axis_count}")
        if 2 * axis_count > MAX_HANDLES:
            raise ValueError(
                f"axis_count={axis_count} needs {2 * axis_count} handle ids, "
                f"pick encoding supports {MAX_HANDLES}"
            )

        self._axis_count = axis_count
        self._captured = NO_PICK
        self._handles: list[AxisHandle] = []
        for k in range(axis_count):
            x = self.axis_x(k)
            self._handles.append(AxisHandle(AxisEdge.LOWER, k, (x, NDC_MIN)))
            self._handles.append(AxisHandle(AxisEdge.UPPER, k, (x, NDC_MAX)))

    @property
    def axis_count(self) -> int:
        return self._axis_count

    def axis_x(self, axis_index: int) -> float:
        """Horizontal device coordinate of an axis."""
        return NDC_MIN + (NDC_MAX - NDC_MIN) * axis_index / (self._axis_count - 1)

    def axis_positions(self) -> np.ndarray:
        return np.array([self.axis_x(k) for k in range(self._axis_count)], dtype=np.float32)

    def handle(self, handle_id: int) -> AxisHandle:
        if not self.is_valid_id(handle_id):
            raise ValueError(f"Invalid handle id {handle_id}")
        return self._handles[handle_id]

    def is_valid_id(self, handle_id: int) -> bool:
        return 0 <= handle_id < len(self._handles)

    @staticmethod
    def partner_id(handle_id: int) -> int:
        """Id of the other handle on the same axis."""
        return handle_id ^ 1

    def lower(self, axis_index: int) -> float:
        return self._handles[2 * axis_index].y

    def upper(self, axis_index: int) -> float:
        return self._handles[2 * axis_index + 1].y

    def bounds(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Current axis ranges.

        Returns:
            (lower [K], upper [K]) handle y positions
        """
        lower = np.array([h.y for h in self._handles[0::2]], dtype=np.float32)
        upper = np.array([h.y for h in self._handles[1::2]], dtype=np.float32)
        return lower, upper

    def set_range(self, axis_index: int, lower: float, upper: float) -> None:
        """Place both handles of an axis programmatically."""
        if not 0 <= axis_index < self._axis_count:
            raise ValueError(f"axis_index must be in [0, {self._axis_count}), got {axis_index}")
        if lower > upper:
            raise ValueError(f"lower ({lower}) must not exceed upper ({upper})")
        self._handles[2 * axis_index].set_y(np.clip(lower, NDC_MIN, NDC_MAX))
        self._handles[2 * axis_index + 1].set_y(np.clip(upper, NDC_MIN, NDC_MAX))
        logger.debug("[AxisHandleSet] Axis %d range set to [%s, %s]", axis_index, lower, upper)

    # ------------------------------------------------------------------
    # Drag state machine
    # ------------------------------------------------------------------

    @property
    def captured(self) -> int:
        """Captured handle id, or -1 when idle."""
        return self._captured

    @property
    def is_dragging(self) -> bool:
        return self._captured != NO_PICK

    def begin_drag(self, handle_id: int) -> bool:
        """
        Capture a handle (Idle -> Dragging).

        Returns:
            True if the handle was captured; False while another handle is
            captured or for an invalid id
        """
        if self.is_dragging:
            logger.debug(
                "[AxisHandleSet] Ignoring capture of %d while dragging %d", handle_id, self._captured
            )
            return False
        if not self.is_valid_id(handle_id):
            return False
        self._captured = handle_id
        logger.debug("[AxisHandleSet] Captured handle %d", handle_id)
        return True

    def drag_to(self, y: float) -> float | None:
        """
        Move the captured handle vertically.

        The position is clamped to the viewport and against the partner
        handle so Lower never rises above Upper.

        Args:
            y: Pointer y in device coordinates

        Returns:
            The new y, or None while idle
        """
        if not self.is_dragging:
            return None

        handle = self._handles[self._captured]
        partner = self._handles[self.partner_id(self._captured)]

        new_y = min(max(float(y), NDC_MIN), NDC_MAX)
        if handle.edge is AxisEdge.LOWER:
            new_y = min(new_y, partner.y)
        else:
            new_y = max(new_y, partner.y)

        handle.set_y(new_y)
        logger.debug("[AxisHandleSet] Moving handle %d to y=%.4f", self._captured, new_y)
        return new_y

    def end_drag(self) -> None:
        """Release the captured handle (Dragging -> Idle)."""
        if self.is_dragging:
            logger.debug("[AxisHandleSet] Released handle %d", self._captured)
        self._captured = NO_PICK

    def reset(self) -> None:
        """Full-range handles on every axis, nothing captured."""
        self._captured = NO_PICK
        for h in self._handles:
            h.set_y(NDC_MIN if h.edge is AxisEdge.LOWER else NDC_MAX)

    def __iter__(self) -> Iterator[AxisHandle]:
        return iter(self._handles)

    def __len__(self) -> int:
        return len(self._handles)

    def __repr__(self) -> str:
        state = f"dragging {self._captured}" if self.is_dragging else "idle"
        return f"AxisHandleSet({self._axis_count} axes, {state})"
