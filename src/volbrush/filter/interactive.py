"""
InteractiveFilter: parallel-coordinates brushing and linking.

Draws one polyline per record across the feature axes, restricted to records
inside every axis range, plus the axis handles. A second, hidden surface
carries the same scene in pick colors so a pointer position resolves to a
handle or a line. Resolved interactions update the SelectionState and
re-render synchronously.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from volbrush.constants import NUM_FEATURES
from volbrush.dataset import FeatureDataset
from volbrush.filter.config import FilterConfig
from volbrush.filter.handles import AxisEdge, AxisHandleSet
from volbrush.filter.kernels import axis_range_mask_numba
from volbrush.filter.picking import PickResult, decode_texel, encode_handle, encode_lines
from volbrush.filter.selection import SelectionState
from volbrush.filter.surface import RenderTarget

logger = logging.getLogger(__name__)


class MouseButton(Enum):
    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


@dataclass(frozen=True)
class PointerEvent:
    """
    Pointer input in pixel coordinates (origin at the top-left).

    Attributes:
        x: Column
        y: Row
        button: Button pressed (only meaningful for clicks)
    """

    x: int
    y: int
    button: MouseButton = MouseButton.LEFT


class InteractiveFilter:
    """
    Multi-axis filter with handle dragging and line picking.

    Example:
        >>> selection = SelectionState()
        >>> view = InteractiveFilter(dataset, selection=selection)
        >>> view.handle_mouse_click(PointerEvent(x, y))      # grab a handle
        >>> view.handle_mouse_move(PointerEvent(x, y - 40))  # drag it
        >>> view.handle_mouse_release(PointerEvent(x, y - 40))
        >>> selection.brushing_indices
    """

    __slots__ = (
        "config",
        "handles",
        "selection",
        "_dataset",
        "_coords",
        "_visible_mask",
        "_output",
        "_picking",
    )

    def __init__(
        self,
        dataset: FeatureDataset | None = None,
        handles: AxisHandleSet | None = None,
        selection: SelectionState | None = None,
        config: FilterConfig | None = None,
    ):
        # Private copy: resize() updates the size fields
        self.config = copy.copy(config) if config is not None else FilterConfig()
        self.handles = handles if handles is not None else AxisHandleSet(NUM_FEATURES)
        if self.handles.axis_count != NUM_FEATURES:
            raise ValueError(
                f"handles must cover {NUM_FEATURES} axes, got {self.handles.axis_count}"
            )
        self.selection = selection if selection is not None else SelectionState()

        self._dataset: FeatureDataset | None = None
        self._coords = np.empty((0, NUM_FEATURES), dtype=np.float32)
        self._visible_mask = np.empty(0, dtype=np.bool_)
        self._output = RenderTarget(self.config.width, self.config.height)
        self._picking = RenderTarget(self.config.width, self.config.height)

        logger.info(
            "[InteractiveFilter] Initialized %dx%d, brushing_policy=%s",
            self.config.width,
            self.config.height,
            self.config.brushing_policy,
        )

        if dataset is not None:
            self.set_dataset(dataset)

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    @property
    def dataset(self) -> FeatureDataset | None:
        return self._dataset

    def set_dataset(self, dataset: FeatureDataset | None) -> None:
        """Take over a dataset, re-render and republish brushing."""
        self._dataset = dataset
        self._coords = self._axis_coordinates(dataset)
        logger.info(
            "[InteractiveFilter] Dataset set: %d records", 0 if dataset is None else len(dataset)
        )
        self.invalidate()
        self.selection.publish(brushing=True, linking=False)

    def _axis_coordinates(self, dataset: FeatureDataset | None) -> np.ndarray:
        """Vertical device coordinate of every record on every axis."""
        if dataset is None or len(dataset) == 0:
            return np.empty((0, NUM_FEATURES), dtype=np.float32)

        values = dataset.values
        if self.config.axis_normalization == "none":
            return np.ascontiguousarray(values, dtype=np.float32)

        lo, hi = dataset.value_ranges()
        lo = lo.astype(np.float64)
        span = hi.astype(np.float64) - lo
        bottom = -1.0 + self.config.axis_margin
        top = 1.0 - self.config.axis_margin

        # Constant features sit on the axis midpoint
        safe_span = np.where(span > 0.0, span, 1.0)
        t = (values - lo) / safe_span
        coords = np.where(span > 0.0, bottom + t * (top - bottom), 0.0)
        return np.ascontiguousarray(coords, dtype=np.float32)

    @property
    def axis_coordinates(self) -> np.ndarray:
        return self._coords

    @property
    def visible_mask(self) -> np.ndarray:
        """True for records inside every axis range (as of the last render)."""
        return self._visible_mask

    @property
    def visible_indices(self) -> np.ndarray:
        if self._dataset is None:
            return np.empty(0, dtype=np.uint64)
        return self._dataset.element_index[self._visible_mask]

    def compute_visible_mask(self) -> np.ndarray:
        lower, upper = self.handles.bounds()
        mask = np.empty(len(self._coords), dtype=np.bool_)
        axis_range_mask_numba(self._coords, lower, upper, mask)
        return mask

    def _update_brushing(self) -> None:
        if self._dataset is None:
            self.selection.set_brushing(())
            return
        if self.config.brushing_policy == "included":
            brushed = self._dataset.element_index[self._visible_mask]
        else:
            brushed = self._dataset.element_index[~self._visible_mask]
        self.selection.set_brushing(brushed.tolist())

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    @property
    def output_surface(self) -> RenderTarget:
        return self._output

    @property
    def picking_surface(self) -> RenderTarget:
        return self._picking

    def resize(self, width: int, height: int) -> None:
        self._output.resize(width, height)
        self._picking.resize(width, height)
        self.config.width, self.config.height = width, height
        self.invalidate()

    def invalidate(self) -> None:
        """Re-render immediately."""
        self.process()

    def process(self) -> None:
        """Render the visible and pick surfaces and refresh brushing."""
        self._visible_mask = self.compute_visible_mask()
        self._update_brushing()

        xs = self.handles.axis_positions()
        vertices = self._handle_vertices()

        # Visible scene
        self._output.clear()
        if len(self._coords):
            colors = np.empty((len(self._coords), 4), dtype=np.float32)
            colors[:] = self.config.line_color
            linked = self._linked_mask()
            colors[linked] = self.config.linked_line_color
            self._output.draw_polylines(xs, self._coords, self._visible_mask, colors)
        handle_colors = np.tile(np.asarray(self.config.handle_color, dtype=np.float32), (len(vertices), 1))
        self._output.draw_triangles(vertices, handle_colors)

        # Pick scene: lines first, handles on top so they stay grabbable
        self._picking.clear()
        if len(self._coords):
            self._picking.draw_polylines(
                xs, self._coords, self._visible_mask, encode_lines(self._dataset.element_index)
            )
        pick_colors = np.array([encode_handle(h.handle_id) for h in self.handles], dtype=np.float32)
        self._picking.draw_triangles(vertices, pick_colors)

        logger.debug(
            "[InteractiveFilter] Rendered %d/%d lines",
            int(self._visible_mask.sum()),
            len(self._visible_mask),
        )

    def _handle_vertices(self) -> np.ndarray:
        """Triangle per handle [2K, 3, 2], apex pointing into the axis range."""
        w = self.config.handle_half_width
        h = self.config.handle_height / 2.0
        vertices = np.empty((len(self.handles), 3, 2), dtype=np.float32)
        for i, handle in enumerate(self.handles):
            x, y = handle.position
            d = h if handle.edge is AxisEdge.LOWER else -h
            vertices[i] = ((x, y + d), (x - w, y - d), (x + w, y - d))
        return vertices

    def _linked_mask(self) -> np.ndarray:
        linked = self.selection.linking_indices
        if not linked or self._dataset is None:
            return np.zeros(len(self._coords), dtype=np.bool_)
        ids = np.fromiter(linked, dtype=np.uint64, count=len(linked))
        return np.isin(self._dataset.element_index, ids)

    # ------------------------------------------------------------------
    # Picking and pointer events
    # ------------------------------------------------------------------

    def pick(self, x: int, y: int) -> PickResult:
        """Decode the pick surface under a pointer coordinate (nothing off-surface)."""
        if not self._picking.contains(x, y):
            return PickResult()
        return decode_texel(self._picking.texel(x, y))

    def handle_mouse_click(self, event: PointerEvent) -> PickResult:
        """
        Resolve a click: grab a handle, toggle a linked line, or clear links.

        Args:
            event: Click position and button

        Returns:
            The decoded pick
        """
        result = self.pick(event.x, event.y)
        if result.hit_handle or result.hit_line:
            logger.info("[InteractiveFilter] Picked handle index: %d", result.handle_id)
            logger.info("[InteractiveFilter] Picked line index: %d", result.line_id)
        else:
            logger.debug("[InteractiveFilter] Nothing picked at (%d, %d)", event.x, event.y)

        if result.hit_handle and event.button is MouseButton.LEFT:
            self.handles.begin_drag(result.handle_id)

        if result.hit_line:
            self.selection.toggle_link(result.line_id)
        elif event.button is MouseButton.RIGHT:
            self.selection.clear_links()

        self.invalidate()
        self.selection.publish(brushing=False, linking=True)
        return result

    def handle_mouse_move(self, event: PointerEvent) -> bool:
        """
        Drag the captured handle to the pointer's vertical position.

        Returns:
            True if a handle moved
        """
        if not self.handles.is_dragging:
            return False

        _, y = self._picking.screen_to_ndc(event.x, event.y)
        self.handles.drag_to(y)

        self.invalidate()
        self.selection.publish(brushing=True, linking=False)
        return True

    def handle_mouse_release(self, event: PointerEvent) -> None:
        self.handles.end_drag()

    def __repr__(self) -> str:
        size = 0 if self._dataset is None else len(self._dataset)
        visible = int(self._visible_mask.sum())
        return f"InteractiveFilter({visible}/{size} visible, {self.handles!r})"
