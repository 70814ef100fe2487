"""
Interactive parallel-coordinates filtering module.

Provides axis range handles, pick-encoded hit testing, and brushing/linking
selection state for FeatureDatasets.

Features:
- Lower/Upper handle pair per feature axis with clamped dragging
- Strict per-axis range predicate (records inside every range are drawn)
- Hidden pick surface: handle id in red, element index in green/blue/alpha
- Brushing (range based) and linking (click based) index sets with subscribers

Example:
    >>> from volbrush.filter import InteractiveFilter, PointerEvent, SelectionState
    >>>
    >>> selection = SelectionState()
    >>> view = InteractiveFilter(dataset, selection=selection)
    >>> view.handles.set_range(0, -0.5, 0.5)
    >>> view.invalidate()
    >>> print(len(selection.brushing_indices))
"""

from volbrush.filter.config import UI_RANGES, FilterConfig
from volbrush.filter.handles import AxisEdge, AxisHandle, AxisHandleSet
from volbrush.filter.interactive import InteractiveFilter, MouseButton, PointerEvent
from volbrush.filter.picking import PickResult, decode_texel, encode_handle, encode_lines
from volbrush.filter.selection import SelectionState
from volbrush.filter.surface import RenderTarget

__all__ = [
    # Interactive view
    "InteractiveFilter",
    "PointerEvent",
    "MouseButton",
    # Handles
    "AxisEdge",
    "AxisHandle",
    "AxisHandleSet",
    # Selection
    "SelectionState",
    # Picking
    "PickResult",
    "RenderTarget",
    "encode_handle",
    "encode_lines",
    "decode_texel",
    # Configuration
    "FilterConfig",
    "UI_RANGES",
]
