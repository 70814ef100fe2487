"""
Brushing and linking selection state.

A SelectionState is owned by one InteractiveFilter (the only writer) and can
be handed to any number of readers, for example a companion scatterplot.
Readers either poll the properties or subscribe to republish notifications.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from volbrush.protocols import SelectionListener

logger = logging.getLogger(__name__)

BRUSHING = "brushing"
LINKING = "linking"


class SelectionState:
    """
    Published brushing and linking index sets.

    Attributes:
        brushing_indices: Element indices selected by the brushing policy
        linking_indices: Element indices toggled by clicking lines

    Example:
        >>> state = SelectionState()
        >>> state.subscribe(lambda name, indices: print(name, sorted(indices)))
        >>> view = InteractiveFilter(selection=state)
    """

    __slots__ = ("_brushing", "_linking", "_listeners")

    def __init__(self):
        self._brushing: frozenset[int] = frozenset()
        self._linking: set[int] = set()
        self._listeners: list[SelectionListener] = []

    @property
    def brushing_indices(self) -> frozenset[int]:
        return self._brushing

    @property
    def linking_indices(self) -> frozenset[int]:
        return frozenset(self._linking)

    def is_linked(self, element_index: int) -> bool:
        return element_index in self._linking

    # ------------------------------------------------------------------
    # Writer side (InteractiveFilter)
    # ------------------------------------------------------------------

    def set_brushing(self, indices: Iterable[int]) -> None:
        self._brushing = frozenset(int(i) for i in indices)

    def toggle_link(self, element_index: int) -> bool:
        """
        Add or remove one element from the linking set.

        Returns:
            True if the element is linked afterwards
        """
        if element_index in self._linking:
            self._linking.discard(element_index)
            logger.debug("[SelectionState] Unlinked %d", element_index)
            return False
        self._linking.add(element_index)
        logger.debug("[SelectionState] Linked %d", element_index)
        return True

    def clear_links(self) -> None:
        self._linking.clear()
        logger.debug("[SelectionState] Linking cleared")

    def publish(self, brushing: bool = True, linking: bool = True) -> None:
        """Notify subscribers with the current sets."""
        for listener in list(self._listeners):
            if brushing:
                listener(BRUSHING, self._brushing)
            if linking:
                listener(LINKING, self.linking_indices)

    # ------------------------------------------------------------------
    # Reader side
    # ------------------------------------------------------------------

    def subscribe(self, listener: Callable[[str, frozenset[int]], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[str, frozenset[int]], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def __repr__(self) -> str:
        return (
            f"SelectionState(brushing={len(self._brushing)}, linking={len(self._linking)}, "
            f"listeners={len(self._listeners)})"
        )
