"""Unsaved-changes flag with edge detection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from controller.tabs import TabCoordinator


class DirtyTracker:
    """Boolean that reports only real transitions to the tab coordinator.

    The tab id is looked up on every transition because a session's tab id
    changes when a new document is saved for the first time.
    """

    def __init__(self, tabs: TabCoordinator, tab_id: Callable[[], str]) -> None:
        self._tabs = tabs
        self._tab_id = tab_id
        self._dirty = False

    @property
    def dirty(self) -> bool:
        return self._dirty

    def set(self, dirty: bool) -> None:
        dirty = bool(dirty)
        if dirty == self._dirty:
            return
        self._dirty = dirty
        self._tabs.set_dirty(self._tab_id(), dirty)
