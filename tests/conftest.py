"""Shared fixtures for cmsedit tests."""

from __future__ import annotations

from collections import deque
from typing import Any

import pytest

from backend import BackupResult, DeleteResult, FetchResult, SaveResult, TransportError
from controller import (
    KIND_LAYOUT,
    KIND_LAYOUTS,
    KIND_SETTINGS,
    LAYOUTS_TAB_ID,
    SETTINGS_TAB_ID,
    ModalOutcome,
    TabRegistry,
    layout_tab_id,
)


class FakeBackend:
    """PersistenceClient double that records calls and returns canned results.

    Set an attribute named after an operation to an exception instance to
    make that operation raise it.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.items: dict[str, dict] = {}
        self.layouts: list[dict] = []
        self.save_result = SaveResult(id=None, success=True)
        self.delete_result = DeleteResult(success=True)
        self.config: dict | None = {}
        self.image_profiles: dict | None = {}
        self.config_save_result = SaveResult(success=True)
        self.profiles_save_result = SaveResult(success=True)
        self.backup_result = BackupResult(success=True, log=["backup done"])
        self.errors: dict[str, Exception] = {}

    def _call(self, name: str, arg: Any = None) -> None:
        self.calls.append((name, arg))
        error = self.errors.get(name)
        if error is not None:
            raise error

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    async def fetch_item(self, item_id: str) -> FetchResult:
        self._call("fetch_item", item_id)
        return FetchResult(item=self.items.get(item_id))

    async def list_layouts(self) -> list[dict]:
        self._call("list_layouts")
        return list(self.layouts)

    async def save_layout(self, document: dict) -> SaveResult:
        self._call("save_layout", document)
        return self.save_result

    async def delete_item(self, item_id: str) -> DeleteResult:
        self._call("delete_item", item_id)
        return self.delete_result

    async def fetch_config(self) -> dict | None:
        self._call("fetch_config")
        return self.config

    async def save_config(self, cfg: dict) -> SaveResult:
        self._call("save_config", cfg)
        return self.config_save_result

    async def fetch_image_profiles(self) -> dict | None:
        self._call("fetch_image_profiles")
        return self.image_profiles

    async def save_image_profiles(self, profiles: dict) -> SaveResult:
        self._call("save_image_profiles", profiles)
        return self.profiles_save_result

    async def create_backup(self, target: str) -> BackupResult:
        self._call("create_backup", target)
        return self.backup_result


class ScriptedChannel:
    """ModalResultChannel double answering from queues.

    ``outcomes`` feeds open(); ``answers`` feeds confirm(). An empty queue
    answers cancel / no. ``on_open`` lets a test mutate the entry while the
    dialog is "open".
    """

    def __init__(self) -> None:
        self.outcomes: deque[ModalOutcome] = deque()
        self.answers: deque[bool] = deque()
        self.requests = []
        self.prompts: list[str] = []
        self.on_open = None

    async def open(self, request) -> ModalOutcome:
        self.requests.append(request)
        if self.on_open is not None:
            self.on_open(request)
        return self.outcomes.popleft() if self.outcomes else ModalOutcome.cancelled()

    async def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answers.popleft() if self.answers else False


class RecordingTabs(TabRegistry):
    """TabRegistry that also records every notification and dirty change."""

    def __init__(self) -> None:
        super().__init__(on_notify=self._record_notify)
        self.notifications: list[str] = []
        self.dirty_events: list[tuple[str, bool]] = []
        self.loading_events: list[tuple[str, bool]] = []

    def _record_notify(self, message: str) -> None:
        self.notifications.append(message)

    def set_dirty(self, tab_id: str, dirty: bool) -> None:
        self.dirty_events.append((tab_id, dirty))
        super().set_dirty(tab_id, dirty)

    def set_loading(self, tab_id: str, loading: bool) -> None:
        self.loading_events.append((tab_id, loading))
        super().set_loading(tab_id, loading)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def channel():
    return ScriptedChannel()


@pytest.fixture
def tabs():
    registry = RecordingTabs()
    registry.open_tab(LAYOUTS_TAB_ID, KIND_LAYOUTS, title="Layouts")
    registry.open_tab(SETTINGS_TAB_ID, KIND_SETTINGS, title="Settings")
    return registry


@pytest.fixture
def layout_item():
    """An existing layout as the server sends it."""
    return {
        "id": "42",
        "title": "Article",
        "okey": "article",
        "pug": "h1 #{title}",
        "custFields": [
            {"fldName": "title", "fldTitle": "Title", "fldType": "text"},
            {"fldName": "body", "fldTitle": "Body", "fldType": "richtext"},
        ],
        "createdAt": "2024-01-01",
    }


@pytest.fixture
def open_layout_tab(tabs):
    """Register a layout tab and return its id."""

    def _open(doc_id: str) -> str:
        tab_id = layout_tab_id(doc_id)
        tabs.open_tab(tab_id, KIND_LAYOUT, doc_id=doc_id)
        return tab_id

    return _open


@pytest.fixture
def transport_error():
    return TransportError("Internal Server Error", 500)
