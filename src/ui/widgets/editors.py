"""Editor panes: LayoutEditor, SettingsEditor and LayoutListView.

Each pane owns one session. Session operations that can open a dialog run
in workers, so the pane's message loop stays free to deliver the dialog's
result.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable

from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.widgets import Button, Input, Log, Static, TextArea

from backend import TransportError
from controller.errors import EditorError
from controller.tabs import LAYOUTS_TAB_ID
from model import Entry
from ui.ids import css
from ui.tabs import compose_layout_tab, compose_layouts_tab, compose_settings_tab
from ui.widgets.entries import CategoryItem, EntryItem, LayoutListItem
import ui.ids as ids

if TYPE_CHECKING:
    from backend import PersistenceClient
    from controller.collection import CollectionMutator
    from controller.session import DocumentSession, EditorSession
    from controller.settings import ConfigSession
    from controller.tabs import TabRegistry

log = logging.getLogger(__name__)


class EditorPane(Container):
    """Base for panes bound to an editor session."""

    session: EditorSession

    def run_session(self, work: Awaitable[Any]) -> None:
        """Run a session coroutine in a worker, reporting editor errors."""
        self.run_worker(self._guarded(work), group="session")

    def request_save(self) -> None:
        self.run_session(self.session.save())

    async def _guarded(self, work: Awaitable[Any]) -> None:
        try:
            await work
        except EditorError as e:
            log.info(f"{type(e).__name__}: {e}")
            self.app.notify(str(e), severity="error")

    async def _rebuild(
        self,
        list_id: str,
        mutator: CollectionMutator,
        label_fields: tuple[str, ...],
        refresh: Callable[[], Awaitable[None]],
    ) -> None:
        """Replace the rows of an entry list with the mutator's entries."""
        try:
            container = self.query_one(css(list_id), Vertical)
        except NoMatches:
            log.debug(f"Entry list {list_id} not found")
            return

        def edit(entry: Entry) -> None:
            self.run_session(self._then(mutator.edit(entry), refresh))

        def remove(entry: Entry) -> None:
            self.run_session(self._then(mutator.remove(entry), refresh))

        def move(from_index: int, to_index: int) -> None:
            mutator.reorder(from_index, to_index)
            self.run_session(refresh())

        await container.remove_children()
        await container.mount_all(
            [
                EntryItem(entry, i, entry.label(*label_fields), edit, remove, move)
                for i, entry in enumerate(mutator.entries)
            ]
        )

    @staticmethod
    async def _then(work: Awaitable[Any], refresh: Callable[[], Awaitable[None]]) -> None:
        await work
        await refresh()


class LayoutEditor(EditorPane):
    """Pane editing one layout through a DocumentSession."""

    FIELD_LABELS = ("fldName", "fldTitle")

    def __init__(self, session: DocumentSession) -> None:
        super().__init__(classes="editor-pane")
        self.session = session

    def compose(self) -> ComposeResult:
        yield from compose_layout_tab()

    def on_mount(self) -> None:
        self.run_session(self._load())

    async def _load(self) -> None:
        await self.session.initialize()
        await self.populate()

    async def populate(self) -> None:
        """Copy the loaded layout into the widgets."""
        layout = self.session.document
        if layout is None:
            self.query_one(css(ids.SAVE_LAYOUT_BTN), Button).disabled = True
            return
        self.query_one(css(ids.LAYOUT_KEY_INPUT), Input).value = layout.okey
        self.query_one(css(ids.LAYOUT_TITLE_INPUT), Input).value = layout.title
        self.query_one(css(ids.LAYOUT_TEMPLATE), TextArea).load_text(layout.template)
        await self.refresh_fields()

    async def refresh_fields(self) -> None:
        await self._rebuild(ids.FIELDS_LIST, self.session.fields, self.FIELD_LABELS, self.refresh_fields)

    def _set_value(self, name: str, value: str) -> None:
        """Apply a scalar edit; unchanged values do not mark the layout dirty."""
        layout = self.session.document
        if layout is None or getattr(layout, name) == value:
            return
        setattr(layout, name, value)
        self.session.mark_dirty()

    @on(Input.Changed, css(ids.LAYOUT_KEY_INPUT))
    def on_key_changed(self, event: Input.Changed) -> None:
        self._set_value("okey", event.value)

    @on(Input.Changed, css(ids.LAYOUT_TITLE_INPUT))
    def on_title_changed(self, event: Input.Changed) -> None:
        self._set_value("title", event.value)

    @on(TextArea.Changed, css(ids.LAYOUT_TEMPLATE))
    def on_template_changed(self, event: TextArea.Changed) -> None:
        self._set_value("template", event.text_area.text)

    @on(Button.Pressed, css(ids.SAVE_LAYOUT_BTN))
    def on_save_pressed(self, event: Button.Pressed) -> None:
        self.request_save()

    @on(Button.Pressed, css(ids.DELETE_LAYOUT_BTN))
    def on_delete_pressed(self, event: Button.Pressed) -> None:
        self.run_session(self.session.delete())

    @on(Button.Pressed, css(ids.ADD_FIELD_BTN))
    def on_add_field_pressed(self, event: Button.Pressed) -> None:
        self.run_session(self._then(self.session.fields.add(), self.refresh_fields))

    @on(Button.Pressed, css(ids.TEMPLATE_HELP_BTN))
    def on_template_help_pressed(self, event: Button.Pressed) -> None:
        self.query_one(css(ids.TEMPLATE_HELP), Static).toggle_class("hidden")


class SettingsEditor(EditorPane):
    """Pane editing the global configuration through a ConfigSession."""

    def __init__(self, session: ConfigSession) -> None:
        super().__init__(classes="editor-pane")
        self.session = session
        self._add_buttons = {
            ids.section_add_btn(field_name): field_name for field_name, _, _ in ids.SETTINGS_SECTIONS
        }

    def compose(self) -> ComposeResult:
        yield from compose_settings_tab()

    def on_mount(self) -> None:
        self.run_session(self._load())

    async def _load(self) -> None:
        await self.session.initialize()
        await self.populate()

    def _mutator(self, field_name: str) -> CollectionMutator:
        return getattr(self.session, field_name)

    async def populate(self) -> None:
        for field_name, _, label_fields in ids.SETTINGS_SECTIONS:
            await self.refresh_section(field_name, label_fields)
        await self.refresh_categories()
        self.refresh_restart_hint()

    async def refresh_section(self, field_name: str, label_fields: tuple[str, ...] | None = None) -> None:
        if label_fields is None:
            label_fields = next(s[2] for s in ids.SETTINGS_SECTIONS if s[0] == field_name)

        async def refresh() -> None:
            await self.refresh_section(field_name, label_fields)
            self.refresh_restart_hint()

        await self._rebuild(ids.section_list(field_name), self._mutator(field_name), label_fields, refresh)

    async def refresh_categories(self) -> None:
        container = self.query_one(css(ids.CATEGORY_LIST), Vertical)
        await container.remove_children()
        config = self.session.document
        if config is None:
            return
        await container.mount_all(
            [CategoryItem(name, self._remove_category) for name in config.categories]
        )

    def refresh_restart_hint(self) -> None:
        hint = "Restart required after saving" if self.session.restart_required else ""
        self.query_one(css(ids.RESTART_HINT), Static).update(hint)

    def _remove_category(self, name: str) -> None:
        self.run_session(self._then(self.session.remove_category(name), self.refresh_categories))

    @on(Button.Pressed)
    def on_section_add_pressed(self, event: Button.Pressed) -> None:
        field_name = self._add_buttons.get(event.button.id or "")
        if field_name is None:
            return
        event.stop()

        async def add() -> None:
            await self._mutator(field_name).add()
            await self.refresh_section(field_name)
            self.refresh_restart_hint()

        self.run_session(add())

    @on(Button.Pressed, css(ids.SAVE_SETTINGS_BTN))
    def on_save_pressed(self, event: Button.Pressed) -> None:
        self.request_save()

    @on(Button.Pressed, css(ids.ADD_CATEGORY_BTN))
    def on_add_category_pressed(self, event: Button.Pressed) -> None:
        self._add_category_from_input()

    @on(Input.Submitted, css(ids.CATEGORY_INPUT))
    def on_category_submitted(self, event: Input.Submitted) -> None:
        self._add_category_from_input()

    def _add_category_from_input(self) -> None:
        category_input = self.query_one(css(ids.CATEGORY_INPUT), Input)

        async def add() -> None:
            if self.session.add_category(category_input.value):
                category_input.value = ""
            await self.refresh_categories()

        self.run_session(add())

    @on(Button.Pressed, css(ids.BACKUP_BTN))
    def on_backup_pressed(self, event: Button.Pressed) -> None:
        target = self.query_one(css(ids.BACKUP_TARGET), Input).value
        self.run_session(self._backup(target))

    async def _backup(self, target: str) -> None:
        backup_log = self.query_one(css(ids.BACKUP_LOG), Log)
        try:
            await self.session.create_backup(target)
        finally:
            backup_log.clear()
            backup_log.write_lines(self.session.backup_log)


class LayoutListView(Container):
    """The list of all layouts; reloads when marked stale."""

    def __init__(self, client: PersistenceClient, tabs: TabRegistry) -> None:
        super().__init__(classes="editor-pane")
        self.client = client
        self.tabs = tabs

    def compose(self) -> ComposeResult:
        yield from compose_layouts_tab()

    def on_mount(self) -> None:
        self.reload()

    def reload(self) -> None:
        self.run_worker(self._load(), group="layouts", exclusive=True)

    async def _load(self) -> None:
        self.tabs.set_loading(LAYOUTS_TAB_ID, True)
        try:
            items = await self.client.list_layouts()
        except TransportError as e:
            log.warning(f"Loading layouts failed: {e}")
            self.tabs.notify("Error while loading layouts")
            items = None
        finally:
            self.tabs.set_loading(LAYOUTS_TAB_ID, False)
        if items is None:
            return
        self.tabs.mark_data_stale(LAYOUTS_TAB_ID, False)

        layout_list = self.query_one(css(ids.LAYOUT_LIST), VerticalScroll)
        await layout_list.remove_children()
        await layout_list.mount_all(
            [
                LayoutListItem(str(item.get("id")), item.get("title") or "Untitled Layout", self._open)
                for item in items
                if item.get("id") is not None
            ]
        )
        self.query_one(css(ids.LAYOUT_LIST_EMPTY), Static).set_class(bool(items), "hidden")

    def _open(self, doc_id: str) -> None:
        self.tabs.navigate_to(f"/layouts/{doc_id}")

    @on(Button.Pressed, css(ids.REFRESH_LAYOUTS_BTN))
    def on_refresh_pressed(self, event: Button.Pressed) -> None:
        self.reload()
