"""List entry widgets: EntryItem and CategoryItem."""

from typing import Callable

from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button, Static

from model import Entry


class EntryItem(Container):
    """A row for one list entry with edit, move and remove buttons."""

    def __init__(
        self,
        entry: Entry,
        index: int,
        label: str,
        on_edit: Callable,
        on_remove: Callable,
        on_move: Callable,
    ) -> None:
        super().__init__(classes="entry-item")
        self.entry = entry
        self.index = index
        self._label = label
        self._on_edit = on_edit
        self._on_remove = on_remove
        self._on_move = on_move

    def compose(self) -> ComposeResult:
        with Horizontal(classes="entry-row"):
            yield Button(self._label, classes="entry-edit-btn", variant="primary")
            yield Button("↑", classes="entry-up-btn", variant="default")
            yield Button("↓", classes="entry-down-btn", variant="default")
            yield Button("x", classes="entry-remove-btn", variant="error")

    @on(Button.Pressed, ".entry-edit-btn")
    def on_edit_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_edit(self.entry)

    @on(Button.Pressed, ".entry-remove-btn")
    def on_remove_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_remove(self.entry)

    @on(Button.Pressed, ".entry-up-btn")
    def on_up_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_move(self.index, self.index - 1)

    @on(Button.Pressed, ".entry-down-btn")
    def on_down_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_move(self.index, self.index + 1)


class CategoryItem(Container):
    """A category name with a remove button."""

    def __init__(self, name: str, on_remove: Callable) -> None:
        super().__init__(classes="category-item")
        self.category = name
        self._on_remove = on_remove

    def compose(self) -> ComposeResult:
        with Horizontal(classes="category-row"):
            yield Static(self.category, classes="category-name")
            yield Button("x", classes="category-remove-btn", variant="error")

    @on(Button.Pressed, ".category-remove-btn")
    def on_remove_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_remove(self.category)


class LayoutListItem(Container):
    """A clickable layout in the layout list."""

    def __init__(self, doc_id: str, title: str, on_open: Callable) -> None:
        super().__init__(classes="layout-list-item")
        self.doc_id = doc_id
        self._title = title
        self._on_open = on_open

    def compose(self) -> ComposeResult:
        yield Button(self._title, classes="layout-open-btn", variant="primary")

    @on(Button.Pressed, ".layout-open-btn")
    def on_open_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_open(self.doc_id)
