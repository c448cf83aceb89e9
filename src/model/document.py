"""Base document and list-entry models."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

# Id carried by a document that has never been persisted
NEW_DOCUMENT_ID = "NEW"


def new_entry_key() -> str:
    """Return a fresh opaque key for a list entry."""
    return uuid.uuid4().hex


@dataclass
class Entry:
    """One element of a list-valued document field.

    The content is opaque to the editor. Entries are matched by ``key``,
    which is assigned when the entry is created and never sent to the server,
    so two entries with equal data stay distinct.
    """

    data: dict[str, Any] = field(default_factory=dict)
    key: str = field(default_factory=new_entry_key, compare=False)

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)

    def label(self, *candidates: str) -> str:
        """Short display label from the first non-empty candidate field."""
        for name in candidates:
            value = self.data.get(name)
            if value not in (None, ""):
                return str(value)
        return "(unnamed)"


@dataclass
class Document:
    """A top-level record edited in one tab.

    Keys of the server payload that the model does not know about are kept
    in ``extra`` and written back on save.
    """

    id: str = field(default=NEW_DOCUMENT_ID, metadata={"wire": "id"})
    title: str = field(default="", metadata={"wire": "title"})
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def is_new(self) -> bool:
        return self.id == NEW_DOCUMENT_ID
