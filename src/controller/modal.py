"""Modal result protocol shared by the controllers and the UI.

A controller opens a modal with a ``ModalRequest`` and awaits exactly one
``ModalOutcome``. Closing a dialog without a result resolves to
``ModalOutcome.cancelled()``, never to ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol

from model.document import Entry


class ModalAction(Enum):
    ADD = "add"
    UPDATE = "update"
    CANCEL = "cancel"


class ModalKind:
    """Dialog identifiers understood by the UI channel."""

    LAYOUT_FIELD = "layout-field"
    BUCKET = "bucket"
    CFDIST = "cfdist"
    GLOBAL_SCRIPT = "global-script"
    BOOKMARK = "bookmark"
    FEED = "feed"
    VARIABLE = "variable"
    IMAGE_PROFILE = "image-profile"


@dataclass
class ModalRequest:
    """Input data for an entry dialog.

    Attributes:
        kind: Which dialog to open (see ModalKind)
        is_new: True when the dialog creates a new entry
        entry: The entry being edited (None when creating)
        allowed_kinds: Entry kinds the dialog may offer, if the field is typed
        context: Cross references the dialog needs (e.g. category names)
    """

    kind: str
    is_new: bool = False
    entry: Entry | None = None
    allowed_kinds: tuple[str, ...] = ()
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class ModalOutcome:
    """Tagged result of a dialog."""

    action: ModalAction
    payload: Entry | None = None

    @classmethod
    def cancelled(cls) -> ModalOutcome:
        return cls(ModalAction.CANCEL)

    @classmethod
    def added(cls, entry: Entry) -> ModalOutcome:
        return cls(ModalAction.ADD, entry)

    @classmethod
    def updated(cls, entry: Entry) -> ModalOutcome:
        return cls(ModalAction.UPDATE, entry)


class ModalResultChannel(Protocol):
    """Opens dialogs and resolves once per dialog."""

    async def open(self, request: ModalRequest) -> ModalOutcome: ...

    async def confirm(self, message: str) -> bool: ...
