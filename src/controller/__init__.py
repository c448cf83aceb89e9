"""Controller layer: editor sessions between the UI and the persistence client.

This package contains:
- session: DocumentSession (layouts) and the shared EditorSession state machine
- settings: ConfigSession for the global configuration and image profiles
- collection: CollectionMutator for list fields edited through dialogs
- dirty / tabs / modal: the unsaved-changes flag, tab registry and dialog contract
"""

from controller.errors import (
    BackupTargetError,
    DocumentValidationError,
    EditorError,
    OperationInProgressError,
)
from controller.modal import ModalAction, ModalKind, ModalOutcome, ModalRequest, ModalResultChannel
from controller.dirty import DirtyTracker
from controller.tabs import (
    KIND_LAYOUT,
    KIND_LAYOUTS,
    KIND_SETTINGS,
    LAYOUTS_TAB_ID,
    SETTINGS_TAB_ID,
    TabCoordinator,
    TabRegistry,
    TabState,
    layout_tab_id,
)
from controller.collection import CollectionMutator
from controller.session import DocumentSession, EditorSession, SessionState
from controller.settings import ConfigSession

__all__ = [
    # Errors
    "BackupTargetError",
    "DocumentValidationError",
    "EditorError",
    "OperationInProgressError",
    # Dialog contract
    "ModalAction",
    "ModalKind",
    "ModalOutcome",
    "ModalRequest",
    "ModalResultChannel",
    # Tabs
    "DirtyTracker",
    "KIND_LAYOUT",
    "KIND_LAYOUTS",
    "KIND_SETTINGS",
    "LAYOUTS_TAB_ID",
    "SETTINGS_TAB_ID",
    "TabCoordinator",
    "TabRegistry",
    "TabState",
    "layout_tab_id",
    # Sessions
    "CollectionMutator",
    "ConfigSession",
    "DocumentSession",
    "EditorSession",
    "SessionState",
]
