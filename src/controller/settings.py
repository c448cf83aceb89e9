"""Configuration editing session.

Edits the singleton AppConfig and, independently, the image profile
collection. Both are loaded and saved by separate requests whose failures
are reported separately. Changes to some collections (buckets,
distributions, bookmarks, feeds) only take effect after the application
restarts; editing them raises a sticky restart flag that is checked when a
save succeeds.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable

from backend import TransportError
from controller.collection import CollectionMutator
from controller.errors import DocumentValidationError, OperationInProgressError
from controller.modal import ModalKind
from controller.session import EditorSession, SessionState
from controller.tabs import SETTINGS_TAB_ID
from controller.validators import validate_backup_target
from model import AppConfig, ImageProfiles, from_wire, to_wire

if TYPE_CHECKING:
    from backend import PersistenceClient
    from controller.modal import ModalResultChannel
    from controller.tabs import TabCoordinator

log = logging.getLogger(__name__)


class ConfigSession(EditorSession):
    """Load and save the global configuration and the image profiles."""

    RESTART_PROMPT = "Restart of application recommended.\nRestart now?"

    def __init__(
        self,
        client: PersistenceClient,
        tabs: TabCoordinator,
        channel: ModalResultChannel,
        tab_id: str = SETTINGS_TAB_ID,
        on_restart: Callable[[], None] | None = None,
        mark_dirty_on_open: bool = True,
    ) -> None:
        """Initialize the session.

        Args:
            client: Persistence client
            tabs: Tab coordinator owning the settings tab
            channel: Modal channel for entry dialogs and confirmations
            tab_id: Id of the settings tab
            on_restart: Called when the user accepts a restart after saving
            mark_dirty_on_open: Passed to every collection mutator
        """
        super().__init__(client, tabs, channel, tab_id)
        self.document: AppConfig | None = None
        self.image_profiles: ImageProfiles | None = None
        self.restart_required = False
        self.backup_log: list[str] = []
        self.backup_running = False
        self._on_restart = on_restart

        def mutator(field_name: str, kind: str, restart: bool = False, **kwargs) -> CollectionMutator:
            return CollectionMutator(
                self,
                field_name,
                kind,
                mark_dirty_on_open=mark_dirty_on_open,
                on_change=self._flag_restart if restart else None,
                **kwargs,
            )

        self.buckets = mutator("buckets", ModalKind.BUCKET, restart=True)
        self.cfdists = mutator("cfdists", ModalKind.CFDIST, restart=True)
        self.bookmarks = mutator("bookmarks", ModalKind.BOOKMARK, restart=True)
        self.feeds = mutator(
            "feeds",
            ModalKind.FEED,
            on_remove=self._flag_restart,
            context=lambda: {"categories": list(self.document.categories if self.document else [])},
        )
        self.global_scripts = mutator("global_scripts", ModalKind.GLOBAL_SCRIPT)
        self.variables = mutator("variables", ModalKind.VARIABLE)
        self.profiles = mutator(
            "profiles",
            ModalKind.IMAGE_PROFILE,
            target=lambda: self.image_profiles,
        )

    # =========================================================================
    # Load / save
    # =========================================================================

    async def initialize(self) -> None:
        """Fetch the configuration, then the image profiles.

        A missing or malformed document is reported and left unbound, so a
        later save never overwrites the server copy with defaults.
        """
        self._begin(SessionState.LOADING, SessionState.LOADING, SessionState.READY)

        try:
            try:
                cfg = await self.client.fetch_config()
                if cfg is None:
                    raise TransportError("No configuration in response")
                self.document = from_wire(AppConfig, cfg)
                self.set_dirty(False)
            except (TransportError, ValueError) as e:
                log.warning(f"Loading configuration failed: {e}")
                self.tabs.notify("Error while loading")

            try:
                profiles = await self.client.fetch_image_profiles()
                if profiles is None:
                    raise TransportError("No image profiles in response")
                self.image_profiles = from_wire(ImageProfiles, profiles)
            except (TransportError, ValueError) as e:
                log.warning(f"Loading image profiles failed: {e}")
                self.tabs.notify("Error while loading imageprofiles")
        finally:
            self._finish()

    async def save(self) -> bool:
        """Save the configuration and the image profiles.

        Returns:
            True if the server confirmed the configuration save
        """
        if self.state is not SessionState.READY:
            raise OperationInProgressError(f"Cannot save while session is {self.state.value}")
        self._begin(SessionState.SAVING)

        saved = False
        if self.document is not None:
            try:
                result = await self.client.save_config(to_wire(self.document))
                saved = result.success
            except TransportError as e:
                log.warning(f"Saving configuration failed: {e}")
                self.tabs.notify("Error while saving configuration")

        if self.image_profiles is not None:
            try:
                await self.client.save_image_profiles(to_wire(self.image_profiles))
            except TransportError as e:
                log.warning(f"Saving image profiles failed: {e}")
                self.tabs.notify("Error while saving image profiles")

        self._finish()
        if saved:
            self.tabs.notify("Configuration saved")
            self.set_dirty(False)
            if self.restart_required and await self.confirm(self.RESTART_PROMPT):
                log.info("Restart requested after configuration save")
                if self._on_restart:
                    self._on_restart()
        return saved

    # =========================================================================
    # Restart flag
    # =========================================================================

    def _flag_restart(self) -> None:
        self.restart_required = True

    # =========================================================================
    # Categories (plain strings, no dialog)
    # =========================================================================

    def add_category(self, name: str) -> bool:
        """Append a category name. Blank names are ignored.

        Returns:
            True if a category was added
        """
        config = self._require_config()
        name = name.strip()
        if name:
            config.categories.append(name)
        self.mark_dirty()
        return bool(name)

    async def remove_category(self, name: str) -> bool:
        """Remove the first category with this name after confirmation."""
        config = self._require_config()
        if not await self.confirm("Delete this entry?"):
            return False
        removed = False
        if name in config.categories:
            config.categories.remove(name)
            removed = True
        self.mark_dirty()
        return removed

    def _require_config(self) -> AppConfig:
        if self.document is None:
            raise DocumentValidationError("No configuration loaded")
        return self.document

    # =========================================================================
    # Backup
    # =========================================================================

    async def create_backup(self, target: str | None) -> bool:
        """Ask the server to back up the database to the target bucket.

        The backup log is replaced by the lines the server returns; on
        failure the error is appended to it.

        Raises:
            BackupTargetError: No target bucket selected
            OperationInProgressError: A backup is already running
        """
        if self.backup_running:
            raise OperationInProgressError("A backup is already running")
        if not await self.confirm("Create database backup?"):
            return False
        self.backup_log = []
        target = validate_backup_target(target)

        self.backup_running = True
        try:
            result = await self.client.create_backup(target)
        except TransportError as e:
            log.warning(f"Backup to {target} failed: {e}")
            self.backup_log.append(f"{e.status}: {e.message}")
            self.tabs.notify("Error while creating backup")
            return False
        finally:
            self.backup_running = False

        if result.log:
            self.backup_log = list(result.log)
        if result.success:
            self.tabs.notify("Backup saved")
        return result.success
