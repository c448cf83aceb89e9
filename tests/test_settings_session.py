"""Tests for ConfigSession: configuration, image profiles, categories and backup."""

import pytest

from backend import BackupResult, SaveResult, TransportError
from controller import (
    SETTINGS_TAB_ID,
    BackupTargetError,
    ConfigSession,
    DocumentValidationError,
    ModalOutcome,
    OperationInProgressError,
    SessionState,
)
from model import Entry


@pytest.fixture
def config_payload():
    return {
        "buckets": [{"label": "media", "bucketname": "cms-media"}],
        "cfdists": [],
        "pugGlobalScripts": [{"name": "fmt"}],
        "bookmarks": None,
        "feeds": [{"title": "News", "url": "https://example.com/rss"}],
        "variables": [{"variable": "siteName", "value": "Demo"}],
        "categories": ["news", "blog"],
        "theme": "dark",
    }


@pytest.fixture
def session(backend, tabs, channel, config_payload):
    backend.config = config_payload
    backend.image_profiles = {"lstProfiles": [{"label": "thumb", "width": 200}]}
    return ConfigSession(backend, tabs, channel)


class TestInitialize:
    """Tests for ConfigSession.initialize()."""

    @pytest.mark.asyncio
    async def test_loads_config_and_profiles(self, session, backend):
        await session.initialize()

        assert backend.names() == ["fetch_config", "fetch_image_profiles"]
        assert session.document.buckets[0].get("bucketname") == "cms-media"
        assert session.document.global_scripts[0].get("name") == "fmt"
        assert session.document.bookmarks == []
        assert session.document.categories == ["news", "blog"]
        assert session.image_profiles.profiles[0].get("label") == "thumb"
        assert session.dirty is False
        assert session.state is SessionState.READY

    @pytest.mark.asyncio
    async def test_config_failure_still_loads_profiles(self, session, backend, tabs, transport_error):
        backend.errors["fetch_config"] = transport_error
        await session.initialize()

        assert session.document is None
        assert session.image_profiles is not None
        assert tabs.notifications == ["Error while loading"]
        assert tabs.is_loading(SETTINGS_TAB_ID) is False

    @pytest.mark.asyncio
    async def test_profiles_failure_notifies(self, session, backend, tabs, transport_error):
        backend.errors["fetch_image_profiles"] = transport_error
        await session.initialize()

        assert session.document is not None
        assert tabs.notifications == ["Error while loading imageprofiles"]


    @pytest.mark.asyncio
    async def test_malformed_config_is_reported(self, session, backend, tabs):
        backend.config = {"variables": ["plain-string"]}
        await session.initialize()

        assert session.document is None
        assert session.image_profiles is not None
        assert tabs.notifications == ["Error while loading"]
        assert tabs.is_loading(SETTINGS_TAB_ID) is False
        assert session.state is SessionState.READY

    @pytest.mark.asyncio
    async def test_malformed_profiles_are_reported(self, session, backend, tabs):
        backend.image_profiles = {"lstProfiles": "thumb"}
        await session.initialize()

        assert session.document is not None
        assert session.image_profiles is None
        assert tabs.notifications == ["Error while loading imageprofiles"]
        assert session.state is SessionState.READY

    @pytest.mark.asyncio
    async def test_missing_config_stays_unbound(self, session, backend, tabs):
        """No config in the response must not be saved back as an empty one."""
        backend.config = None
        await session.initialize()

        assert session.document is None
        assert tabs.notifications == ["Error while loading"]

        await session.save()
        assert "save_config" not in backend.names()
        assert "save_image_profiles" in backend.names()

    @pytest.mark.asyncio
    async def test_missing_profiles_stay_unbound(self, session, backend, tabs):
        backend.image_profiles = None
        await session.initialize()

        assert session.image_profiles is None
        assert tabs.notifications == ["Error while loading imageprofiles"]

        await session.save()
        assert "save_image_profiles" not in backend.names()


class TestSave:
    """Tests for ConfigSession.save()."""

    @pytest.mark.asyncio
    async def test_saves_config_then_profiles(self, session, backend, tabs):
        await session.initialize()
        session.mark_dirty()

        assert await session.save() is True

        assert backend.names()[-2:] == ["save_config", "save_image_profiles"]
        cfg = backend.calls[-2][1]
        assert cfg["pugGlobalScripts"] == [{"name": "fmt"}]
        assert cfg["theme"] == "dark"
        assert backend.calls[-1][1]["lstProfiles"] == [{"label": "thumb", "width": 200}]
        assert tabs.notifications == ["Configuration saved"]
        assert session.dirty is False

    @pytest.mark.asyncio
    async def test_unconfirmed_save_stays_dirty(self, session, backend, tabs):
        backend.config_save_result = SaveResult(success=False)
        await session.initialize()
        session.mark_dirty()

        assert await session.save() is False
        assert session.dirty is True
        assert tabs.notifications == []

    @pytest.mark.asyncio
    async def test_config_error_notifies(self, session, backend, tabs, transport_error):
        await session.initialize()
        backend.errors["save_config"] = transport_error

        assert await session.save() is False
        assert tabs.notifications == ["Error while saving configuration"]
        assert "save_image_profiles" in backend.names()
        assert session.state is SessionState.READY

    @pytest.mark.asyncio
    async def test_profiles_error_notifies(self, session, backend, tabs, transport_error):
        await session.initialize()
        backend.errors["save_image_profiles"] = transport_error

        assert await session.save() is True
        assert tabs.notifications == ["Error while saving image profiles", "Configuration saved"]

    @pytest.mark.asyncio
    async def test_save_rejected_while_busy(self, session):
        await session.initialize()
        session.state = SessionState.SAVING

        with pytest.raises(OperationInProgressError):
            await session.save()


class TestRestart:
    """Edits to restart-relevant lists ask for a restart after saving."""

    @pytest.mark.asyncio
    async def test_bucket_change_asks_for_restart(self, backend, tabs, channel, config_payload):
        restarts = []
        backend.config = config_payload
        session = ConfigSession(backend, tabs, channel, on_restart=lambda: restarts.append(True))
        await session.initialize()

        channel.outcomes.append(ModalOutcome.added(Entry({"label": "assets"})))
        await session.buckets.add()
        assert session.restart_required is True

        channel.answers.append(True)
        await session.save()

        assert channel.prompts == [ConfigSession.RESTART_PROMPT]
        assert restarts == [True]

    @pytest.mark.asyncio
    async def test_declined_restart(self, backend, tabs, channel, config_payload):
        restarts = []
        backend.config = config_payload
        session = ConfigSession(backend, tabs, channel, on_restart=lambda: restarts.append(True))
        await session.initialize()
        channel.outcomes.append(ModalOutcome.added(Entry({"label": "assets"})))
        await session.buckets.add()

        await session.save()

        assert channel.prompts == [ConfigSession.RESTART_PROMPT]
        assert restarts == []

    @pytest.mark.asyncio
    async def test_variable_change_needs_no_restart(self, session, channel):
        await session.initialize()
        channel.outcomes.append(ModalOutcome.added(Entry({"variable": "x"})))
        await session.variables.add()

        assert session.restart_required is False
        await session.save()
        assert channel.prompts == []

    @pytest.mark.asyncio
    async def test_feed_edits_need_no_restart(self, session, channel):
        await session.initialize()
        channel.outcomes.append(ModalOutcome.added(Entry({"title": "Blog"})))
        await session.feeds.add()
        await session.feeds.edit(session.document.feeds[0])

        assert session.restart_required is False
        assert session.dirty is True

    @pytest.mark.asyncio
    async def test_feed_removal_asks_for_restart(self, session, channel):
        await session.initialize()
        channel.answers.append(True)

        assert await session.feeds.remove(session.document.feeds[0]) is True
        assert session.restart_required is True

    @pytest.mark.asyncio
    async def test_declined_feed_removal_keeps_flag_clear(self, session):
        await session.initialize()

        assert await session.feeds.remove(session.document.feeds[0]) is False
        assert session.restart_required is False

    @pytest.mark.asyncio
    async def test_feed_dialog_gets_categories(self, session, channel):
        await session.initialize()
        await session.feeds.add()

        assert channel.requests[0].kind == "feed"
        assert channel.requests[0].context == {"categories": ["news", "blog"]}

    @pytest.mark.asyncio
    async def test_profiles_edit_the_image_profiles(self, session, channel):
        await session.initialize()
        channel.outcomes.append(ModalOutcome.added(Entry({"label": "hero"})))
        await session.profiles.add()

        assert [p.get("label") for p in session.image_profiles.profiles] == ["thumb", "hero"]


class TestCategories:
    """Tests for add_category() and remove_category()."""

    @pytest.mark.asyncio
    async def test_add_category(self, session):
        await session.initialize()

        assert session.add_category("  sport ") is True
        assert session.document.categories == ["news", "blog", "sport"]
        assert session.dirty is True

    @pytest.mark.asyncio
    async def test_blank_category_is_ignored(self, session):
        await session.initialize()

        assert session.add_category("   ") is False
        assert session.document.categories == ["news", "blog"]

    @pytest.mark.asyncio
    async def test_remove_category_confirmed(self, session, channel):
        await session.initialize()
        channel.answers.append(True)

        assert await session.remove_category("news") is True
        assert session.document.categories == ["blog"]

    @pytest.mark.asyncio
    async def test_remove_category_declined(self, session, channel):
        await session.initialize()

        assert await session.remove_category("news") is False
        assert session.document.categories == ["news", "blog"]
        assert session.dirty is False

    def test_categories_need_config(self, session):
        with pytest.raises(DocumentValidationError):
            session.add_category("x")


class TestBackup:
    """Tests for create_backup()."""

    @pytest.mark.asyncio
    async def test_backup_success(self, session, backend, channel, tabs):
        await session.initialize()
        channel.answers.append(True)

        assert await session.create_backup("cms-media") is True
        assert backend.calls[-1] == ("create_backup", "cms-media")
        assert session.backup_log == ["backup done"]
        assert tabs.notifications == ["Backup saved"]
        assert session.backup_running is False

    @pytest.mark.asyncio
    async def test_backup_declined(self, session, backend, channel):
        await session.initialize()

        assert await session.create_backup("cms-media") is False
        assert "create_backup" not in backend.names()

    @pytest.mark.parametrize("target", [None, "", "-", "  "])
    @pytest.mark.asyncio
    async def test_backup_requires_target(self, session, backend, channel, target):
        await session.initialize()
        channel.answers.append(True)

        with pytest.raises(BackupTargetError, match="You must select a bucket."):
            await session.create_backup(target)
        assert "create_backup" not in backend.names()

    @pytest.mark.asyncio
    async def test_backup_transport_error_is_logged(self, session, backend, channel, tabs):
        await session.initialize()
        backend.errors["create_backup"] = TransportError("Forbidden", 403)
        channel.answers.append(True)

        assert await session.create_backup("cms-media") is False
        assert session.backup_log == ["403: Forbidden"]
        assert tabs.notifications == ["Error while creating backup"]
        assert session.backup_running is False

    @pytest.mark.asyncio
    async def test_backup_rejected_while_running(self, session):
        await session.initialize()
        session.backup_running = True

        with pytest.raises(OperationInProgressError):
            await session.create_backup("cms-media")

    @pytest.mark.asyncio
    async def test_failed_backup_keeps_server_log(self, session, backend, channel, tabs):
        await session.initialize()
        backend.backup_result = BackupResult(success=False, log=["dump failed"])
        channel.answers.append(True)

        assert await session.create_backup("cms-media") is False
        assert session.backup_log == ["dump failed"]
        assert tabs.notifications == []
