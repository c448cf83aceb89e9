"""Tests for DirtyTracker edge detection."""

from controller import DirtyTracker


class FakeTabs:
    def __init__(self):
        self.events = []

    def set_dirty(self, tab_id, dirty):
        self.events.append((tab_id, dirty))


class TestDirtyTracker:
    """Tests for DirtyTracker.set()."""

    def test_starts_clean(self):
        tracker = DirtyTracker(FakeTabs(), lambda: "t1")
        assert tracker.dirty is False

    def test_reports_only_transitions(self):
        tabs = FakeTabs()
        tracker = DirtyTracker(tabs, lambda: "t1")

        tracker.set(True)
        tracker.set(True)
        tracker.set(True)
        tracker.set(False)
        tracker.set(False)

        assert tabs.events == [("t1", True), ("t1", False)]

    def test_clean_to_clean_is_silent(self):
        tabs = FakeTabs()
        tracker = DirtyTracker(tabs, lambda: "t1")
        tracker.set(False)
        assert tabs.events == []

    def test_uses_current_tab_id(self):
        """The tab id is read at transition time, after a rename."""
        tabs = FakeTabs()
        tab_id = ["tab-layout-NEW"]
        tracker = DirtyTracker(tabs, lambda: tab_id[0])

        tracker.set(True)
        tab_id[0] = "tab-layout-42"
        tracker.set(False)

        assert tabs.events == [("tab-layout-NEW", True), ("tab-layout-42", False)]

    def test_truthy_values_are_normalized(self):
        tabs = FakeTabs()
        tracker = DirtyTracker(tabs, lambda: "t1")
        tracker.set(1)
        tracker.set("yes")
        assert tracker.dirty is True
        assert tabs.events == [("t1", True)]
