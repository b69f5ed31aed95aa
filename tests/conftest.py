"""Fake window-server and accessibility services."""

from dataclasses import dataclass

import pytest

from editor_windows.errors import AccessibilityUnavailable, SnapshotUnavailable


@dataclass
class FakeElement:
    title: str | None = None
    document_path: str | None = None
    url: str | None = None
    focused_child: "FakeElement | None" = None
    fail_reads: bool = False


class FakeSnapshotService:
    def __init__(self, windows=None, fail=False):
        self.windows = windows or []
        self.fail = fail
        self.calls = 0

    def snapshot(self):
        self.calls += 1
        if self.fail:
            raise SnapshotUnavailable("window server unavailable")
        return [dict(w) for w in self.windows]


class FakeAccessibilityService:
    """Elements per pid; a pid mapped to an exception raises it."""

    def __init__(self, windows_by_pid=None):
        self.windows_by_pid = windows_by_pid or {}
        self.queried_pids = []

    def windows_for_process(self, pid):
        self.queried_pids.append(pid)
        entry = self.windows_by_pid.get(pid, [])
        if isinstance(entry, Exception):
            raise entry
        return list(entry)

    def _attr(self, element, name):
        if element.fail_reads:
            raise AccessibilityUnavailable("attribute read failed", permission_denied=True)
        return getattr(element, name)

    def title(self, element):
        return self._attr(element, "title")

    def document_path(self, element):
        return self._attr(element, "document_path")

    def url(self, element):
        return self._attr(element, "url")

    def focused_child(self, element):
        return self._attr(element, "focused_child")


def cg_window(window_id, pid, app_name, title=None, layer=0):
    window = {
        "kCGWindowNumber": window_id,
        "kCGWindowOwnerPID": pid,
        "kCGWindowOwnerName": app_name,
        "kCGWindowLayer": layer,
    }
    if title is not None:
        window["kCGWindowName"] = title
    return window


@pytest.fixture
def make_window():
    return cg_window
