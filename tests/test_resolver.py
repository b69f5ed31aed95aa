"""Tests for a full resolution pass against fake services."""

import pytest
from conftest import FakeAccessibilityService, FakeElement, FakeSnapshotService, cg_window

from editor_windows.editor_registry import DEFAULT_REGISTRY
from editor_windows.errors import AccessibilityUnavailable, ErrorReport, ErrorType, SnapshotUnavailable
from editor_windows.logging_config import trace_id_var
from editor_windows.models import EditorWindow
from editor_windows.resolver import collect_editor_records, resolve_windows

CODE_PID = 100
ZED_PID = 200
SAFARI_PID = 300


@pytest.fixture
def snapshot():
    return FakeSnapshotService([
        cg_window(11, CODE_PID, "Visual Studio Code", "main.rs - swii - Visual Studio Code"),
        cg_window(31, SAFARI_PID, "Safari", "Apple"),
        cg_window(21, ZED_PID, "Zed", "switch — ARCHITECTURE.md"),
        cg_window(12, CODE_PID, "Visual Studio Code"),
    ])


@pytest.fixture
def ax():
    return FakeAccessibilityService({
        CODE_PID: [
            FakeElement(title="main.rs - swii - Visual Studio Code"),
            FakeElement(title="README.md - docs - Visual Studio Code"),
        ],
        ZED_PID: [FakeElement(title="switch — ARCHITECTURE.md")],
        SAFARI_PID: [FakeElement(title="Apple")],
    })


class TestResolveWindows:
    def test_resolves_editor_windows_in_snapshot_order(self, snapshot, ax):
        windows = resolve_windows(snapshot, ax)

        assert windows == [
            EditorWindow("Visual Studio Code", "main.rs - swii - Visual Studio Code",
                         CODE_PID, 11, "swii", "main.rs"),
            EditorWindow("Zed", "switch — ARCHITECTURE.md", ZED_PID, 21,
                         "switch", "ARCHITECTURE.md"),
            EditorWindow("Visual Studio Code", None, CODE_PID, 12, "docs", "README.md"),
        ]

    def test_non_editors_never_queried(self, snapshot, ax):
        resolve_windows(snapshot, ax)
        assert SAFARI_PID not in ax.queried_pids

    def test_each_process_queried_once_in_order(self, snapshot, ax):
        resolve_windows(snapshot, ax)
        assert ax.queried_pids == [CODE_PID, ZED_PID]

    def test_idempotent(self, snapshot, ax):
        assert resolve_windows(snapshot, ax) == resolve_windows(snapshot, ax)
        assert snapshot.calls == 2

    def test_no_state_between_passes(self, snapshot, ax):
        resolve_windows(snapshot, ax)
        ax.windows_by_pid[ZED_PID] = [FakeElement(title="other — notes.md")]

        windows = resolve_windows(snapshot, ax)
        assert windows[1].project == "other"

    def test_accessibility_failure_degrades_one_process(self, snapshot, ax):
        ax.windows_by_pid[CODE_PID] = AccessibilityUnavailable(
            "denied", pid=CODE_PID, permission_denied=True
        )
        windows = resolve_windows(snapshot, ax)

        assert [(w.window_id, w.project, w.tab) for w in windows] == [
            (11, None, None),
            (21, "switch", "ARCHITECTURE.md"),
            (12, None, None),
        ]

    def test_snapshot_failure_propagates(self, ax):
        with pytest.raises(SnapshotUnavailable):
            resolve_windows(FakeSnapshotService(fail=True), ax)

    def test_trace_id_reset_after_pass(self, snapshot, ax):
        resolve_windows(snapshot, ax)
        assert trace_id_var.get() is None

    def test_malformed_records_skipped(self, ax):
        snapshot = FakeSnapshotService([
            {"kCGWindowOwnerName": "Zed", "kCGWindowNumber": 5},
            {"kCGWindowOwnerPID": ZED_PID, "kCGWindowNumber": 6},
            cg_window(21, ZED_PID, "Zed", "switch — ARCHITECTURE.md"),
        ])
        windows = resolve_windows(snapshot, ax)
        assert [w.window_id for w in windows] == [21]

    def test_custom_registry(self, ax):
        snapshot = FakeSnapshotService([cg_window(41, 400, "Lapce", "lapce-proj")])
        ax.windows_by_pid[400] = [FakeElement(title="lapce-proj")]

        assert resolve_windows(snapshot, ax) == []

        registry = DEFAULT_REGISTRY.extended(applications=["Lapce"])
        windows = resolve_windows(snapshot, ax, registry=registry)
        assert [(w.app_name, w.project) for w in windows] == [("Lapce", "lapce-proj")]

    def test_empty_desktop(self, ax):
        assert resolve_windows(FakeSnapshotService([]), ax) == []


class TestCollectEditorRecords:
    def test_malformed_become_warnings(self):
        report = ErrorReport()
        records = collect_editor_records(
            [
                {"kCGWindowOwnerName": "Zed", "kCGWindowOwnerPID": 1},
                cg_window(2, 1, "Zed"),
                cg_window(3, 9, "Finder"),
            ],
            DEFAULT_REGISTRY,
            report,
        )

        assert [r.window_id for r in records] == [2]
        assert not report.has_errors()
        assert [w.error_type for w in report.warnings] == [ErrorType.MALFORMED_RECORD]
        assert report.warnings[0].context["missing_field"] == "kCGWindowNumber"
