"""One resolution pass: snapshot, correlate, parse, merge."""

from __future__ import annotations

import time
from uuid import uuid4

from loguru import logger

from editor_windows.correlator import AccessibilityWindowCache, correlate_process
from editor_windows.editor_registry import DEFAULT_REGISTRY, EditorRegistry
from editor_windows.errors import Error, ErrorReport, ErrorType, SnapshotUnavailable
from editor_windows.logging_config import trace_id_var
from editor_windows.models import (
    EMPTY_IDENTITY,
    EditorWindow,
    ResolvedIdentity,
    WindowRecord,
    parse_window_record,
)
from editor_windows.services import AccessibilityTreeService, WindowSnapshotService


def collect_editor_records(raw_windows, registry: EditorRegistry,
                           report: ErrorReport) -> list[WindowRecord]:
    """Parse raw snapshot entries, keeping editor windows in snapshot order.

    Malformed entries are recorded as warnings and skipped.
    """
    records: list[WindowRecord] = []
    for raw in raw_windows:
        result = parse_window_record(raw)
        if not report.collect_result(result, as_warning=True):
            continue
        if registry.is_editor(result.value.owner_app_name):
            records.append(result.value)
    return records


def resolve_windows(
    snapshot_service: WindowSnapshotService,
    ax_service: AccessibilityTreeService,
    registry: EditorRegistry = DEFAULT_REGISTRY,
) -> list[EditorWindow]:
    """
    Resolve project and tab for every editor window on the desktop.

    Takes one window-server snapshot, queries accessibility once per editor
    process (in order of first appearance) and merges the identities back
    onto the snapshot by window id. Nothing is kept between calls.

    Args:
        snapshot_service: Window-server snapshot provider.
        ax_service: Accessibility tree provider.
        registry: Which applications count as editors.

    Returns:
        Editor windows in snapshot order. Windows whose identity could not
        be resolved are listed with project and tab set to None.

    Raises:
        SnapshotUnavailable: The snapshot could not be taken.
    """
    op_trace_id = str(uuid4())
    token = trace_id_var.set(op_trace_id)
    start_time = time.perf_counter()
    report = ErrorReport()

    try:
        logger.debug(
            "Starting resolution pass",
            operation="resolve_windows",
            status="started",
            trace_id=op_trace_id
        )

        try:
            raw_windows = snapshot_service.snapshot()
        except SnapshotUnavailable as e:
            report.add_error(Error(
                error_type=ErrorType.SNAPSHOT_UNAVAILABLE,
                message="Window server snapshot unavailable",
                context={"error": str(e)},
                original_exception=e
            ))
            raise

        records = collect_editor_records(raw_windows, registry, report)

        records_by_pid: dict[int, list[WindowRecord]] = {}
        for record in records:
            records_by_pid.setdefault(record.owner_process_id, []).append(record)

        cache = AccessibilityWindowCache(ax_service, report)
        identities: dict[int, ResolvedIdentity] = {}
        for pid, pid_records in records_by_pid.items():
            identities.update(correlate_process(pid, pid_records, ax_service, cache))

        windows = []
        for record in records:
            identity = identities.get(record.window_id, EMPTY_IDENTITY)
            windows.append(EditorWindow(
                app_name=record.owner_app_name,
                window_name=record.window_title,
                pid=record.owner_process_id,
                window_id=record.window_id,
                project=identity.project,
                tab=identity.tab,
            ))

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(
            "Resolution pass complete",
            operation="resolve_windows",
            status="success",
            trace_id=op_trace_id,
            metrics={
                "snapshot_windows": len(raw_windows),
                "editor_windows": len(windows),
                "editor_processes": len(records_by_pid),
                "resolved": sum(1 for w in windows if w.project is not None),
                "duration_ms": duration_ms
            }
        )
        report.log_summary(op_trace_id)
        return windows
    finally:
        trace_id_var.reset(token)
