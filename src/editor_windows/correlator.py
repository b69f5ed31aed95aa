"""Pair window-server records with accessibility windows of the same process.

The two services share no window identifier. Records and accessibility
elements of one process are matched by position: the i-th element belongs
to the i-th record in snapshot order. Both services usually report a
process's windows in the same (z/creation) order, but neither guarantees
it. This module is the only place that relies on that assumption.
"""

from __future__ import annotations

from typing import Callable, Sequence

from loguru import logger

from editor_windows.errors import AccessibilityUnavailable, Error, ErrorReport, ErrorType
from editor_windows.models import EMPTY_IDENTITY, ResolvedIdentity, WindowRecord
from editor_windows.path_project import from_project_root_markers
from editor_windows.services import AccessibilityElement, AccessibilityTreeService
from editor_windows.title_parser import parse_title


def _read(reader: Callable[[AccessibilityElement], object], element: AccessibilityElement,
          attribute: str) -> object | None:
    """Read one attribute; a failed read counts as an absent attribute."""
    try:
        return reader(element)
    except AccessibilityUnavailable as e:
        logger.debug(
            "Accessibility attribute unavailable",
            operation="read_attribute",
            attribute=attribute,
            permission_denied=e.permission_denied,
            error=str(e)
        )
        return None


def _project_from_location(location: object | None) -> str | None:
    if not location:
        return None
    return from_project_root_markers(str(location))


def _project_from_element_location(ax: AccessibilityTreeService,
                                   element: AccessibilityElement) -> str | None:
    """Project from the element's document path, then its URL."""
    return (
        _project_from_location(_read(ax.document_path, element, "document_path"))
        or _project_from_location(_read(ax.url, element, "url"))
    )


def identity_for_element(ax: AccessibilityTreeService,
                         element: AccessibilityElement) -> ResolvedIdentity:
    """
    Resolve one accessibility window.

    Sources in fixed priority: the title (project and tab), the document
    path, the URL, then the focused child's document path, URL, and title
    when it looks like a path. Only the title can yield a tab.

    Args:
        ax: Accessibility service that produced the element.
        element: Accessibility window element.

    Returns:
        ResolvedIdentity, EMPTY_IDENTITY when no source resolved.
    """
    title = _read(ax.title, element, "title")
    if title:
        identity = parse_title(str(title))
        if identity.is_resolved:
            return identity

    project = _project_from_element_location(ax, element)
    if project:
        return ResolvedIdentity(project=project)

    child = _read(ax.focused_child, element, "focused_child")
    if child is not None:
        project = _project_from_element_location(ax, child)
        if project:
            return ResolvedIdentity(project=project)

        child_title = _read(ax.title, child, "title")
        if child_title and "/" in str(child_title):
            project = from_project_root_markers(str(child_title))
            if project:
                return ResolvedIdentity(project=project)

    return EMPTY_IDENTITY


class AccessibilityWindowCache:
    """Accessibility window lists fetched at most once per process in a pass.

    A failed lookup is cached as None so the process is not queried again.
    Failures are recorded as warnings in ``report`` when one is given.
    """

    def __init__(self, ax: AccessibilityTreeService, report: ErrorReport | None = None):
        self._ax = ax
        self._report = report
        self._windows: dict[int, list[AccessibilityElement] | None] = {}

    def windows_for(self, pid: int) -> list[AccessibilityElement] | None:
        if pid not in self._windows:
            self._windows[pid] = self._fetch(pid)
        return self._windows[pid]

    def _fetch(self, pid: int) -> list[AccessibilityElement] | None:
        try:
            return list(self._ax.windows_for_process(pid))
        except AccessibilityUnavailable as e:
            if self._report is None:
                logger.warning(
                    "Accessibility windows unavailable for process",
                    operation="windows_for_process",
                    status="degraded",
                    pid=pid,
                    permission_denied=e.permission_denied,
                    error=str(e)
                )
            else:
                self._report.add_warning(Error(
                    error_type=(ErrorType.PERMISSION_ERROR if e.permission_denied
                                else ErrorType.ACCESSIBILITY_UNAVAILABLE),
                    message="Accessibility windows unavailable for process",
                    context={"pid": pid, "error": str(e)},
                    original_exception=e
                ))
            return None


def correlate_process(
    pid: int,
    records: Sequence[WindowRecord],
    ax: AccessibilityTreeService,
    cache: AccessibilityWindowCache | None = None,
) -> dict[int, ResolvedIdentity]:
    """
    Map the window ids of one process to resolved identities.

    Args:
        pid: Owning process id.
        records: That process's window-server records, in snapshot order.
        ax: Accessibility service.
        cache: Per-pass window-list cache; a private one is used if omitted.

    Returns:
        Dict of window_id -> ResolvedIdentity covering every record. Records
        without a positional counterpart get EMPTY_IDENTITY.
    """
    cache = cache or AccessibilityWindowCache(ax)
    records = [record for record in records if record.owner_process_id == pid]
    mapping = {record.window_id: EMPTY_IDENTITY for record in records}

    elements = cache.windows_for(pid)
    if not elements:
        return mapping

    identities = [identity_for_element(ax, element) for element in elements]
    for record, identity in zip(records, identities):
        mapping[record.window_id] = identity

    if len(identities) != len(records):
        logger.debug(
            "Window count mismatch between window server and accessibility",
            operation="correlate_process",
            pid=pid,
            metrics={"window_server": len(records), "accessibility": len(identities)}
        )

    return mapping
