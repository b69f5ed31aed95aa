"""Platform collaborators consumed by the resolution engine.

Implementations live in ``editor_windows.macos``; tests supply fakes.
Accessibility elements are opaque handles, only ever passed back to the
service that produced them.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

AccessibilityElement = Any


class WindowSnapshotService(Protocol):
    def snapshot(self) -> Sequence[Mapping[str, Any]]:
        """All visible, non-desktop windows, keyed by Core Graphics names.

        Raises:
            SnapshotUnavailable: The window server returned nothing usable.
        """
        ...


class AccessibilityTreeService(Protocol):
    """Per-process accessibility queries.

    Every method may raise ``AccessibilityUnavailable`` (permission denied,
    process gone, attribute unsupported).
    """

    def windows_for_process(self, pid: int) -> Sequence[AccessibilityElement]: ...

    def title(self, element: AccessibilityElement) -> str | None: ...

    def document_path(self, element: AccessibilityElement) -> str | None: ...

    def url(self, element: AccessibilityElement) -> str | None: ...

    def focused_child(self, element: AccessibilityElement) -> AccessibilityElement | None: ...
