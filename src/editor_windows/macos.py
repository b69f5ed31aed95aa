"""macOS window-server and accessibility services (pyobjc).

Requires the Accessibility permission for the calling process
(System Settings > Privacy & Security > Accessibility). Without it every
accessibility query fails with ``permission_denied`` and windows resolve
without a project.
"""

from __future__ import annotations

from typing import Any

import ApplicationServices
import Quartz
from loguru import logger

from editor_windows.errors import AccessibilityUnavailable, SnapshotUnavailable
from editor_windows.models import CG_WINDOW_LAYER

# Accessibility API attribute names
AX_WINDOWS = "AXWindows"
AX_TITLE = "AXTitle"
AX_DOCUMENT = "AXDocument"
AX_URL = "AXURL"
AX_FOCUSED_UI_ELEMENT = "AXFocusedUIElement"

# Errors that mean "this element has no such value"
_ABSENT_VALUE_ERRORS = frozenset({
    ApplicationServices.kAXErrorNoValue,
    ApplicationServices.kAXErrorAttributeUnsupported,
})

_PERMISSION_ERRORS = frozenset({
    ApplicationServices.kAXErrorAPIDisabled,
})


class MacWindowSnapshotService:
    """On-screen, non-desktop windows from CGWindowListCopyWindowInfo."""

    def __init__(self, normal_layer_only: bool = True):
        self.normal_layer_only = normal_layer_only

    def snapshot(self) -> list[dict[str, Any]]:
        options = (
            Quartz.kCGWindowListOptionOnScreenOnly
            | Quartz.kCGWindowListExcludeDesktopElements
        )
        window_list = Quartz.CGWindowListCopyWindowInfo(options, Quartz.kCGNullWindowID)
        if window_list is None:
            logger.error(
                "Window server returned no window list",
                operation="snapshot",
                status="failed"
            )
            raise SnapshotUnavailable("Core Graphics returned a null window list")

        windows = [dict(entry) for entry in window_list]
        if self.normal_layer_only:
            windows = [w for w in windows if int(w.get(CG_WINDOW_LAYER, 0) or 0) == 0]

        logger.debug(
            "Window server snapshot taken",
            operation="snapshot",
            status="success",
            metrics={"windows": len(windows), "total": len(window_list)}
        )
        return windows


class MacAccessibilityService:
    """AXUIElement attribute reads for one pass."""

    def __init__(self):
        if not ApplicationServices.AXIsProcessTrusted():
            logger.warning(
                "Process is not trusted for accessibility - projects will not resolve",
                operation="accessibility_init",
                status="permission_denied"
            )

    def _copy_attribute(self, element, attribute: str, pid: int | None = None):
        err, value = ApplicationServices.AXUIElementCopyAttributeValue(element, attribute, None)
        if err == ApplicationServices.kAXErrorSuccess:
            return value
        if err in _ABSENT_VALUE_ERRORS:
            return None
        raise AccessibilityUnavailable(
            f"AX error {err} reading {attribute}",
            pid=pid,
            permission_denied=err in _PERMISSION_ERRORS,
        )

    def windows_for_process(self, pid: int) -> list:
        app_ref = ApplicationServices.AXUIElementCreateApplication(pid)
        if app_ref is None:
            raise AccessibilityUnavailable("Could not create application element", pid=pid)
        windows = self._copy_attribute(app_ref, AX_WINDOWS, pid=pid)
        return list(windows) if windows else []

    def title(self, element) -> str | None:
        value = self._copy_attribute(element, AX_TITLE)
        return str(value) if value else None

    def document_path(self, element) -> str | None:
        value = self._copy_attribute(element, AX_DOCUMENT)
        return str(value) if value else None

    def url(self, element) -> str | None:
        value = self._copy_attribute(element, AX_URL)
        if not value:
            return None
        # NSURL
        if hasattr(value, "absoluteString"):
            return str(value.absoluteString())
        return str(value)

    def focused_child(self, element):
        return self._copy_attribute(element, AX_FOCUSED_UI_ELEMENT)
