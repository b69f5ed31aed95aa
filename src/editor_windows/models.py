"""Records exchanged between the window server, the parser and the host."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping

from editor_windows.errors import Error, ErrorType, Result

# Core Graphics window dictionary keys
CG_WINDOW_OWNER_NAME = "kCGWindowOwnerName"
CG_WINDOW_OWNER_PID = "kCGWindowOwnerPID"
CG_WINDOW_NUMBER = "kCGWindowNumber"
CG_WINDOW_NAME = "kCGWindowName"
CG_WINDOW_LAYER = "kCGWindowLayer"


@dataclass(frozen=True)
class WindowRecord:
    """One window from a window-server snapshot."""

    window_id: int
    owner_process_id: int
    owner_app_name: str
    window_title: str | None = None
    layer: int = 0


@dataclass(frozen=True)
class ResolvedIdentity:
    """Project and active tab recovered for one window.

    A tab is never reported without a project.
    """

    project: str | None = None
    tab: str | None = None

    def __post_init__(self):
        if self.project is None and self.tab is not None:
            object.__setattr__(self, "tab", None)

    @property
    def is_resolved(self) -> bool:
        return self.project is not None


EMPTY_IDENTITY = ResolvedIdentity()


@dataclass(frozen=True)
class EditorWindow:
    """Per-window output of a resolution pass."""

    app_name: str
    window_name: str | None
    pid: int
    window_id: int
    project: str | None = None
    tab: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _malformed(message: str, raw: Mapping, missing: str) -> Result[WindowRecord]:
    return Result.err(Error(
        error_type=ErrorType.MALFORMED_RECORD,
        message=message,
        context={
            "missing_field": missing,
            "window_id": raw.get(CG_WINDOW_NUMBER),
            "owner_pid": raw.get(CG_WINDOW_OWNER_PID),
        }
    ))


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_window_record(raw: Mapping) -> Result[WindowRecord]:
    """
    Convert one raw window-server mapping into a WindowRecord.

    Args:
        raw: Mapping keyed by the Core Graphics window dictionary keys.

    Returns:
        Result[WindowRecord]: Ok with the record, or Err(MALFORMED_RECORD)
        when owner name, owner pid or window number is missing or unusable.
    """
    app_name = raw.get(CG_WINDOW_OWNER_NAME)
    if not app_name:
        return _malformed("Window record has no owner name", raw, CG_WINDOW_OWNER_NAME)

    pid = _as_int(raw.get(CG_WINDOW_OWNER_PID))
    if pid is None:
        return _malformed("Window record has no owner pid", raw, CG_WINDOW_OWNER_PID)

    window_id = _as_int(raw.get(CG_WINDOW_NUMBER))
    if window_id is None or window_id < 0:
        return _malformed("Window record has no window number", raw, CG_WINDOW_NUMBER)

    title = raw.get(CG_WINDOW_NAME)
    layer = _as_int(raw.get(CG_WINDOW_LAYER)) or 0

    return Result.ok(WindowRecord(
        window_id=window_id,
        owner_process_id=pid,
        owner_app_name=str(app_name),
        window_title=str(title) if title else None,
        layer=layer,
    ))
