"""Identify editor windows on the desktop and recover their project and tab."""

from editor_windows.editor_registry import DEFAULT_REGISTRY, EditorRegistry, editor_path_hint, is_editor
from editor_windows.errors import AccessibilityUnavailable, EditorWindowsError, SnapshotUnavailable
from editor_windows.models import EditorWindow, ResolvedIdentity, WindowRecord
from editor_windows.resolver import resolve_windows
from editor_windows.title_parser import parse_title

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_REGISTRY",
    "AccessibilityUnavailable",
    "EditorRegistry",
    "EditorWindow",
    "EditorWindowsError",
    "ResolvedIdentity",
    "SnapshotUnavailable",
    "WindowRecord",
    "editor_path_hint",
    "is_editor",
    "parse_title",
    "resolve_windows",
]
