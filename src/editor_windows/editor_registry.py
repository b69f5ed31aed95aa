"""Static knowledge of which applications are code editors.

The tables here are immutable module constants. ``EditorRegistry`` wraps
them for window filtering and install-path hints; the title grammar reads
the raw tables directly through the ``title_contains_*`` helpers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

# =============================================================================
# Editor Tables
# =============================================================================

EDITOR_APPLICATIONS: tuple[str, ...] = (
    "Visual Studio Code",
    "Code",
    "VSCode",
    "Zed",
    "Sublime Text",
    "Sublime Text 3",
    "Sublime Text 4",
    "Atom",
    "Vim",
    "MacVim",
    "Neovim",
    "Emacs",
    "GNU Emacs",
    "IntelliJ IDEA",
    "PyCharm",
    "WebStorm",
    "PhpStorm",
    "RubyMine",
    "CLion",
    "GoLand",
    "DataGrip",
    "Rider",
    "Android Studio",
    "Xcode",
    "TextEdit",
    "TextMate",
    "Brackets",
    "Nova",
    "CotEditor",
    "BBEdit",
    "Nano",
    "Cursor",
    "Fleet",
    "Helix",
)

# Typical macOS install locations, consumed by icon lookup
EDITOR_PATHS: Mapping[str, str] = MappingProxyType({
    "Visual Studio Code": "/Applications/Visual Studio Code.app",
    "Code": "/Applications/Visual Studio Code.app",
    "VSCode": "/Applications/Visual Studio Code.app",
    "Zed": "/Applications/Zed.app",
    "Sublime Text": "/Applications/Sublime Text.app",
    "Sublime Text 3": "/Applications/Sublime Text.app",
    "Sublime Text 4": "/Applications/Sublime Text.app",
    "Atom": "/Applications/Atom.app",
    "Cursor": "/Applications/Cursor.app",
    "Xcode": "/Applications/Xcode.app",
    "IntelliJ IDEA": "/Applications/IntelliJ IDEA.app",
    "PyCharm": "/Applications/PyCharm.app",
    "WebStorm": "/Applications/WebStorm.app",
})

# "file - project - App" title family
WORKSPACE_EDITOR_MARKERS: tuple[str, ...] = ("Visual Studio Code", "Cursor")

# "Project [path] - IDE" title family
IDE_FAMILY_MARKERS: tuple[str, ...] = (
    "IntelliJ",
    "PyCharm",
    "WebStorm",
    "PhpStorm",
    "RubyMine",
    "CLion",
    "GoLand",
    "DataGrip",
    "Rider",
)

# IDE that appends its own name to the project: "Project - file - Xcode"
NAMED_IDE_MARKER = "Xcode"

SUBLIME_MARKER = "Sublime Text"

BROWSER_MARKERS: tuple[str, ...] = ("Chrome", "Safari", "Firefox")


# =============================================================================
# Registry
# =============================================================================


@dataclass(frozen=True)
class EditorRegistry:
    """Immutable lookup of editor display names and install-path hints."""

    applications: tuple[str, ...] = EDITOR_APPLICATIONS
    paths: Mapping[str, str] = field(default_factory=lambda: EDITOR_PATHS)

    def is_editor(self, app_name: str) -> bool:
        """Case-insensitive exact or substring match against known editors.

        Substring matching accepts vendor variants such as
        "Visual Studio Code - Insiders" or "Code - OSS".
        """
        if not app_name:
            return False
        lowered = app_name.lower()
        return any(
            lowered == editor.lower() or editor.lower() in lowered
            for editor in self.applications
        )

    def editor_path_hint(self, app_name: str) -> str | None:
        """Best-guess install location, matched case-insensitively by name."""
        lowered = app_name.lower()
        for name, path in self.paths.items():
            if name.lower() == lowered:
                return path
        return None

    def extended(
        self,
        applications: list[str] | None = None,
        paths: dict[str, str] | None = None,
    ) -> "EditorRegistry":
        """Return a new registry with extra editors; self is left untouched."""
        merged_apps = self.applications + tuple(
            name for name in (applications or []) if name and name not in self.applications
        )
        merged_paths = MappingProxyType({**self.paths, **(paths or {})})
        return EditorRegistry(applications=merged_apps, paths=merged_paths)


DEFAULT_REGISTRY = EditorRegistry()


def is_editor(app_name: str) -> bool:
    return DEFAULT_REGISTRY.is_editor(app_name)


def editor_path_hint(app_name: str) -> str | None:
    return DEFAULT_REGISTRY.editor_path_hint(app_name)


def is_editor_name(text: str) -> bool:
    """True when text is exactly (ignoring case) a known editor name."""
    lowered = text.strip().lower()
    return any(lowered == editor.lower() for editor in EDITOR_APPLICATIONS)


# =============================================================================
# Title Helpers
# =============================================================================
# Titles carry display names verbatim, so these checks are case-sensitive.


def title_contains_editor(title: str) -> bool:
    return any(editor in title for editor in EDITOR_APPLICATIONS)


def title_contains_workspace_editor(title: str) -> bool:
    return any(marker in title for marker in WORKSPACE_EDITOR_MARKERS)


def title_contains_ide_family(title: str) -> bool:
    return any(marker in title for marker in IDE_FAMILY_MARKERS)


def title_contains_browser(title: str) -> bool:
    return any(marker in title for marker in BROWSER_MARKERS)
