"""Project names derived from filesystem paths."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote

FILE_URL_PREFIX = "file://"

# Conventional source roots: the directory above one is the project
SOURCE_ROOT_NAMES = frozenset({"src", "lib", "app"})

# Files or directories that mark a project root, several ecosystems
PROJECT_MARKERS: tuple[str, ...] = (
    "Cargo.toml",
    "package.json",
    ".git",
    "Gemfile",
    "requirements.txt",
    "pom.xml",
    "build.gradle",
    "composer.json",
    "go.mod",
    "Pipfile",
    "pyproject.toml",
)

# Directories that never name a project
NON_PROJECT_DIRS = frozenset({
    "src", "lib", "bin",
    "target", "build", "dist", "out",
    "node_modules", "vendor", "__pycache__",
})


def strip_file_url(path: str) -> str:
    """Remove a file:// scheme and percent-encoding; other input is returned as-is."""
    if path.startswith(FILE_URL_PREFIX):
        return unquote(path[len(FILE_URL_PREFIX):])
    return path


def _is_name_like(segment: str) -> bool:
    return len(segment) > 1 and not segment.isdigit()


def from_file_path_heuristic(path: str) -> str | None:
    """
    Guess a project name from the shape of a path alone.

    The segment preceding a ``src``, ``lib`` or ``app`` directory wins;
    otherwise the last segment that is not numeric and not dot-prefixed.

    Args:
        path: Slash-separated path, possibly embedded in a title.

    Returns:
        Project name, or None when no segment qualifies.
    """
    segments = path.split("/")

    for i, segment in enumerate(segments):
        if segment in SOURCE_ROOT_NAMES and i > 0:
            candidate = segments[i - 1]
            if candidate and len(candidate) > 1:
                return candidate

    for segment in reversed(segments):
        if segment and not segment.startswith(".") and _is_name_like(segment):
            return segment

    return None


def find_project_root(path: Path) -> Path | None:
    """Nearest ancestor directory holding a project marker (existence checks only)."""
    for ancestor in path.parents:
        if not ancestor.name:
            continue
        if any((ancestor / marker).exists() for marker in PROJECT_MARKERS):
            return ancestor
    return None


def from_project_root_markers(file_path: str) -> str | None:
    """
    Derive a project name from a document path.

    Walks ancestors of the path looking for a project marker. Without one,
    scans the segments from the end, skipping build/dependency/dot
    directories; a skipped ``src`` or ``lib`` defers to the segment
    before it.

    Args:
        file_path: Absolute path or file:// URL of an open document.

    Returns:
        Project name, or None.
    """
    clean_path = strip_file_url(file_path)
    if not clean_path:
        return None

    root = find_project_root(Path(clean_path))
    if root is not None:
        return root.name

    components = [c for c in clean_path.split("/") if c]
    for i in range(len(components) - 1, -1, -1):
        component = components[i]
        if component in NON_PROJECT_DIRS or component.startswith("."):
            if component in ("src", "lib") and i > 0:
                parent = components[i - 1]
                if (parent not in NON_PROJECT_DIRS
                        and not parent.startswith(".")
                        and _is_name_like(parent)):
                    return parent
            continue
        if _is_name_like(component):
            return component

    return None
