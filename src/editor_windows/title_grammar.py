"""Window-title recognizers, one per editor title convention.

Every recognizer is a pure function of the title string. Pair recognizers
return two unlabeled fragments (left to right) for the disambiguator or the
caller to label; project recognizers return the single fragment they take
to be the project name. A recognizer that does not apply returns None.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from editor_windows.editor_registry import (
    NAMED_IDE_MARKER,
    SUBLIME_MARKER,
    title_contains_browser,
    title_contains_editor,
    title_contains_ide_family,
    title_contains_workspace_editor,
)
from editor_windows.path_project import from_file_path_heuristic

EM_DASH_SEPARATOR = " — "
REGULAR_DASH_SEPARATOR = " - "

DASH_CHARACTERS = frozenset("—–-")
DECORATIVE_CHARACTERS = frozenset(string.punctuation) | DASH_CHARACTERS

MIN_FRAGMENT_LENGTH = 2


class Provenance(Enum):
    EM_DASH_PAIR = "em_dash_pair"
    EM_DASH_SIDE = "em_dash_side"
    DASH_TRIPLE = "dash_triple"
    NAMED_IDE = "named_ide"
    DASH_PAIR = "dash_pair"
    BARE_NAME = "bare_name"
    BRACKETED_IDE = "bracketed_ide"
    SUBLIME_PATH = "sublime_path"
    PATH = "path"


@dataclass(frozen=True)
class TitleFragment:
    """Trimmed piece of a title and the split that produced it."""

    text: str
    provenance: Provenance


FragmentPair = tuple[TitleFragment, TitleFragment]
PairRecognizer = Callable[[str], FragmentPair | None]
ProjectRecognizer = Callable[[str], TitleFragment | None]


def is_decorative(text: str) -> bool:
    """True for empty text or text made only of punctuation and dashes."""
    return all(c in DECORATIVE_CHARACTERS for c in text)


def _is_meaningful_side(text: str) -> bool:
    return len(text) >= MIN_FRAGMENT_LENGTH and not is_decorative(text)


# =============================================================================
# Pair Recognizers
# =============================================================================


def recognize_em_dash_pair(title: str) -> FragmentPair | None:
    """``left — right`` with exactly two meaningful sides (Zed, Cursor tabs)."""
    parts = title.split(EM_DASH_SEPARATOR)
    if len(parts) != 2:
        return None
    first, second = parts[0].strip(), parts[1].strip()
    if not (_is_meaningful_side(first) and _is_meaningful_side(second)):
        return None
    return (
        TitleFragment(first, Provenance.EM_DASH_PAIR),
        TitleFragment(second, Provenance.EM_DASH_PAIR),
    )


def recognize_dash_triple(title: str) -> FragmentPair | None:
    """``file - project - Visual Studio Code``; returns (tab, project) in title order."""
    if not title_contains_workspace_editor(title):
        return None
    parts = title.split(REGULAR_DASH_SEPARATOR)
    if len(parts) < 3:
        return None
    tab, project = parts[0].strip(), parts[1].strip()
    if not tab or not project or "/" in project:
        return None
    return (
        TitleFragment(tab, Provenance.DASH_TRIPLE),
        TitleFragment(project, Provenance.DASH_TRIPLE),
    )


# =============================================================================
# Project Recognizers
# =============================================================================


def recognize_em_dash_side(title: str) -> TitleFragment | None:
    """One usable side of ``left — right`` when the pair itself was rejected."""
    parts = title.split(EM_DASH_SEPARATOR)
    if len(parts) != 2:
        return None
    first, second = parts[0].strip(), parts[1].strip()

    # "Project — file.ext"
    if "." in second and first and "/" not in first:
        return TitleFragment(first, Provenance.EM_DASH_SIDE)

    # "command — Project"
    if second and "/" not in second and "." not in second:
        return TitleFragment(second, Provenance.EM_DASH_SIDE)

    return None


def recognize_dash_triple_project(title: str) -> TitleFragment | None:
    pair = recognize_dash_triple(title)
    return pair[1] if pair else None


def recognize_named_ide(title: str) -> TitleFragment | None:
    """``Project - file.swift - Xcode``: everything before the first dash."""
    if NAMED_IDE_MARKER not in title:
        return None
    head = title.split(REGULAR_DASH_SEPARATOR, 1)[0].strip()
    if not head or NAMED_IDE_MARKER in head or "/" in head:
        return None
    return TitleFragment(head, Provenance.NAMED_IDE)


def recognize_dash_pair(title: str) -> TitleFragment | None:
    """``Project - file.ext`` for titles that name no known editor."""
    if REGULAR_DASH_SEPARATOR not in title or title_contains_editor(title):
        return None
    parts = title.split(REGULAR_DASH_SEPARATOR)
    if len(parts) != 2:
        return None
    project, file_part = parts[0].strip(), parts[1].strip()
    if "." in file_part and "/" not in project:
        return TitleFragment(project, Provenance.DASH_PAIR)
    return None


def recognize_bare_name(title: str) -> TitleFragment | None:
    """A title that is just the workspace name (Zed, Xcode)."""
    if (REGULAR_DASH_SEPARATOR in title
            or "/" in title
            or "." in title
            or title_contains_editor(title)
            or title_contains_browser(title)):
        return None
    cleaned = title.strip()
    if len(cleaned) > 1:
        return TitleFragment(cleaned, Provenance.BARE_NAME)
    return None


def recognize_bracketed_ide(title: str) -> TitleFragment | None:
    """``Project [~/path] - IntelliJ IDEA`` and the rest of the family."""
    if not title_contains_ide_family(title):
        return None
    bracket_pos = title.find("[")
    if bracket_pos < 0:
        return None
    head = title[:bracket_pos].strip()
    return TitleFragment(head, Provenance.BRACKETED_IDE) if head else None


def recognize_sublime_path(title: str) -> TitleFragment | None:
    """``/path/to/file.py - Sublime Text``."""
    if SUBLIME_MARKER not in title:
        return None
    parts = title.split(REGULAR_DASH_SEPARATOR)
    if len(parts) < 2:
        return None
    file_part = parts[0].strip()
    if "/" not in file_part:
        return None
    project = from_file_path_heuristic(file_part)
    return TitleFragment(project, Provenance.SUBLIME_PATH) if project else None


def recognize_path(title: str) -> TitleFragment | None:
    if "/" not in title:
        return None
    project = from_file_path_heuristic(title)
    return TitleFragment(project, Provenance.PATH) if project else None


# Priority order matters: paired extraction first, then project-only
PAIR_RECOGNIZERS: tuple[PairRecognizer, ...] = (
    recognize_em_dash_pair,
    recognize_dash_triple,
)

PROJECT_RECOGNIZERS: tuple[ProjectRecognizer, ...] = (
    recognize_em_dash_side,
    recognize_dash_triple_project,
    recognize_named_ide,
    recognize_dash_pair,
    recognize_bare_name,
    recognize_bracketed_ide,
    recognize_sublime_path,
    recognize_path,
)
