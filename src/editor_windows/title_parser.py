"""Turn a free-form editor window title into a (project, tab) identity."""

from __future__ import annotations

from loguru import logger

from editor_windows.disambiguator import determine_project_and_tab
from editor_windows.editor_registry import is_editor_name
from editor_windows.models import EMPTY_IDENTITY, ResolvedIdentity
from editor_windows.title_grammar import (
    DASH_CHARACTERS,
    MIN_FRAGMENT_LENGTH,
    PAIR_RECOGNIZERS,
    PROJECT_RECOGNIZERS,
    FragmentPair,
    Provenance,
    is_decorative,
)


def is_meaningful(text: str | None) -> bool:
    """
    Check a project name from the project-only cascade.

    Rejects short text, text made only of punctuation/dashes, text with an
    embedded em or en dash, text with surrounding whitespace and known
    editor names.
    """
    if not text or len(text) < MIN_FRAGMENT_LENGTH:
        return False
    if is_decorative(text):
        return False
    if any(dash in text for dash in DASH_CHARACTERS - {"-"}):
        return False
    if text != text.strip():
        return False
    return not is_editor_name(text)


def is_reportable(text: str | None) -> bool:
    """Check a project or tab taken from a recognized pair.

    Looser than is_meaningful: pair sides may carry dashes, e.g.
    "foo – bar — main.rs" or the tab "server – logs".
    """
    return bool(text) and not is_decorative(text) and not is_editor_name(text)


def _label_pair(pair: FragmentPair) -> tuple[str, str]:
    first, second = pair
    if first.provenance is Provenance.DASH_TRIPLE:
        # Fixed positions: "tab - project - App"
        return second.text, first.text
    return determine_project_and_tab(first.text, second.text)


def extract_project_from_title(title: str) -> str | None:
    """
    Project name from a title, without tab information.

    Recognizers are tried in priority order; the first one producing a
    meaningful name wins.

    Args:
        title: Raw window title.

    Returns:
        Project name, or None when no recognizer produced a usable name.
    """
    if not title:
        return None
    for recognizer in PROJECT_RECOGNIZERS:
        fragment = recognizer(title)
        if fragment is not None and is_meaningful(fragment.text):
            logger.trace(
                "Project recognized",
                operation="extract_project_from_title",
                provenance=fragment.provenance.value,
                project=fragment.text
            )
            return fragment.text
    return None


def parse_title(title: str | None) -> ResolvedIdentity:
    """
    Parse a window title into project and active tab.

    Paired conventions are attempted first; when none yields a usable
    pair, the project-only cascade runs and the tab is left empty.
    Total over all strings: never raises.

    Args:
        title: Raw window title (None and blank titles are accepted).

    Returns:
        ResolvedIdentity, EMPTY_IDENTITY when nothing was recognized.
    """
    if not title or not title.strip():
        return EMPTY_IDENTITY

    for recognizer in PAIR_RECOGNIZERS:
        pair = recognizer(title)
        if pair is None:
            continue
        project, tab = _label_pair(pair)
        if is_reportable(project):
            return ResolvedIdentity(project=project, tab=tab if is_reportable(tab) else None)

    project = extract_project_from_title(title)
    if project is not None:
        return ResolvedIdentity(project=project)

    return EMPTY_IDENTITY
