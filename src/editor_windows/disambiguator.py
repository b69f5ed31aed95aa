"""Decide which of two title fragments is the project and which is the tab.

Rules are applied in a fixed order; the first rule that tells the two
fragments apart wins:

1. extension: the fragment with a file extension is the tab
2. command: the command-like fragment is the tab
3. length: a fragment at least 5 characters shorter than the other,
   with no path separator or space, is the project
4. default: left fragment is the project
"""

from __future__ import annotations

# Substrings typical of terminal/build tabs
COMMAND_PATTERNS: tuple[str, ...] = (
    " run ", " dev", " build", " test", " start",
    "npm ", "yarn ", "bun ", "cargo ", "pnpm ",
)

MIN_EXTENSION_LENGTH = 2
MAX_EXTENSION_LENGTH = 4

# Phrases with a space and more characters than this are taken as commands
COMMAND_PHRASE_LENGTH = 10

HEURISTIC_LENGTH_THRESHOLD = 5


def has_file_extension(text: str) -> bool:
    """True when the text after the final dot is 2-4 alphanumerics."""
    dot_pos = text.rfind(".")
    if dot_pos < 0:
        return False
    extension = text[dot_pos + 1:]
    return (
        MIN_EXTENSION_LENGTH <= len(extension) <= MAX_EXTENSION_LENGTH
        and extension.isalnum()
    )


def is_command_like(text: str) -> bool:
    """True for build/run invocations and longer phrases with spaces."""
    if any(pattern in text for pattern in COMMAND_PATTERNS):
        return True
    return " " in text and len(text) > COMMAND_PHRASE_LENGTH


def _is_simple_name(text: str) -> bool:
    return "/" not in text and " " not in text


def determine_project_and_tab(first: str, second: str) -> tuple[str, str]:
    """
    Label two unordered fragments as (project, tab).

    Args:
        first: Left fragment of the split title (trimmed, non-empty).
        second: Right fragment of the split title (trimmed, non-empty).

    Returns:
        Tuple of (project, tab).
    """
    first_ext = has_file_extension(first)
    second_ext = has_file_extension(second)
    if first_ext != second_ext:
        return (second, first) if first_ext else (first, second)

    first_cmd = is_command_like(first)
    second_cmd = is_command_like(second)
    if first_cmd != second_cmd:
        return (second, first) if first_cmd else (first, second)

    if len(first) + HEURISTIC_LENGTH_THRESHOLD <= len(second) and _is_simple_name(first):
        return first, second
    if len(second) + HEURISTIC_LENGTH_THRESHOLD <= len(first) and _is_simple_name(second):
        return second, first

    return first, second
