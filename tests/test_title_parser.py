"""End-to-end title parsing: recognizers, disambiguation and validation."""

import pytest

from editor_windows.editor_registry import EDITOR_APPLICATIONS
from editor_windows.models import EMPTY_IDENTITY, ResolvedIdentity
from editor_windows.title_grammar import DECORATIVE_CHARACTERS
from editor_windows.title_parser import (
    extract_project_from_title,
    is_meaningful,
    is_reportable,
    parse_title,
)


def identity(project, tab=None):
    return ResolvedIdentity(project=project, tab=tab)


class TestParseTitle:
    @pytest.mark.parametrize("title, expected", [
        ("main.rs - swii - Visual Studio Code", identity("swii", "main.rs")),
        ("index.ts - webapp - Cursor", identity("webapp", "index.ts")),
        ("switch — ARCHITECTURE.md", identity("switch", "ARCHITECTURE.md")),
        ("commands.rs — switch", identity("switch", "commands.rs")),
        ("bun run tauri dev — swii", identity("swii", "bun run tauri dev")),
        ("promptbook — eslint.config.mjs", identity("promptbook", "eslint.config.mjs")),
        ("npm start — my-project", identity("my-project", "npm start")),
        ("eslint.config.mjs — promptbook", identity("promptbook", "eslint.config.mjs")),
        ("foo – bar — main.rs", identity("foo – bar", "main.rs")),
        ("swii — server – logs", identity("swii", "server – logs")),
    ])
    def test_paired_titles(self, title, expected):
        assert parse_title(title) == expected

    @pytest.mark.parametrize("title, project", [
        ("MyiOSApp", "MyiOSApp"),
        ("MyApp - ContentView.swift - Xcode", "MyApp"),
        ("SwiftUIDemo - ContentView.swift", "SwiftUIDemo"),
        ("MyProject [~/code/MyProject] - IntelliJ IDEA", "MyProject"),
        ("pycharm-project [~/Projects/pycharm-project] - PyCharm", "pycharm-project"),
        ("/Users/me/code/my-project/src/main.py - Sublime Text", "my-project"),
        ("/Users/dev/my-project/src/main.rs", "my-project"),
        ("x — project", "project"),
        (" — project", "project"),
    ])
    def test_project_only_titles(self, title, project):
        assert parse_title(title) == identity(project)

    @pytest.mark.parametrize("title", [
        None,
        "",
        "   ",
        "—",
        "–",
        "-",
        " — ",
        "something — ",
        "file—project",
        "Visual Studio Code",
        "Untitled - Visual Studio Code",
        "Zed — notes.md",
        "Google Chrome",
        "x",
    ])
    def test_unresolved_titles(self, title):
        assert parse_title(title) == EMPTY_IDENTITY

    def test_decorative_tab_is_dropped(self):
        assert parse_title("— - swii - Cursor") == identity("swii")

    def test_deterministic(self):
        title = "main.rs - swii - Visual Studio Code"
        assert parse_title(title) == parse_title(title)

    @pytest.mark.parametrize("title", [
        "main.rs - swii - Visual Studio Code",
        "switch — ARCHITECTURE.md",
        "MyiOSApp",
        "Zed — notes.md",
        "— - Cursor - Visual Studio Code",
        "-- - -- - Cursor",
        "Cursor",
        "a — b",
        "[] - GoLand",
        "/// - Sublime Text",
        "/",
        "./.git/1/2",
    ])
    def test_output_invariant(self, title):
        result = parse_title(title)
        lowered_editors = {name.lower() for name in EDITOR_APPLICATIONS}
        for value in (result.project, result.tab):
            if value is None:
                continue
            assert value
            assert not all(c in DECORATIVE_CHARACTERS for c in value)
            assert value.lower() not in lowered_editors
        if result.project is None:
            assert result.tab is None


class TestExtractProjectFromTitle:
    def test_project_only(self):
        assert extract_project_from_title("main.rs - swii - Visual Studio Code") == "swii"
        assert extract_project_from_title("MyiOSApp") == "MyiOSApp"

    def test_empty(self):
        assert extract_project_from_title("") is None
        assert extract_project_from_title("Visual Studio Code") is None


class TestIsMeaningful:
    @pytest.mark.parametrize("text", ["swii", "my-project", "main.rs", "ab"])
    def test_meaningful(self, text):
        assert is_meaningful(text)

    @pytest.mark.parametrize("text", [
        None, "", "a", "--", "—", "a — b", "a–b", " padded", "Zed", "visual studio code",
    ])
    def test_not_meaningful(self, text):
        assert not is_meaningful(text)


class TestIsReportable:
    @pytest.mark.parametrize("text", ["swii", "foo – bar", "server – logs", "a"])
    def test_reportable(self, text):
        assert is_reportable(text)

    @pytest.mark.parametrize("text", [None, "", "—", "-–", "Cursor", "visual studio code"])
    def test_not_reportable(self, text):
        assert not is_reportable(text)
