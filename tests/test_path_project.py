"""Tests for project names derived from paths."""

import pytest

from editor_windows.path_project import (
    find_project_root,
    from_file_path_heuristic,
    from_project_root_markers,
    strip_file_url,
)


class TestFromFilePathHeuristic:
    @pytest.mark.parametrize("path, expected", [
        ("/Users/dev/my-project/src/main.rs", "my-project"),
        ("/Users/dev/webapp/lib/index.js", "webapp"),
        ("/Users/dev/rails-site/app/models/user.rb", "rails-site"),
        ("/Users/dev/notes/todo.md", "todo.md"),
        ("/Users/dev/notes/.hidden", "notes"),
        ("/Users/dev/builds/2024/42", "builds"),
    ])
    def test_project_from_path(self, path, expected):
        assert from_file_path_heuristic(path) == expected

    def test_single_character_source_parent_falls_back(self):
        assert from_file_path_heuristic("/x/src/main.rs") == "main.rs"

    @pytest.mark.parametrize("path", ["/", "///", "/1/2/3", "/./a"])
    def test_no_qualifying_segment(self, path):
        assert from_file_path_heuristic(path) is None


class TestStripFileUrl:
    def test_strips_scheme_and_encoding(self):
        assert strip_file_url("file:///Users/dev/My%20Project/a.txt") == "/Users/dev/My Project/a.txt"

    def test_plain_path_unchanged(self):
        assert strip_file_url("/Users/dev/a%20b") == "/Users/dev/a%20b"


class TestFromProjectRootMarkers:
    def test_marker_file(self, tmp_path):
        project = tmp_path / "swii"
        (project / "src").mkdir(parents=True)
        (project / "Cargo.toml").write_text("[package]\n")
        document = project / "src" / "main.rs"

        assert find_project_root(document) == project
        assert from_project_root_markers(str(document)) == "swii"

    def test_marker_directory(self, tmp_path):
        project = tmp_path / "webapp"
        (project / ".git").mkdir(parents=True)
        (project / "components" / "ui").mkdir(parents=True)

        assert from_project_root_markers(str(project / "components" / "ui" / "Button.tsx")) == "webapp"

    def test_nearest_marker_wins(self, tmp_path):
        outer = tmp_path / "monorepo"
        inner = outer / "packages" / "cli"
        inner.mkdir(parents=True)
        (outer / ".git").mkdir()
        (inner / "package.json").write_text("{}")

        assert from_project_root_markers(str(inner / "index.js")) == "cli"

    def test_file_url(self, tmp_path):
        project = tmp_path / "my project"
        project.mkdir()
        (project / "pyproject.toml").write_text("")

        url = "file://" + str(project / "main.py").replace(" ", "%20")
        assert from_project_root_markers(url) == "my project"

    @pytest.mark.parametrize("path, expected", [
        ("/nonexistent-root/work/widget/src", "widget"),
        ("/nonexistent-root/work/widget/lib", "widget"),
        ("/nonexistent-root/work/widget/node_modules", "widget"),
        ("/nonexistent-root/work/widget/.cache", "widget"),
        ("/nonexistent-root/work/widget/target/build", "widget"),
        ("/nonexistent-root/work/widget/src/main.rs", "main.rs"),
    ])
    def test_segment_fallback(self, path, expected):
        assert from_project_root_markers(path) == expected

    def test_fallback_skips_single_character_parent(self):
        assert from_project_root_markers("/nonexistent-root/w/x/src") == "nonexistent-root"

    @pytest.mark.parametrize("path", ["", "file://", "/", "/src/lib/1"])
    def test_nothing_found(self, path):
        assert from_project_root_markers(path) is None
