"""Tests for workspace discovery."""

from pathlib import Path

from promptpilot.workspace import ProjectContext, find_workspace_root


class TestProjectContext:
    def test_closed(self):
        ctx = ProjectContext()
        assert not ctx.is_open
        assert ctx.collection_path("PromptPilot.json") is None

    def test_open(self, tmp_path: Path):
        ctx = ProjectContext(root=tmp_path, dir_name=".vscode")
        assert ctx.is_open
        assert ctx.collection_path("PromptPilot.json") == tmp_path / ".vscode" / "PromptPilot.json"


class TestFindWorkspaceRoot:
    def test_nearest_marker_wins(self, tmp_path: Path):
        (tmp_path / "outer" / ".git").mkdir(parents=True)
        (tmp_path / "outer" / "inner" / ".promptpilot").mkdir(parents=True)
        start = tmp_path / "outer" / "inner" / "deep"
        start.mkdir()
        assert find_workspace_root(start) == (tmp_path / "outer" / "inner").resolve()

    def test_git_file_counts(self, tmp_path: Path):
        # git worktrees use a .git file rather than a directory
        (tmp_path / "wt").mkdir()
        (tmp_path / "wt" / ".git").write_text("gitdir: elsewhere\n")
        assert find_workspace_root(tmp_path / "wt") == (tmp_path / "wt").resolve()

    def test_custom_markers(self, tmp_path: Path):
        (tmp_path / "proj" / ".vscode").mkdir(parents=True)
        assert find_workspace_root(tmp_path / "proj", [".vscode"]) == (tmp_path / "proj").resolve()

    def test_home_skipped(self, tmp_path: Path, monkeypatch):
        home = tmp_path / "home"
        (home / ".promptpilot").mkdir(parents=True)
        (home / "notes").mkdir()
        monkeypatch.setenv("HOME", str(home))
        assert find_workspace_root(home / "notes", [".promptpilot"]) is None
