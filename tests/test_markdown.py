"""Tests for markdown import/export."""

from __future__ import annotations

import frontmatter
import pytest
from pathlib import Path

from promptpilot.store import Prompt, PromptStore, SaveStatus, Scope
from promptpilot.store.markdown import _slugify, export_markdown, import_markdown
from promptpilot.workspace import ProjectContext


@pytest.fixture
def store(tmp_path: Path) -> PromptStore:
    ws = tmp_path / "ws"
    ws.mkdir()
    return PromptStore(tmp_path / "global", project=ProjectContext(root=ws))


class TestSlugify:
    def test_spaces(self):
        assert _slugify("Review PR") == "Review-PR"

    def test_special_chars(self):
        assert _slugify('a<>:"/\\|?*b') == "ab"

    def test_empty(self):
        assert _slugify("") == "unnamed"


class TestExport:
    def test_writes_frontmatter(self, tmp_path: Path):
        out = tmp_path / "out"
        paths = export_markdown([Prompt("Review PR", "Check\nthis", Scope.PROJECT)], out)
        assert paths == [out / "Review-PR.md"]

        post = frontmatter.load(str(paths[0]))
        assert post["shortName"] == "Review PR"
        assert post["scope"] == "Project-specific"
        assert post.content == "Check\nthis"

    def test_slug_collision(self, tmp_path: Path):
        paths = export_markdown(
            [Prompt("a b", "1"), Prompt("a-b", "2")],
            tmp_path,
        )
        assert [p.name for p in paths] == ["a-b.md", "a-b-2.md"]


class TestImport:
    def test_inserts(self, store: PromptStore, tmp_path: Path):
        md = tmp_path / "explain.md"
        md.write_text("---\nshortName: Explain\nscope: Project-specific\n---\n\nExplain this code.\n")

        results = import_markdown(store, [md])
        assert len(results) == 1
        assert results[0][1].ok
        assert store.load_collection(Scope.PROJECT) == [
            Prompt("Explain", "Explain this code.", Scope.PROJECT)
        ]

    def test_name_from_stem_and_default_scope(self, store: PromptStore, tmp_path: Path):
        md = tmp_path / "a-very-long-file-name-for-a-prompt.md"
        md.write_text("Just a body, no frontmatter.\n")

        import_markdown(store, [md], default_scope=Scope.GLOBAL)
        [prompt] = store.load_collection(Scope.GLOBAL)
        assert prompt.short_name == "a-very-long-file-name-for"
        assert len(prompt.short_name) <= 25
        assert prompt.instruction == "Just a body, no frontmatter."

    def test_duplicate_reported(self, store: PromptStore, tmp_path: Path):
        store.insert_or_update(Prompt("Explain", "original"))
        md = tmp_path / "explain.md"
        md.write_text("---\nshortName: Explain\n---\nnew text\n")

        [(path, result)] = import_markdown(store, [md])
        assert path == md
        assert result.status is SaveStatus.DUPLICATE_NAME
        assert store.find_by_name("Explain").instruction == "original"

    def test_empty_body_skipped(self, store: PromptStore, tmp_path: Path):
        md = tmp_path / "empty.md"
        md.write_text("---\nshortName: Empty\n---\n\n")
        assert import_markdown(store, [md]) == []
        assert store.merged_view() == []

    def test_blank_short_name_skipped(self, store: PromptStore, tmp_path: Path):
        md = tmp_path / "blank.md"
        md.write_text('---\nshortName: "   "\n---\n\nSome body.\n')
        assert import_markdown(store, [md]) == []
        assert store.merged_view() == []

    def test_long_short_name_skipped(self, store: PromptStore, tmp_path: Path):
        md = tmp_path / "long.md"
        md.write_text(f"---\nshortName: {'x' * 26}\n---\n\nSome body.\n")
        assert import_markdown(store, [md]) == []
        assert store.merged_view() == []

    def test_missing_file_skipped(self, store: PromptStore, tmp_path: Path):
        assert import_markdown(store, [tmp_path / "nope.md"]) == []

    def test_export_then_import(self, store: PromptStore, tmp_path: Path):
        export_markdown([Prompt("One", "first"), Prompt("Two", "second")], tmp_path / "out")
        results = import_markdown(store, sorted((tmp_path / "out").glob("*.md")))
        assert all(r.ok for _, r in results)
        assert {p.short_name for p in store.merged_view()} == {"One", "Two"}
