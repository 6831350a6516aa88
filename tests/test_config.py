"""Tests for configuration loading."""

import pytest
from pathlib import Path

from promptpilot.config import load_config

_ENV_KEYS = [
    "PROMPTPILOT_HOME",
    "PROMPTPILOT_WORKSPACE",
    "PROMPTPILOT_CLIPBOARD",
    "PROMPTPILOT_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class TestConfig:
    def test_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = load_config()
        assert config.global_dir.name == ".promptpilot"
        assert config.file_name == "PromptPilot.json"
        assert config.project_dir_name == ".promptpilot"
        assert config.workspace_markers == [".promptpilot", ".git"]
        assert config.clipboard_command is None
        assert config.log_level == "WARNING"

    def test_env_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PROMPTPILOT_HOME", str(tmp_path / "home"))
        monkeypatch.setenv("PROMPTPILOT_WORKSPACE", str(tmp_path / "ws"))
        monkeypatch.setenv("PROMPTPILOT_CLIPBOARD", "xclip -i")
        monkeypatch.setenv("PROMPTPILOT_LOG_LEVEL", "DEBUG")

        config = load_config()
        assert config.global_dir == tmp_path / "home"
        assert config.workspace == tmp_path / "ws"
        assert config.clipboard_command == "xclip -i"
        assert config.log_level == "DEBUG"

    def test_toml_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        toml_path = tmp_path / "promptpilot.toml"
        toml_path.write_text(f"""
log_level = "INFO"
clipboard_command = "wl-copy"

[store]
global_dir = "{(tmp_path / 'prompts').as_posix()}"
file_name = "prompts.json"

[workspace]
dir_name = ".vscode"
path = "{(tmp_path / 'project').as_posix()}"
""")
        config = load_config(toml_path)
        assert config.global_dir == tmp_path / "prompts"
        assert config.file_name == "prompts.json"
        assert config.project_dir_name == ".vscode"
        assert config.workspace == tmp_path / "project"
        assert config.clipboard_command == "wl-copy"
        assert config.log_level == "INFO"

    def test_toml_in_cwd_found(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "promptpilot.toml").write_text('log_level = "ERROR"\n')

        config = load_config()
        assert config.log_level == "ERROR"

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("PROMPTPILOT_LOG_LEVEL", "DEBUG")

        toml_path = tmp_path / "promptpilot.toml"
        toml_path.write_text('log_level = "ERROR"\n')
        config = load_config(toml_path)
        assert config.log_level == "DEBUG"  # env wins

    def test_workspace_discovered_from_cwd(self, tmp_path: Path, monkeypatch):
        (tmp_path / "repo" / ".git").mkdir(parents=True)
        sub = tmp_path / "repo" / "src" / "pkg"
        sub.mkdir(parents=True)
        monkeypatch.chdir(sub)

        config = load_config()
        assert config.workspace == (tmp_path / "repo").resolve()
