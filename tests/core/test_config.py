"""
Tests for configuration loading and workspace resolution.
"""

import pytest
from pydantic import ValidationError

from project_structure.core.config import (
    ProjectStructureConfig,
    WorkspaceError,
    load_config,
    parse_blacklist_arg,
    resolve_workspace,
)


class TestLoadConfig:

    def test_defaults(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        config = load_config()
        assert config.workspace is None
        assert config.blacklist == []
        assert config.type_depth == 2
        assert config.exported_only is False
        assert config.include_types is True
        assert config.router_factories == ["createTRPCRouter"]

    def test_yaml_file_and_cli_priority(self, temp_dir):
        config_path = temp_dir / "custom.yaml"
        config_path.write_text(
            "workspace: /srv/app\n"
            "blacklist: legacy, generated\n"
            "type_depth: 3\n"
            "router_factories: [router, createTRPCRouter]\n",
            encoding="utf-8",
        )
        config = load_config(str(config_path), cli_args={"type_depth": 1, "exported_only": None})
        assert config.workspace == "/srv/app"
        assert config.blacklist == ["legacy", "generated"]
        assert config.type_depth == 1
        assert config.exported_only is False
        assert config.router_factories == ["router", "createTRPCRouter"]

    def test_default_file_in_cwd(self, temp_dir, monkeypatch):
        (temp_dir / "project-structure.config.yaml").write_text("exported_only: true\n", encoding="utf-8")
        monkeypatch.chdir(temp_dir)
        assert load_config().exported_only is True

    def test_missing_explicit_file_uses_defaults(self, temp_dir, caplog):
        config = load_config(str(temp_dir / "missing.yaml"))
        assert config.type_depth == 2
        assert "Config file not found" in caplog.text

    def test_invalid_yaml_is_logged(self, temp_dir, caplog):
        config_path = temp_dir / "broken.yaml"
        config_path.write_text("blacklist: [unclosed\n", encoding="utf-8")
        config = load_config(str(config_path))
        assert config.blacklist == []
        assert "Failed to load config file" in caplog.text

    def test_negative_depth_rejected(self):
        with pytest.raises(ValidationError):
            ProjectStructureConfig(type_depth=-1)

    def test_require_workspace(self, temp_dir):
        with pytest.raises(WorkspaceError):
            ProjectStructureConfig().require_workspace()
        assert ProjectStructureConfig(workspace=str(temp_dir)).require_workspace() == temp_dir.resolve()


class TestResolveWorkspace:

    def test_env_wins(self, temp_dir):
        other = temp_dir / "other"
        other.mkdir()
        env = {"WORKSPACE_FOLDER_PATHS": str(temp_dir)}
        assert resolve_workspace(env=env, argv=["prog", "--workspace", str(other)]) == temp_dir

    def test_relative_env_falls_back_to_argv(self, temp_dir):
        env = {"WORKSPACE_FOLDER_PATHS": "relative/path"}
        assert resolve_workspace(env=env, argv=["prog", "--workspace", str(temp_dir)]) == temp_dir

    def test_invalid_workspace_argument(self, temp_dir):
        with pytest.raises(WorkspaceError, match="--workspace path provided is invalid"):
            resolve_workspace(env={}, argv=["prog", "--workspace", str(temp_dir / "missing")])

    def test_nothing_configured(self):
        with pytest.raises(WorkspaceError, match="WORKSPACE_FOLDER_PATHS"):
            resolve_workspace(env={}, argv=["prog"])


@pytest.mark.parametrize("argv, expected", [
    (["prog", "--blacklist", "a, b,,c "], ["a", "b", "c"]),
    (["prog", "--blacklist"], []),
    (["prog"], []),
])
def test_parse_blacklist_arg(argv, expected):
    assert parse_blacklist_arg(argv) == expected
