"""Tests for editor configuration loading."""

from pathlib import Path

import pytest
import yaml

from textpatch_mcp.engine import EditorConfig, EditorConfigLoader


@pytest.fixture
def config_file(tmp_path: Path):
    """Write a YAML config file and return its path."""

    def _write(data) -> Path:
        path = tmp_path / "config.yml"
        path.write_text(yaml.safe_dump(data) if not isinstance(data, str) else data)
        return path

    return _write


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))

    config = EditorConfigLoader().load_config()

    assert config.project_root.resolve() == tmp_path.resolve()
    assert config.encoding == "utf-8"
    assert config.diff_context_lines == 3
    assert config.max_file_size_bytes is None


def test_explicit_config_file(config_file, project_dir):
    path = config_file(
        {
            "project_root": str(project_dir),
            "encoding": "latin-1",
            "diff_context_lines": 5,
            "max_file_size_bytes": 1024,
        }
    )

    config = EditorConfigLoader(path).load_config()

    assert config.project_root == project_dir
    assert config.encoding == "latin-1"
    assert config.diff_context_lines == 5
    assert config.max_file_size_bytes == 1024


def test_config_from_env_var(monkeypatch, config_file, project_dir):
    path = config_file({"project_root": str(project_dir), "diff_context_lines": 1})
    monkeypatch.setenv("TEXTPATCH_CONFIG", str(path))

    config = EditorConfigLoader().load_config()

    assert config.diff_context_lines == 1


def test_standard_location(monkeypatch, tmp_path, project_dir):
    monkeypatch.setenv("HOME", str(tmp_path))
    config_dir = tmp_path / ".textpatch"
    config_dir.mkdir()
    (config_dir / "config.yml").write_text(f"project_root: {project_dir}\nencoding: ascii\n")

    config = EditorConfigLoader().load_config()

    assert config.project_root == project_dir
    assert config.encoding == "ascii"


def test_env_project_root_overrides_file(monkeypatch, config_file, project_dir, tmp_path):
    other = tmp_path / "other"
    other.mkdir()
    path = config_file({"project_root": str(project_dir)})
    monkeypatch.setenv("TEXTPATCH_PROJECT_ROOT", str(other))

    config = EditorConfigLoader(path).load_config()

    assert config.project_root == other


def test_missing_explicit_path_uses_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    loader = EditorConfigLoader(tmp_path / "nope.yml")

    assert loader.get_config_path() is None
    assert loader.load_config().diff_context_lines == 3


def test_empty_config_file(monkeypatch, config_file, tmp_path):
    monkeypatch.chdir(tmp_path)
    path = config_file("")

    assert EditorConfigLoader(path).load_config().encoding == "utf-8"


def test_config_is_cached(config_file, project_dir):
    loader = EditorConfigLoader(config_file({"project_root": str(project_dir)}))
    assert loader.load_config() is loader.load_config()


def test_home_relative_project_root(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert EditorConfig(project_root=Path("~")).project_root == tmp_path


class TestInvalidConfig:
    def test_not_a_dictionary(self, config_file):
        path = config_file("- a\n- b\n")
        with pytest.raises(ValueError, match="must contain a YAML dictionary"):
            EditorConfigLoader(path).load_config()

    def test_malformed_yaml(self, config_file):
        path = config_file("key: [unclosed\n")
        with pytest.raises(ValueError, match="Failed to load editor config"):
            EditorConfigLoader(path).load_config()

    def test_out_of_range_value(self, config_file, project_dir):
        path = config_file({"project_root": str(project_dir), "diff_context_lines": 500})
        with pytest.raises(ValueError, match="Invalid editor config"):
            EditorConfigLoader(path).load_config()

    def test_project_root_not_a_directory(self, config_file, tmp_path):
        path = config_file({"project_root": str(tmp_path / "does-not-exist")})
        with pytest.raises(ValueError, match="Project root is not a directory"):
            EditorConfigLoader(path).load_config()
