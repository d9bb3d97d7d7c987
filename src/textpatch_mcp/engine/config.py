"""Editor configuration management.

Configuration file location priority:
1. Explicit path passed to EditorConfigLoader
2. TEXTPATCH_CONFIG environment variable
3. Standard location: ~/.textpatch/config.yml
4. Built-in defaults (if no config file found)

The project root can additionally be overridden with TEXTPATCH_PROJECT_ROOT,
which takes precedence over the file.

Example config file:
```yaml
project_root: ~/src/my-project
encoding: utf-8
diff_context_lines: 3
max_file_size_bytes: 10485760
```
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class EditorConfig(BaseModel):
    """Root editor configuration model."""

    project_root: Path = Field(
        default_factory=Path.cwd,
        description="Directory all edited paths are resolved against and confined to",
    )
    encoding: str = Field(default="utf-8", description="Text encoding for reads and writes")
    diff_context_lines: int = Field(
        default=3,
        ge=0,
        le=100,
        description="Unchanged lines shown around each change in unified diffs",
    )
    max_file_size_bytes: int | None = Field(
        default=None,
        ge=1,
        description="Refuse to edit files larger than this (no limit if unset)",
    )

    @field_validator("project_root", mode="after")
    @classmethod
    def expand_project_root(cls, v: Path) -> Path:
        """Expand ~ so config files can use home-relative roots."""
        return v.expanduser()


class EditorConfigLoader:
    """Loader for editor configuration from YAML file.

    Usage:
        ```python
        loader = EditorConfigLoader()
        config = loader.load_config()
        fs = ProjectFileSystem(config.project_root, config.encoding)
        ```

    Config is loaded once and cached.
    """

    def __init__(self, config_path: str | Path | None = None):
        """Initialize config loader with optional explicit path.

        Args:
            config_path: Explicit path to config file (optional).
                If not provided, uses environment variable or standard location.
        """
        self._config: EditorConfig | None = None
        self._explicit_path = Path(config_path) if config_path else None

    def get_config_path(self) -> Path | None:
        """Determine config file path using priority order.

        Returns:
            Path to config file, or None if file doesn't exist
        """
        if self._explicit_path:
            if self._explicit_path.exists():
                return self._explicit_path
            logger.warning(f"Explicit config path does not exist: {self._explicit_path}")
            return None

        env_path_str = os.getenv("TEXTPATCH_CONFIG")
        if env_path_str:
            env_path = Path(env_path_str).expanduser()
            if env_path.exists():
                return env_path
            logger.warning(f"TEXTPATCH_CONFIG path does not exist: {env_path}")
            return None

        standard_path = Path.home() / ".textpatch" / "config.yml"
        if standard_path.exists():
            return standard_path

        return None

    def load_config(self) -> EditorConfig:
        """Load and validate configuration.

        Returns:
            Validated EditorConfig (defaults if no config file found)

        Raises:
            ValueError: If the config file is invalid or fails validation
        """
        if self._config is not None:
            return self._config

        raw_config: dict[str, object] = {}
        config_path = self.get_config_path()

        if config_path is None:
            logger.info("No editor config file found, using defaults")
        else:
            logger.info(f"Loading editor config from: {config_path}")
            try:
                with open(config_path, encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ValueError(f"Failed to load editor config from {config_path}: {e}")

            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise ValueError(
                    f"Failed to load editor config from {config_path}: "
                    "config file must contain a YAML dictionary"
                )
            raw_config = loaded

        env_root = os.getenv("TEXTPATCH_PROJECT_ROOT")
        if env_root:
            raw_config["project_root"] = env_root

        try:
            config = EditorConfig(**raw_config)  # type: ignore[arg-type]
        except ValidationError as e:
            raise ValueError(f"Invalid editor config: {e}")

        if not config.project_root.is_dir():
            raise ValueError(f"Project root is not a directory: {config.project_root}")

        logger.info(f"Project root: {config.project_root}")
        self._config = config
        return config
