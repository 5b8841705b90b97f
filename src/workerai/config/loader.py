"""Configuration loading and validation."""

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from workerai.config.schema import WorkerConfig

DEFAULT_CONFIG_PATH = Path.home() / ".workerai" / "workerai.yaml"


class ConfigError(Exception):
    """Configuration loading or validation error."""


def load_config(path: Optional[Union[str, Path]] = None) -> WorkerConfig:
    """Load and validate configuration from a YAML file.

    A relative ``workspace.root`` is taken relative to the directory holding
    the config file, so a project-local config can point at ``.``.

    Args:
        path: Path to config file. If None, uses ~/.workerai/workerai.yaml.
              A missing file yields the default config.

    Returns:
        Validated configuration object

    Raises:
        ConfigError: If the file cannot be read, is not YAML, is not a
                     mapping, or fails validation
    """
    path = Path(path).expanduser() if path is not None else DEFAULT_CONFIG_PATH
    if not path.is_file():
        return WorkerConfig()

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return WorkerConfig()
    if not isinstance(data, dict):
        raise ConfigError(
            f"Invalid config in {path}: top level must be a mapping, got {type(data).__name__}"
        )

    try:
        config = WorkerConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e

    if config.workspace.root is not None:
        root = Path(config.workspace.root).expanduser()
        if not root.is_absolute():
            root = path.parent / root
        config.workspace.root = str(root.resolve())

    return config
