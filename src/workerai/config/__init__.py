"""Configuration models and YAML loading."""

from workerai.config.loader import ConfigError, load_config
from workerai.config.schema import WorkerConfig

__all__ = ["ConfigError", "WorkerConfig", "load_config"]
