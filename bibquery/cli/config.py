"""Configuration management for the CLI."""

import os
from pathlib import Path
from typing import Any

import msgspec
import yaml

from bibquery.search.locate import DEFAULT_APPENDIX_CHARACTERS


class SearchSettings(msgspec.Struct, kw_only=True):
    """Default search flags."""

    case_sensitive: bool = False
    regex: bool = False


class FileSettings(msgspec.Struct, kw_only=True):
    """Settings for finding the files of an entry."""

    directories: list[str] = msgspec.field(default_factory=list)
    extensions: list[str] = msgspec.field(default_factory=lambda: ["pdf"])
    exact_key_only: bool = False
    appendix_characters: str = DEFAULT_APPENDIX_CHARACTERS


class Settings(msgspec.Struct, kw_only=True):
    """Typed view of the configuration."""

    search: SearchSettings = msgspec.field(default_factory=SearchSettings)
    files: FileSettings = msgspec.field(default_factory=FileSettings)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Settings":
        """Build settings from a configuration dictionary.

        Unknown keys are ignored.

        Raises:
            ValueError: If a known key has a value of the wrong type
        """
        try:
            return msgspec.convert(data or {}, cls)
        except msgspec.ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}")

    @property
    def file_directories(self) -> list[Path]:
        return [Path(d).expanduser() for d in self.files.directories]


class Config:
    """Configuration management for the CLI application."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")
        return data

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        # User config
        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "bibquery" / "config.yaml")

        # Project config
        paths.append(Path(".bibquery.yaml"))
        paths.append(Path("bibquery.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def get_config_paths() -> list[Path]:
    """Get configuration paths in precedence order."""
    return Config.get_config_paths()


def load_config(extra_file: Path | None = None) -> dict[str, Any]:
    """Load configuration from files and environment variables.

    Args:
        extra_file: Explicit config file, applied after the default paths

    Raises:
        ValueError: If a config file cannot be read or parsed
    """
    config: dict[str, Any] = {}

    # Load from all config paths (last one wins for conflicting keys)
    paths = [p for p in get_config_paths() if p.exists()]
    if extra_file is not None:
        paths.append(extra_file)

    for path in paths:
        config = Config.merge_configs(config, Config.from_file(path))

    # Override with environment variables
    files: dict[str, Any] = {}
    if dirs := os.environ.get("BIBQUERY_FILE_DIRS"):
        files["directories"] = [d for d in dirs.split(os.pathsep) if d]
    if extensions := os.environ.get("BIBQUERY_EXTENSIONS"):
        files["extensions"] = [
            e.strip().lstrip(".") for e in extensions.split(",") if e.strip()
        ]
    if exact := os.environ.get("BIBQUERY_EXACT_KEY_ONLY"):
        files["exact_key_only"] = exact.lower() in ("1", "true", "yes", "on")

    if files:
        config = Config.merge_configs(config, {"files": files})
    return config


def load_settings(extra_file: Path | None = None) -> Settings:
    """Load configuration and convert it to typed settings."""
    return Settings.from_dict(load_config(extra_file))


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
