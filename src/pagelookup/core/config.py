"""Configuration management for pagelookup."""

import os
import re
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from .exceptions import ConfigError

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class LookupConfig:
    """Page lookup behaviour configuration."""

    # Replacement for characters that are not allowed in page ids
    separator_char: str = "_"
    # Treat "/" as a namespace separator when cleaning ids
    use_slash: bool = False
    # Regular expression of page ids hidden from search results
    hidden_pages: str = ""
    # Defaults for the CLI and service layer
    in_namespace: bool = False
    in_title: bool = False

    def __post_init__(self) -> None:
        if len(self.separator_char) != 1:
            raise ConfigError(
                f"separator_char must be a single character, got {self.separator_char!r}"
            )
        if self.hidden_pages:
            try:
                re.compile(self.hidden_pages)
            except re.error as e:
                raise ConfigError(f"Invalid hidden_pages pattern: {e}") from e


def _default_index_path() -> Path:
    """Get default index snapshot path."""
    data_dir = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
    return data_dir / "pagelookup" / "index.yaml"


@dataclass
class Config:
    """Main application configuration."""

    index_path: Path = field(default_factory=_default_index_path)
    lookup: LookupConfig = field(default_factory=LookupConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        config = cls()
        config._apply_env()
        return config

    @classmethod
    def from_file(cls, path: Path) -> "Config":
        """Load configuration from a TOML file, then apply env overrides.

        Args:
            path: Path to the TOML configuration file.

        Returns:
            Loaded configuration.

        Raises:
            ConfigError: If the file cannot be read or holds invalid values.
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to read config file {path}: {e}") from e

        config = cls()
        if "index_path" in data:
            config.index_path = Path(data["index_path"])

        lookup_data = data.get("lookup", {})
        if not isinstance(lookup_data, dict):
            raise ConfigError("[lookup] must be a table")
        config.lookup = _build_lookup_config(lookup_data)

        config._apply_env()
        return config

    @classmethod
    def from_env_or_file(cls, path: Path | None = None) -> "Config":
        """Load from an explicit file, PAGELOOKUP_CONFIG, or the environment."""
        if path is None and (env_path := os.environ.get("PAGELOOKUP_CONFIG")):
            path = Path(env_path)
        if path is not None:
            return cls.from_file(path)
        return cls.from_env()

    def _apply_env(self) -> None:
        if path := os.environ.get("PAGELOOKUP_INDEX"):
            self.index_path = Path(path)

        if pattern := os.environ.get("PAGELOOKUP_HIDDEN_PAGES"):
            self.lookup.hidden_pages = pattern

        if use_slash := os.environ.get("PAGELOOKUP_USE_SLASH"):
            self.lookup.use_slash = use_slash.strip().lower() in _TRUE_VALUES

        if sepchar := os.environ.get("PAGELOOKUP_SEPARATOR"):
            self.lookup.separator_char = sepchar

        # Re-run validation after overrides
        self.lookup.__post_init__()


def _build_lookup_config(data: dict[str, Any]) -> LookupConfig:
    known = {f.name for f in fields(LookupConfig)}
    unknown = set(data) - known
    if unknown:
        raise ConfigError(f"Unknown [lookup] keys: {', '.join(sorted(unknown))}")
    return LookupConfig(**data)
