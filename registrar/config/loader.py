"""Layered TOML configuration.

config/default.toml is the base layer and must declare the session,
procedures and engine sections. config/{REGISTRAR_ENV}.toml, when
present, overlays it key by key. Keys that Settings does not know are
rejected so a misspelt section never silently falls back to defaults.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from registrar.config.settings import Settings

BASE_FILE = "default.toml"
DEFAULT_ENVIRONMENT = "development"
REQUIRED_SECTIONS = ("session", "procedures", "engine")
SEARCH_DEPTH = 5


class ConfigurationError(ValueError):
    """Raised when a configuration layer is missing or malformed."""


def _overlay(base: dict[str, Any], layer: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in layer.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _overlay(current, value)
        else:
            merged[key] = value
    return merged


def _find_config_dir(start: Path) -> Path | None:
    current = start
    for _ in range(SEARCH_DEPTH):
        candidate = current / "config"
        if (candidate / BASE_FILE).is_file():
            return candidate
        if current.parent == current:
            break
        current = current.parent
    return None


@dataclass(frozen=True)
class ConfigLayers:
    """The base and environment TOML files for one environment."""

    config_dir: Path
    environment: str = DEFAULT_ENVIRONMENT

    @classmethod
    def from_env(cls) -> "ConfigLayers":
        """Resolve layers from REGISTRAR_CONFIG_DIR and REGISTRAR_ENV.

        Without REGISTRAR_CONFIG_DIR, the nearest config/ directory
        holding a default.toml is used, searching up from the working
        directory.
        """
        environment = os.environ.get("REGISTRAR_ENV", DEFAULT_ENVIRONMENT)

        configured = os.environ.get("REGISTRAR_CONFIG_DIR")
        if configured:
            config_dir = Path(configured)
            if not config_dir.is_dir():
                raise ConfigurationError(f"Config directory not found: {configured}")
            return cls(config_dir, environment)

        found = _find_config_dir(Path.cwd())
        if found is None:
            raise ConfigurationError(
                f"No config/{BASE_FILE} found from {Path.cwd()}; "
                "set REGISTRAR_CONFIG_DIR"
            )
        return cls(found, environment)

    @property
    def base_file(self) -> Path:
        return self.config_dir / BASE_FILE

    @property
    def environment_file(self) -> Path:
        return self.config_dir / f"{self.environment}.toml"

    def load(self) -> dict[str, Any]:
        """Read and merge the layers.

        Returns:
            Merged configuration, ready for the Settings TOML source

        Raises:
            ConfigurationError: If the base file is absent, a file is not
                valid TOML, a required section is missing or a key is unknown
        """
        if not self.base_file.is_file():
            raise ConfigurationError(f"Base configuration not found: {self.base_file}")

        config = self._read(self.base_file)
        missing = [name for name in REQUIRED_SECTIONS if name not in config]
        if missing:
            raise ConfigurationError(
                f"{self.base_file} is missing sections: {', '.join(missing)}"
            )

        if self.environment_file.is_file():
            config = _overlay(config, self._read(self.environment_file))

        return config

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e

        known = set(Settings.model_fields)
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"Unknown keys in {path}: {', '.join(unknown)}")

        for name, value in data.items():
            annotation = Settings.model_fields[name].annotation
            is_section = isinstance(annotation, type) and issubclass(annotation, BaseModel)
            if is_section and not isinstance(value, dict):
                raise ConfigurationError(f"[{name}] in {path} must be a table")

        return data


def load_config() -> dict[str, Any]:
    """Load the layered configuration for the current environment."""
    return ConfigLayers.from_env().load()
