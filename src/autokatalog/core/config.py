"""Configuration management."""

import os
from pathlib import Path
from typing import Optional

import platformdirs
import tomli
import tomli_w
from pydantic import ValidationError

from autokatalog.exceptions import ConfigValidationError
from autokatalog.models import CatalogSettings

APP_NAME = "autokatalog"
DATA_DIR_ENV = "AUTOKATALOG_DATA_DIR"


class ConfigManager:
    """Loads and saves settings in config.toml."""

    CONFIG_FILENAME = "config.toml"

    def __init__(self, config_dir: Optional[Path] = None) -> None:
        """Initialize config manager.

        Args:
            config_dir: Override config directory (for testing)
        """
        if config_dir:
            self._config_dir = Path(config_dir)
        else:
            self._config_dir = Path(platformdirs.user_config_dir(APP_NAME))

    @property
    def config_path(self) -> Path:
        """Path to config file."""
        return self._config_dir / self.CONFIG_FILENAME

    @property
    def exists(self) -> bool:
        """Check if config file exists."""
        return self.config_path.exists()

    def load(self) -> CatalogSettings:
        """Load settings, falling back to defaults when no file exists.

        Returns:
            Validated CatalogSettings

        Raises:
            ConfigValidationError: If the file is not valid TOML or has bad values
        """
        if not self.exists:
            return CatalogSettings()

        try:
            config_dict = tomli.loads(self.config_path.read_text(encoding="utf-8"))
        except tomli.TOMLDecodeError as e:
            raise ConfigValidationError("config.toml", str(e))

        try:
            return CatalogSettings.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigValidationError("config.toml", str(e))

    def save(self, settings: CatalogSettings) -> None:
        """Write settings to config.toml.

        Args:
            settings: Settings to persist
        """
        self._config_dir.mkdir(parents=True, exist_ok=True)
        config_dict = settings.model_dump(mode="json", exclude_none=True)
        self.config_path.write_text(tomli_w.dumps(config_dict), encoding="utf-8")

    def delete(self) -> bool:
        """Delete config file.

        Returns:
            True if file was deleted, False if it didn't exist
        """
        if self.exists:
            self.config_path.unlink()
            return True
        return False


def resolve_data_dir(settings: CatalogSettings) -> Path:
    """Directory holding the record store.

    Precedence: AUTOKATALOG_DATA_DIR, then ``data_dir`` from config.toml,
    then the platform user data dir.
    """
    env_dir = os.environ.get(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    if settings.data_dir:
        return Path(settings.data_dir)
    return Path(platformdirs.user_data_dir(APP_NAME))
