"""Configuration management for Pomotask CLI."""

import json
from pathlib import Path
from typing import Any, Optional

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError

from pomotask_cli.models import MAX_DURATION_MINUTES, DurationDefaults
from pomotask_cli.utils.logger import get_logger


class DurationConfig(BaseModel):
    """Default phase lengths, in minutes, for new tasks."""

    work_minutes: float = Field(default=25.0, ge=0, le=MAX_DURATION_MINUTES)
    short_break_minutes: float = Field(default=5.0, ge=0, le=MAX_DURATION_MINUTES)
    long_break_minutes: float = Field(default=15.0, ge=0, le=MAX_DURATION_MINUTES)

    def to_defaults(self) -> DurationDefaults:
        return DurationDefaults(**self.model_dump())


class TimerConfig(BaseModel):
    """Interactive session timing."""

    tick_interval_ms: int = Field(default=250, ge=10)
    cycles_before_long_break: int = Field(default=4, ge=1)


class NotificationConfig(BaseModel):
    """Desktop notification settings."""

    enabled: bool = Field(default=True)
    app_name: str = Field(default="pomotask")
    timeout: int = Field(default=10, ge=0)


class StorageConfig(BaseModel):
    """Task database location. None means the platform data directory."""

    db_path: Optional[str] = Field(default=None)


class Config(BaseModel):
    """Main configuration."""

    durations: DurationConfig = Field(default_factory=DurationConfig)
    timer: TimerConfig = Field(default_factory=TimerConfig)
    notifications: NotificationConfig = Field(default_factory=NotificationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)


class ConfigManager:
    """Loads and saves the JSON configuration for one profile."""

    def __init__(self, profile: str = "default"):
        self.profile = profile
        self.config_dir = Path(user_config_dir("pomotask-cli"))
        self.config_file = self.config_dir / f"{profile}.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self._config: Optional[Config] = None

    @property
    def config(self) -> Config:
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> Config:
        """Load configuration from file. A corrupt file yields defaults."""
        if not self.config_file.exists():
            return Config()
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                return Config(**json.load(f))
        except (OSError, json.JSONDecodeError, ValidationError, TypeError) as e:
            get_logger().warning("ignoring unreadable config %s: %s", self.config_file, e)
            return Config()

    def save_config(self, config: Optional[Config] = None) -> None:
        if config is None:
            config = self.config
        with open(self.config_file, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not name a setting
            ValidationError: If the value does not fit the setting
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)
        current[keys[-1]] = value

        self._config = Config(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset one key, or everything, to defaults."""
        if key is None:
            self._config = Config()
        else:
            self.set(key, self.get_from_config(Config(), key))
        self.save_config()

    @staticmethod
    def get_from_config(config: Config, key: str) -> Any:
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel):
                value = getattr(value, k, None)
            else:
                return None
        return value


_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
