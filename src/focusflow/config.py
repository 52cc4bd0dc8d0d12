"""Configuration management for FocusFlow."""

import json
from datetime import tzinfo
from pathlib import Path
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from platformdirs import user_config_dir
from pydantic import BaseModel, Field, ValidationError, field_validator

from focusflow.models.focus.cycling import PomodoroConfig
from focusflow.utils.logger import get_logger


class TimerConfig(BaseModel):
    """Pomodoro timer configuration (minutes)."""

    focus_minutes: int = Field(default=25, gt=0)
    short_break_minutes: int = Field(default=5, gt=0)
    long_break_minutes: int = Field(default=15, gt=0)
    sessions_before_long_break: int = Field(default=4, gt=0)

    def to_pomodoro_config(self) -> PomodoroConfig:
        """Build the timer's duration configuration."""
        return PomodoroConfig.from_minutes(
            focus=self.focus_minutes,
            short_break=self.short_break_minutes,
            long_break=self.long_break_minutes,
            sessions_before_long_break=self.sessions_before_long_break,
        )


class StreakConfig(BaseModel):
    """Streak configuration."""

    timezone: str | None = Field(
        default=None, description="IANA zone defining calendar days (None = local)"
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        try:
            ZoneInfo(v.strip())
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v.strip()

    def get_tzinfo(self) -> tzinfo | None:
        return ZoneInfo(self.timezone) if self.timezone else None


class StorageConfig(BaseModel):
    """Storage locations (None = platform data directory)."""

    db_path: str | None = Field(default=None)
    history_path: str | None = Field(default=None)


class OutputConfig(BaseModel):
    """Output configuration."""

    color: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main configuration."""

    timer: TimerConfig = Field(default_factory=TimerConfig)
    streak: StreakConfig = Field(default_factory=StreakConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)


class ConfigManager:
    """Manages FocusFlow configuration."""

    def __init__(self, profile: str = "default", config_dir: Path | None = None):
        self.profile = profile
        self.config_dir = config_dir or Path(user_config_dir("focusflow"))
        self.config_file = self.config_dir / f"{profile}.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: Optional[AppConfig] = None

    @property
    def config(self) -> AppConfig:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from file."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r") as f:
                    data = json.load(f)
                return AppConfig(**data)
            except (json.JSONDecodeError, ValidationError, TypeError) as e:
                # If config is corrupted, return default
                get_logger().warning(
                    "ignoring unreadable config %s: %s", self.config_file, e
                )
                return AppConfig()
        return AppConfig()

    def save_config(self, config: Optional[AppConfig] = None) -> None:
        """Save configuration to file."""
        if config is None:
            config = self.config

        with open(self.config_file, "w") as f:
            json.dump(config.model_dump(), f, indent=2)

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
        """
        return self.get_from_config(self.config, key)

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            KeyError: If the key does not exist
            pydantic.ValidationError: If the value is rejected
        """
        keys = key.split(".")
        config_dict = self.config.model_dump()

        # Navigate to the nested dictionary
        current = config_dict
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                raise KeyError(key)
            current = current[k]
        if keys[-1] not in current:
            raise KeyError(key)

        # Set the value
        current[keys[-1]] = value

        # Reload config from the modified dictionary
        self._config = AppConfig(**config_dict)
        self.save_config()

    def reset(self, key: Optional[str] = None) -> None:
        """Reset configuration to defaults."""
        if key is None:
            self._config = AppConfig()
        else:
            # Reset specific key to default
            default_value = self.get_from_config(AppConfig(), key)
            self.set(key, default_value)
        self.save_config()

    @staticmethod
    def get_from_config(config: AppConfig, key: str) -> Any:
        """Get value from a config object using dot notation."""
        keys = key.split(".")
        value: Any = config
        for k in keys:
            if isinstance(value, BaseModel) and k in type(value).model_fields:
                value = getattr(value, k)
            else:
                raise KeyError(key)
        return value


# Global config manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(profile: str = "default") -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None or _config_manager.profile != profile:
        _config_manager = ConfigManager(profile)
    return _config_manager
