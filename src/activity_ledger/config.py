"""Configuration management for Activity Ledger."""

import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .utils import get_data_directory

DEFAULT_CONFIG = {
    "data_dir": "",
    "verbose_logging": True,
    "sync_endpoint": "",
    "sync_auth_token": "",  # nosec B105 - Bearer token for report upload
    "export_dir": "",
    "offset_step": 1800,  # 30 minutes
    "offset_fine_step": 600,  # 10 minutes
    "timeline_start_hour": 8,
    "timeline_end_hour": 19,
}

INTEGER_KEYS = [
    "offset_step",
    "offset_fine_step",
    "timeline_start_hour",
    "timeline_end_hour",
]

BOOLEAN_KEYS = ["verbose_logging"]


def get_default_config_dir() -> Path:
    """Get the directory holding settings.json for the current platform."""
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ActivityLedger" / "config"
    xdg_config_home = os.getenv("XDG_CONFIG_HOME")
    base = Path(xdg_config_home) if xdg_config_home else Path.home() / ".config"
    return base / "activity-ledger"


class Config:
    """Configuration manager for Activity Ledger."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize configuration manager.

        Args:
            config_dir: Custom configuration directory path
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = get_default_config_dir()

        self.config_file = self.config_dir / "settings.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file or create default."""
        if self.config_file.exists():
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    config = json.load(f)
                merged_config = DEFAULT_CONFIG.copy()
                merged_config.update(config)
                return merged_config
            except (json.JSONDecodeError, IOError) as e:
                print(f"Warning: Could not load config file: {e}")
                print("Using default configuration.")

        return DEFAULT_CONFIG.copy()

    def save(self) -> None:
        """Save current configuration to file."""
        try:
            with open(self.config_file, "w", encoding="utf-8") as f:
                json.dump(self._config, f, indent=2, ensure_ascii=False)
        except IOError as e:
            print(f"Warning: Could not save config file: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set configuration value."""
        self._config[key] = value

    def update(self, config_dict: Dict[str, Any]) -> None:
        """Update multiple configuration values."""
        self._config.update(config_dict)

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self._config = DEFAULT_CONFIG.copy()

    def get_all(self) -> Dict[str, Any]:
        """Get a copy of all configuration values."""
        return self._config.copy()

    @property
    def verbose_logging(self) -> bool:
        return self.get("verbose_logging", True)

    @verbose_logging.setter
    def verbose_logging(self, value: bool) -> None:
        self.set("verbose_logging", value)

    @property
    def sync_endpoint(self) -> str:
        return self.get("sync_endpoint", "")

    @sync_endpoint.setter
    def sync_endpoint(self, value: str) -> None:
        self.set("sync_endpoint", value)

    @property
    def sync_auth_token(self) -> str:
        return self.get("sync_auth_token", "")

    @property
    def offset_step(self) -> int:
        """Offset adjustment step in seconds."""
        return self.get("offset_step", 1800)

    @property
    def offset_fine_step(self) -> int:
        """Offset adjustment step in seconds with the fine modifier held."""
        return self.get("offset_fine_step", 600)

    @property
    def data_dir(self) -> Path:
        """Get data directory path."""
        data_dir = self.get("data_dir")
        if data_dir:
            return Path(data_dir)
        return get_data_directory()

    @property
    def export_dir(self) -> Optional[Path]:
        """Directory the export dialog opens in, if configured."""
        export_dir = self.get("export_dir")
        if export_dir:
            return Path(export_dir)
        return None


def load_config_from_env() -> Dict[str, Any]:
    """Load configuration from environment variables.

    Returns:
        Configuration dictionary from environment
    """
    env_config: Dict[str, Any] = {}

    env_mappings = {
        "ACTIVITY_LEDGER_DATA_DIR": "data_dir",
        "ACTIVITY_LEDGER_VERBOSE": "verbose_logging",
        "ACTIVITY_LEDGER_ENDPOINT": "sync_endpoint",
        "ACTIVITY_LEDGER_AUTH_TOKEN": "sync_auth_token",  # nosec B105
        "ACTIVITY_LEDGER_EXPORT_DIR": "export_dir",
        "ACTIVITY_LEDGER_OFFSET_STEP": "offset_step",
    }

    for env_var, config_key in env_mappings.items():
        value = os.getenv(env_var)
        if value is not None:
            if config_key in INTEGER_KEYS:
                try:
                    env_config[config_key] = int(value)
                except ValueError:
                    print(f"Warning: Invalid integer value for {env_var}: {value}")
            elif config_key in BOOLEAN_KEYS:
                env_config[config_key] = value.lower() in ("true", "1", "yes", "on")
            else:
                env_config[config_key] = value

    return env_config


# Global config instance
_global_config: Optional[Config] = None


def get_config() -> Config:
    """Get global configuration instance, with environment overrides applied."""
    global _global_config
    if _global_config is None:
        _global_config = Config()
        env_config = load_config_from_env()
        if env_config:
            _global_config.update(env_config)
    return _global_config


def reload_config() -> Config:
    """Reload configuration from file."""
    global _global_config
    _global_config = None
    return get_config()
