"""Configuration management for netprobe."""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from netprobe.core.constants import (DEFAULT_DNS_HOST, DEFAULT_DNS_TIMEOUT,
                                     DEFAULT_MONITOR_INTERVAL,
                                     DEFAULT_SOCKET_HOST, DEFAULT_SOCKET_PORT,
                                     DEFAULT_SOCKET_TIMEOUT)

DEFAULT_CONFIG: Dict[str, Any] = {
    "dns": {
        "host": DEFAULT_DNS_HOST,
        "timeout": DEFAULT_DNS_TIMEOUT,
    },
    "socket": {
        "host": DEFAULT_SOCKET_HOST,
        "port": DEFAULT_SOCKET_PORT,
        "timeout": DEFAULT_SOCKET_TIMEOUT,
    },
    "monitor": {
        "interval": DEFAULT_MONITOR_INTERVAL,
    },
}


def _detect_format(path: Path) -> str:
    return "yaml" if path.suffix.lower() in (".yaml", ".yml") else "json"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Recursively merge override into base, in place."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value


class Config:
    """Probe defaults, optionally overridden from a JSON or YAML file."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_path: Optional JSON/YAML file merged over the defaults.
                Nothing is created or written if it does not exist.
        """
        self.config_path = Path(config_path) if config_path else None
        self.config_data: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file, if one was given and exists."""
        if self.config_path is None or not self.config_path.exists():
            return
        if not self.import_config(self.config_path, _detect_format(self.config_path)):
            logger.warning(f"[Config] Could not load {self.config_path}, using defaults")

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to path (or the path it was loaded from)."""
        target = Path(path) if path else self.config_path
        if target is None:
            raise ValueError("No path to save configuration to")
        target.parent.mkdir(parents=True, exist_ok=True)
        self.export_config(target, _detect_format(target))

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key (supports dot notation, e.g., 'socket.port')
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self.config_data
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split(".")
        data = self.config_data
        for k in keys[:-1]:
            if k not in data:
                data[k] = {}
            data = data[k]
        data[keys[-1]] = value

    def import_config(self, config_file: Path, file_format: str = "json") -> bool:
        """Import configuration from file.

        Args:
            config_file: Path to configuration file
            file_format: File format ('json' or 'yaml')

        Returns:
            True if successful, False otherwise
        """
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                if file_format.lower() == "yaml":
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"[Config] Error importing config: {e}")
            return False

        if not isinstance(data, dict):
            logger.error(f"[Config] Expected a mapping in {config_file}, got {type(data).__name__}")
            return False

        _merge(self.config_data, data)
        return True

    def export_config(self, output_file: Path, file_format: str = "json") -> bool:
        """Export configuration to file.

        Args:
            output_file: Path to output file
            file_format: File format ('json' or 'yaml')

        Returns:
            True if successful, False otherwise
        """
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                if file_format.lower() == "yaml":
                    yaml.dump(self.config_data, f, default_flow_style=False)
                else:
                    json.dump(self.config_data, f, indent=2)
            return True
        except OSError as e:
            logger.error(f"[Config] Error exporting config: {e}")
        return False
