"""
Configuration management for Tiddlyroam.

This module handles loading and accessing configuration values from a YAML
file. Configuration is passed explicitly to the components that need it;
nothing reads settings from process-wide state.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging


class ConfigManager:
    """
    Manages configuration loading and access for Tiddlyroam.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file, or None for defaults
        """
        self.config_path = Path(config_path) if config_path is not None else None
        self._config: Dict[str, Any] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if self.config_path is None:
            self._config = self._get_default_config()
            return

        try:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}

            if not isinstance(loaded, dict):
                raise ValueError(f"Configuration must be a mapping: {self.config_path}")

            self._config = self._merge(self._get_default_config(), loaded)
            logging.info(f"Configuration loaded from {self.config_path}")

        except (OSError, ValueError, yaml.YAMLError) as e:
            logging.error(f"Failed to load configuration: {e}")
            # Fall back to default configuration
            self._config = self._get_default_config()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values as fallback."""
        return {
            "git": {
                "repository_root": ".",
                "timeout": 10.0
            },
            "database": {
                "filename": "org-roam.db"
            },
            "export": {
                "file_extension": "tid",
                "headline_offset": 0
            },
            "paths": {
                "log_file": None
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def _merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Overlay loaded values on the defaults, section by section."""
        merged = dict(base)
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(merged.get(key), dict):
                merged[key] = self._merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "git.timeout")
            default: Default value if key is not found

        Returns:
            The configuration value

        Examples:
            config.get("export.file_extension")  # Returns "tid"
        """
        keys = key_path.split('.')
        value = self._config

        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """
        Override a configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration value
            value: New value
        """
        keys = key_path.split('.')
        section = self._config

        for key in keys[:-1]:
            if not isinstance(section.get(key), dict):
                section[key] = {}
            section = section[key]

        section[keys[-1]] = value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get an entire configuration section.

        Args:
            section: Name of the configuration section

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    # Convenience properties for commonly used values

    @property
    def repository_root(self) -> str:
        """Get the repository searched for document history."""
        return self.get("git.repository_root", ".")

    @property
    def git_timeout(self) -> Optional[float]:
        """Get the git invocation timeout in seconds."""
        return self.get("git.timeout", 10.0)

    @property
    def database_filename(self) -> str:
        """Get link graph database filename."""
        return self.get("database.filename", "org-roam.db")

    @property
    def file_extension(self) -> str:
        """Get exported file extension, without a leading dot."""
        return str(self.get("export.file_extension", "tid")).lstrip('.')

    @property
    def headline_offset(self) -> int:
        """Get the offset added to relative headline levels."""
        return int(self.get("export.headline_offset", 0))

    @property
    def log_filename(self) -> Optional[str]:
        """Get log file name."""
        return self.get("paths.log_file")
