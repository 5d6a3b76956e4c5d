"""
Configuration management for pom-modules.

Handles loading and managing configuration from files, environment variables,
and command-line options.
"""

from __future__ import annotations

import logging
import os
import yaml
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class PomModulesConfig:
    """Main configuration for pom-modules."""

    # Encoding used to read POM files (output is always UTF-8)
    encoding: str = "utf-8"

    # Print a unified diff after every insertion
    show_diff: bool = False

    # Keep pom.xml.bak next to every modified POM
    backup: bool = False

    log_level: str = "WARNING"


def _parse_bool(value: str) -> bool:
    return value.lower() in ('true', '1', 'yes', 'on')


class ConfigManager:
    """Manages pom-modules configuration from multiple sources."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / '.pom-modules'
        self.config_file = self.config_dir / 'config.yaml'
        self._config: Optional[PomModulesConfig] = None

    def load_config(self) -> PomModulesConfig:
        """Load configuration from all sources."""
        if self._config:
            return self._config

        # Start with defaults
        config = PomModulesConfig()

        if self.config_file.exists():
            config = self._merge_configs(config, self._load_from_file())

        # Environment wins over the file
        config = self._merge_configs(config, self._load_from_env())

        self._config = config
        return config

    def _load_from_file(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Could not load config file %s: %s", self.config_file, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring config file %s: expected a mapping", self.config_file)
            return {}
        return data

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        encoding = os.getenv('POM_MODULES_ENCODING')
        if encoding:
            env_config['encoding'] = encoding

        log_level = os.getenv('POM_MODULES_LOG_LEVEL')
        if log_level:
            env_config['log_level'] = log_level

        for flag in ('show_diff', 'backup'):
            value = os.getenv(f'POM_MODULES_{flag.upper()}')
            if value:
                env_config[flag] = _parse_bool(value)

        return env_config

    def _merge_configs(self, base: PomModulesConfig, override: Dict[str, Any]) -> PomModulesConfig:
        """Apply known keys from ``override`` onto ``base``."""
        if 'encoding' in override:
            base.encoding = str(override['encoding'])

        for flag in ('show_diff', 'backup'):
            if flag in override:
                value = override[flag]
                setattr(base, flag, _parse_bool(value) if isinstance(value, str) else bool(value))

        if 'log_level' in override:
            level = str(override['log_level']).upper()
            if level in LOG_LEVELS:
                base.log_level = level
            else:
                logger.warning("Ignoring unknown log level %r", override['log_level'])

        return base

    def save_config(self, config: PomModulesConfig) -> None:
        """Save configuration to file."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(asdict(config), f, default_flow_style=False, indent=2)
        self._config = config

    def create_default_config(self) -> Path:
        """Create a default configuration file."""
        self.save_config(PomModulesConfig())
        logger.info("Created default configuration at %s", self.config_file)
        return self.config_file

    def get_config_info(self) -> Dict[str, Any]:
        """Get information about current configuration."""
        config = self.load_config()

        return {
            'config_file': str(self.config_file),
            'config_exists': self.config_file.exists(),
            'encoding': config.encoding,
            'show_diff': config.show_diff,
            'backup': config.backup,
            'log_level': config.log_level,
        }


# Global config manager instance
_config_manager: Optional[ConfigManager] = None

def get_config_manager() -> ConfigManager:
    """Get the global config manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager

def load_config() -> PomModulesConfig:
    """Load the current configuration."""
    return get_config_manager().load_config()
