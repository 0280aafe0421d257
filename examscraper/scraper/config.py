"""
Centralized configuration handler for the FreeCram scraper.

This module loads the JSON settings file, merges it over the built-in
defaults and exposes typed accessors so the scraping stages never index into
raw dictionaries themselves.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from examscraper.constants import (
    BROWSER_ARGS, DEFAULT_PATHS, DEFAULT_URL, SCRAPING_DELAY_MS, TIMEOUTS,
    USER_AGENT, WINDOW_SIZES
)

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

DEFAULT_SETTINGS: Dict[str, Any] = {
    'scraper': {
        'default_url': DEFAULT_URL,
        'user_agent': USER_AGENT,
        'delay_ms': SCRAPING_DELAY_MS,
        'headless': True,
        'timeouts': dict(TIMEOUTS),
        'browser_args': list(BROWSER_ARGS),
        'listing_window': dict(WINDOW_SIZES['listing']),
        'detail_window': dict(WINDOW_SIZES['detail'])
    },
    'storage': {
        'output_dir': DEFAULT_PATHS['output_dir'],
        'links_file': DEFAULT_PATHS['links_file'],
        'qa_file': DEFAULT_PATHS['qa_file'],
        'export_csv': True
    },
    'logging': {
        'level': 'INFO',
        'file': DEFAULT_PATHS['log_file'],
        'max_size': 10485760,
        'backup_count': 5
    }
}


class ConfigError(Exception):
    """Raised when the settings file cannot be read or parsed."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ScraperConfig:
    """
    Settings for a scraping run.

    Wraps the merged settings dictionary and provides accessors for the
    values the link extractor, the deep fetcher and the CLI need.
    """

    def __init__(self, settings: Optional[Dict[str, Any]] = None):
        """
        Initialize the configuration handler.

        Args:
            settings: Partial settings dictionary merged over DEFAULT_SETTINGS
        """
        self.logger = logging.getLogger(__name__)
        self.settings = _deep_merge(DEFAULT_SETTINGS, settings or {})

    @classmethod
    def from_file(cls, config_path: str) -> 'ScraperConfig':
        """
        Load configuration from a JSON settings file.

        Raises:
            ConfigError: If the file doesn't exist or is not valid JSON
        """
        path = Path(config_path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                settings = json.load(f)
        except FileNotFoundError as e:
            raise ConfigError(f"Configuration file {config_path} not found!") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Error parsing configuration file {config_path}: {e}") from e

        if not isinstance(settings, dict):
            raise ConfigError(f"Configuration file {config_path} must contain a JSON object")

        config = cls(settings)
        config.logger.debug(f"Loaded settings from {config_path}")
        return config

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'ScraperConfig':
        """Load an explicit settings file, else the default one if present, else defaults."""
        if config_path:
            return cls.from_file(config_path)
        if Path(DEFAULT_PATHS['config_file']).exists():
            return cls.from_file(DEFAULT_PATHS['config_file'])
        return cls()

    @property
    def scraper(self) -> Dict[str, Any]:
        return self.settings['scraper']

    @property
    def storage(self) -> Dict[str, Any]:
        return self.settings['storage']

    @property
    def logging_settings(self) -> Dict[str, Any]:
        return self.settings['logging']

    @property
    def default_url(self) -> str:
        return self.scraper['default_url']

    @property
    def user_agent(self) -> str:
        return self.scraper['user_agent']

    @property
    def delay_seconds(self) -> float:
        return self.scraper['delay_ms'] / 1000

    @property
    def headless(self) -> bool:
        return bool(self.scraper['headless'])

    @property
    def browser_args(self) -> List[str]:
        return list(self.scraper['browser_args'])

    def timeout(self, name: str) -> int:
        """Timeout in milliseconds for the named wait."""
        return int(self.scraper['timeouts'][name])

    def window(self, stage: str) -> Dict[str, int]:
        """Viewport for 'listing' or 'detail' pages."""
        return dict(self.scraper[f'{stage}_window'])

    def output_path(self, filename: str) -> Path:
        """Resolve a filename against the output directory, leaving absolute paths alone."""
        path = Path(filename)
        if path.is_absolute():
            return path
        return Path(self.storage['output_dir']) / path

    def validate(self) -> List[str]:
        """
        Validate the loaded settings for common issues.

        Returns:
            List of problems found; empty when the configuration is usable
        """
        problems = []

        delay = self.scraper.get('delay_ms')
        if not isinstance(delay, (int, float)) or delay < 0:
            problems.append(f"delay_ms must be a non-negative number (got {delay!r})")

        for name, value in self.scraper.get('timeouts', {}).items():
            if not isinstance(value, (int, float)) or value <= 0:
                problems.append(f"timeouts.{name} must be a positive number (got {value!r})")

        level = str(self.logging_settings.get('level', '')).upper()
        if level not in LOG_LEVELS:
            problems.append(f"Unknown logging level: {self.logging_settings.get('level')!r}")

        if not self.default_url:
            problems.append("default_url must not be empty")

        for problem in problems:
            self.logger.error(f"Invalid configuration: {problem}")

        return problems
