"""Utility functions for application configuration management.

Configuration is a YAML document per environment (`APP_ENV`), stored under
`<project root>/config/<app env>.yml`, or at the path given by the
`SHORTLINK_CONFIG` environment variable. The document follows this structure:

    base_url: http://localhost:8081
    active_backend: redis
    configs:
      redis:
        host: localhost
        port: 6379
        db: 0
      memory: {}

`load_config()` returns the section of the active backend only, plus the
public base URL:

    {
        "base_url": "http://localhost:8081",
        "active_backend": "redis",
        "redis": {"host": "localhost", "port": 6379, "db": 0}
    }

A missing file is not an error: the in-memory backend and the default base
URL are used. `BASE_URL` overrides the document's base URL.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the project root directory, using `PROJECT_ROOT` when available.

    config_path() -> Path
        Return the path of the configuration document for the current environment.

    load_config(path: Path | str | None = None) -> AppConfig
        Load and validate the configuration document.

Example:
    >>> from shortlink.utils.config import load_config
    >>> config = load_config()
    >>> config['active_backend']
    'memory'
"""

import os
import logging
from pathlib import Path

import yaml

from shortlink.types import AppConfig
from shortlink.constants import ENV, Backend, Defaults
from shortlink.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def app_prefix() -> str | None:
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def config_path() -> Path:
    explicit = os.environ.get(ENV.App.CONFIG_PATH)
    if explicit:
        return Path(explicit)
    return project_root() / 'config' / f'{app_env()}.yml'


def load_config(path: Path | str | None = None) -> AppConfig:
    """Load the configuration of the active data store backend

    Args:
        path (Path | str | None):
            Configuration document to read. Defaults to config_path().

    Returns:
        AppConfig:
            `base_url`, `active_backend` and the active backend's own section
            (keyed by the backend's name).

    Raises:
        BadConfigurationError:
            If the document is not valid YAML, is not a mapping, or names an
            unsupported backend.

    Example:
        >>> load_config('config/local.yml')
        {'base_url': 'http://localhost:8081', 'active_backend': 'memory', 'memory': {}}
    """
    path = Path(path) if path is not None else config_path()

    try:
        with open(path, encoding='utf-8') as f:
            document = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.debug('No configuration document found, using defaults.', extra={'configPath': str(path)})
        document = {}
    except yaml.YAMLError as e:
        raise BadConfigurationError(f'Malformed configuration document {path}.') from e

    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration document {path} must be a mapping.')

    backend = document.get('active_backend', Defaults.BACKEND)
    if backend not in set(Backend):
        raise BadConfigurationError(f"Unsupported backend '{backend}' (supported: {', '.join(Backend)}).")

    backend_config = (document.get('configs') or {}).get(backend) or {}
    if not isinstance(backend_config, dict):
        raise BadConfigurationError(f"Configuration of backend '{backend}' must be a mapping.")

    base_url = os.environ.get(ENV.App.BASE_URL) or document.get('base_url') or Defaults.BASE_URL

    logger.debug('Loaded configuration.', extra={'configPath': str(path), 'backend': str(backend)})
    return {
        'base_url': base_url,
        'active_backend': str(backend),
        str(backend): backend_config,
    }
