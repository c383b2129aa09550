"""Utility functions for application configuration management.

This module provides a standardized interface for Lambda functions to
access configuration data stored in **AWS AppConfig**. Each environment
(`APP_ENV`) has a dedicated AppConfig *Environment* within the shared
AppConfig *Application* identified by `APP_NAME`. Configuration data is
stored as a JSON document under a configuration profile and deployed to
the corresponding environment.

The configuration JSON follows this structure:

    {
        "build": 42,
        "active_backend": "redis",
        "configs": {
            "shorten_url": {
                "redis": { "host": "...", "port": 6379, "db": 0 },
                "sql": { "url": "postgresql+psycopg://...", "table_name": "short_urls" }
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own section (e.g., `"shorten_url"`) for the active
key store backend only.

When running locally (SAM, tests, a developer shell) or when the AppConfig
identifiers are not set, the same structure is built from environment
variables instead:

    KEY_STORE_BACKEND   – 'memory' (default), 'redis' or 'sql'
    REDIS_HOST          – default 'localhost'
    REDIS_PORT          – default 6379
    REDIS_DB            – default 0
    REDIS_USERNAME      – optional
    REDIS_PASSWORD      – optional
    DATABASE_URL        – required for the 'sql' backend
    TABLE_NAME          – default 'short_urls'

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    max_allocation_attempts() -> int
        Return the allocation attempt ceiling (`MAX_ALLOCATION_ATTEMPTS`).

    load_config(lambda_name: str) -> dict
        Load the key store configuration for a given Lambda.

Example:
    Typical usage inside a Lambda handler:

        >>> from keyshortener.utils.config import load_config
        >>> config = load_config('shorten_url')
        >>> config
        {'redis': {'host': 'redis.internal', 'port': 6379, 'db': 0}}
"""

import os
import json
import functools
import logging
from collections.abc import Callable

import boto3

from keyshortener.exceptions import BadConfigurationError
from keyshortener.types import AppConfigDataClient
from keyshortener.utils.helpers import require_environment, running_locally
from keyshortener.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    APPCONFIG_APP_ID_ENV,
    APPCONFIG_ENV_ID_ENV,
    APPCONFIG_PROFILE_ID_ENV,
    DATABASE_URL_ENV,
    DEFAULT_MAX_ALLOCATION_ATTEMPTS,
    DEFAULT_TABLE_NAME,
    KEY_STORE_BACKEND_ENV,
    KEY_STORE_BACKENDS,
    MAX_ALLOCATION_ATTEMPTS_ENV,
    MEMORY_BACKEND,
    REDIS_BACKEND,
    REDIS_DB_ENV,
    REDIS_HOST_ENV,
    REDIS_PASSWORD_ENV,
    REDIS_PORT_ENV,
    REDIS_USERNAME_ENV,
    SQL_BACKEND,
    TABLE_NAME_ENV,
)


logger = logging.getLogger(__name__)

APPCONFIG_ENVS = (APPCONFIG_APP_ID_ENV, APPCONFIG_ENV_ID_ENV, APPCONFIG_PROFILE_ID_ENV)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(APP_ENV_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(APP_NAME_ENV)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'keyshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'keyshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def max_allocation_attempts() -> int:
    """Return the maximum number of derivation attempts per allocation

    Raises:
        BadConfigurationError:
            If `MAX_ALLOCATION_ATTEMPTS` is not a positive integer.
    """
    raw = os.environ.get(MAX_ALLOCATION_ATTEMPTS_ENV)
    if not raw:
        return DEFAULT_MAX_ALLOCATION_ATTEMPTS
    try:
        value = int(raw)
    except ValueError as e:
        raise BadConfigurationError(f"{MAX_ALLOCATION_ATTEMPTS_ENV} must be an integer (given value: '{raw}').") from e
    if value < 1:
        raise BadConfigurationError(f'{MAX_ALLOCATION_ATTEMPTS_ENV} must be a positive integer (given value: {value}).')
    return value


def _validate_backend(backend: str) -> str:
    if backend not in KEY_STORE_BACKENDS:
        supported = ', '.join(sorted(KEY_STORE_BACKENDS))
        raise BadConfigurationError(f"Unsupported key store backend '{backend}' (supported: {supported}).")
    return backend


def environment_config() -> dict:
    """Build the key store configuration from environment variables

    Returns:
        dict: `{<backend>: {... backend-specific config ...}}`

    Raises:
        BadConfigurationError:
            If the backend is unknown, a numeric value is malformed
            or `DATABASE_URL` is missing for the 'sql' backend.
    """
    backend = _validate_backend(os.environ.get(KEY_STORE_BACKEND_ENV, MEMORY_BACKEND).lower())

    if backend == REDIS_BACKEND:
        try:
            config = {
                'host': os.environ.get(REDIS_HOST_ENV, 'localhost'),
                'port': int(os.environ.get(REDIS_PORT_ENV, 6379)),
                'db': int(os.environ.get(REDIS_DB_ENV, 0)),
            }
        except ValueError as e:
            raise BadConfigurationError(f'{REDIS_PORT_ENV} and {REDIS_DB_ENV} must be integers.') from e
        if os.environ.get(REDIS_USERNAME_ENV):
            config['username'] = os.environ[REDIS_USERNAME_ENV]
        if os.environ.get(REDIS_PASSWORD_ENV):
            config['password'] = os.environ[REDIS_PASSWORD_ENV]
    elif backend == SQL_BACKEND:
        if not os.environ.get(DATABASE_URL_ENV):
            raise BadConfigurationError(f"Missing '{DATABASE_URL_ENV}' for the '{SQL_BACKEND}' key store backend.")
        config = {
            'url': os.environ[DATABASE_URL_ENV],
            'table_name': os.environ.get(TABLE_NAME_ENV, DEFAULT_TABLE_NAME),
        }
    else:
        config = {}

    return {backend: config}


def _environment_fallback(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: build configuration from environment variables outside of AWS

    Behavior:
        - If the application is running locally, or any of the AppConfig
          identifiers is missing, return `environment_config()`.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> dict:
        if running_locally() or not all(os.environ.get(name) for name in APPCONFIG_ENVS):
            data = environment_config()
            logger.debug('Loaded config from environment.', extra={'lambdaName': lambda_name, 'backend': next(iter(data))})
            return data
        return func(lambda_name, *args, **kwargs)

    return wrapper


@_environment_fallback
@require_environment(*APPCONFIG_ENVS)
def load_config(lambda_name: str) -> dict:
    """Load configuration for a given Lambda from AWS AppConfig

    Fetches the AppConfig JSON once and returns the section relevant
    to the requested Lambda function (e.g., 'shorten_url', 'redirect_url').

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: `{<active backend>: {... backend-specific config ...}}`

    Raises:
        BadConfigurationError:
            If the document names an unsupported backend.
        KeyError:
            If the document has no section for the lambda or backend.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig: AppConfigDataClient = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[APPCONFIG_APP_ID_ENV],
        EnvironmentIdentifier=os.environ[APPCONFIG_ENV_ID_ENV],
        ConfigurationProfileIdentifier=os.environ[APPCONFIG_PROFILE_ID_ENV],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config = json.loads(content.decode('utf-8'))

    # Extract the active backend config for this lambda
    backend = _validate_backend(config['active_backend'])
    data = {backend: config['configs'][lambda_name][backend]}
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': config.get('build')})
    return data
