"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the lambda handler's `__init__.py` file
before any other logging is done.

Every line written to stdout is one JSON document (CloudWatch parses these into
queryable fields). Fields passed through `extra=` are copied verbatim; `app` and
`env` are stamped on every line when APP_NAME is set:

{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "keyshortener.services.short_key_service",
    "message": "Short key collision, retrying with next attempt.",
    "app": "keyshortener",
    "env": "dev",
    "shortKey": "3fGh_0aZk9",
    "attempt": 0
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC
from typing import Any

from keyshortener.utils.config import app_env, app_name
from keyshortener.utils.constants import LOG_LEVEL_ENV


DEFAULT_LOG_LEVEL = 'INFO'

# Attributes every LogRecord carries; anything else on a record came from `extra=`
RESERVED_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', None, None))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Format records as single-line JSON, including `extra` fields

    Args:
        static_fields (dict | None):
            Fields added to every line, e.g. `{'app': 'keyshortener', 'env': 'dev'}`.
            Per-record `extra` fields with the same name take precedence.
    """

    def __init__(self, static_fields: dict[str, Any] | None = None):
        super().__init__()
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            **self.static_fields,
        }

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        log.update((key, value) for key, value in vars(record).items() if key not in RESERVED_ATTRS)

        return json.dumps(log, default=str)


def _log_level() -> tuple[str, str | None]:
    """Return (level, rejected LOG_LEVEL value or None)"""
    requested = os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    if requested in logging.getLevelNamesMapping():
        return requested, None
    return DEFAULT_LOG_LEVEL, requested


def initialize_logging() -> None:
    """Route all records to stdout as JSON

    An unknown LOG_LEVEL falls back to INFO and is reported once as a warning.
    """
    level, rejected = _log_level()
    static_fields = {'app': app_name(), 'env': app_env()} if app_name() else {}

    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                    'static_fields': static_fields,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': level,
                'handlers': ['stdout'],
            },
        }
    )

    if rejected is not None:
        logging.getLogger(__name__).warning(
            'Unknown log level, using the default.',
            extra={'logLevel': rejected, 'defaultLogLevel': DEFAULT_LOG_LEVEL},
        )
