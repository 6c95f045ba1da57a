"""
Logging configuration for applications embedding table_filtering.

The library itself only creates module loggers under "table_filtering";
call configure_logging() once at application start-up.

Environment variables:
    LOG_LEVEL                 - root level (default: INFO)
    LOG_FORMAT                - "text" (default) or "json"
    TABLE_FILTERING_LOG_LEVEL - level of the table_filtering loggers only,
                                e.g. DEBUG to trace every filter/sort mutation
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

PACKAGE_LOGGER = 'table_filtering'

# Request logging from the demo service's dev server
_QUIET_LOGGERS = ['werkzeug']


class JSONFormatter(logging.Formatter):
    """Single-line JSON formatter; carries the filter scope when a record has one."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        scope = getattr(record, 'scope', None)
        if scope is not None:
            entry['scope'] = scope
        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _level(name: Optional[str], default: int) -> int:
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else default


def configure_logging():
    """Install a single stderr handler on the root logger, replacing any existing ones."""
    level = _level(os.getenv('LOG_LEVEL'), logging.INFO)
    log_format = os.getenv('LOG_FORMAT', 'text').lower()

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    if log_format == 'json':
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            '[%(asctime)s] %(levelname)s %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
    root.addHandler(handler)

    # NOTSET defers to the root level
    package_level = _level(os.getenv('TABLE_FILTERING_LOG_LEVEL'), logging.NOTSET)
    logging.getLogger(PACKAGE_LOGGER).setLevel(package_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
