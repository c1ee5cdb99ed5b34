"""
Logging setup for the Diaryx backend.

Console output is JSON in production and colored in debug; everything under
the ``diaryx`` logger also goes to a rotating file in ``settings.log_dir``.
"""
import json
import logging
import logging.config
import sys
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import Settings, get_settings

# attributes every LogRecord has; anything else came in through extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'}

REQUEST_ID_HEADER = b'x-request-id'


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        extra = {k: v for k, v in vars(record).items() if k not in _RECORD_ATTRS}
        if extra:
            entry['extra'] = extra

        if record.exc_info:
            exc_type, exc, _ = record.exc_info
            entry['exception'] = {
                'type': exc_type.__name__ if exc_type else None,
                'message': str(exc) if exc else None,
                'traceback': self.formatException(record.exc_info),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Level-colored console output for local development."""

    LEVEL_COLORS = {
        'DEBUG': '36',
        'INFO': '32',
        'WARNING': '33',
        'ERROR': '31',
        'CRITICAL': '35',
    }

    def format(self, record: logging.LogRecord) -> str:
        # format a copy, the file handler shares this record
        colored = logging.makeLogRecord(vars(record))
        code = self.LEVEL_COLORS.get(record.levelname)
        if code:
            colored.levelname = f"\033[1;{code}m{record.levelname}\033[0m"
        colored.name = f"\033[90m{record.name}\033[0m"
        return super().format(colored)


def get_log_level(level_str: Optional[str] = None) -> int:
    """Numeric level for a name such as ``"debug"``, INFO when unknown."""
    name = (level_str or get_settings().log_level).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def build_logging_config(settings: Settings) -> Dict[str, Any]:
    """dictConfig payload for the given settings."""
    log_file = Path(settings.log_dir) / 'diaryx.log'
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'json': {'()': JSONFormatter},
            'colored': {
                '()': ColoredFormatter,
                'format': '%(asctime)s | %(levelname)s | %(name)s | %(message)s',
                'datefmt': '%H:%M:%S',
            },
            'file': {'format': settings.log_format},
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'stream': sys.stdout,
                'formatter': 'colored' if settings.debug else 'json',
                'level': get_log_level(settings.log_level),
            },
            'file': {
                'class': 'logging.handlers.RotatingFileHandler',
                'filename': str(log_file),
                'maxBytes': 10_000_000,
                'backupCount': 5,
                'encoding': 'utf-8',
                'formatter': 'file',
                'level': 'DEBUG',
            },
        },
        'loggers': {
            'diaryx': {'handlers': ['console', 'file'], 'level': 'DEBUG', 'propagate': False},
            'uvicorn': {'handlers': ['console'], 'level': 'INFO', 'propagate': False},
            'alembic': {'handlers': ['console', 'file'], 'level': 'INFO', 'propagate': False},
            # SQL noise only reaches the file, and only when it matters
            'sqlalchemy': {'handlers': ['file'], 'level': 'WARNING', 'propagate': False},
        },
    }


def setup_logging(settings: Optional[Settings] = None) -> None:
    """Apply the logging config, creating the log directory if needed."""
    settings = settings or get_settings()
    Path(settings.log_dir).mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(build_logging_config(settings))

    get_logger('logging').info("Logging configured", extra={
        'log_level': settings.log_level,
        'debug': settings.debug,
        'environment': settings.environment,
    })


def get_logger(name: str) -> logging.Logger:
    """Logger namespaced under ``diaryx``."""
    return logging.getLogger(f"diaryx.{name}")


class LoggingMiddleware:
    """ASGI middleware logging one line per request and response.

    Reuses an incoming ``x-request-id`` header or generates one, and echoes
    it on the response.
    """

    def __init__(self, app, logger_name: str = "http"):
        self.app = app
        self.logger = get_logger(logger_name)

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get('headers') or [])
        request_id = headers.get(REQUEST_ID_HEADER, b'').decode('latin-1') or uuid.uuid4().hex
        client = scope.get('client')
        context = {
            'request_id': request_id,
            'method': scope['method'],
            'path': scope['path'],
        }
        started = time.perf_counter()

        self.logger.info("HTTP Request", extra={
            **context,
            'client_ip': client[0] if client else 'unknown',
        })

        async def send_wrapper(message):
            if message["type"] == "http.response.start":
                message['headers'] = [*message.get('headers', []), (REQUEST_ID_HEADER, request_id.encode('latin-1'))]
                self.logger.info("HTTP Response", extra={
                    **context,
                    'status_code': message.get('status', 0),
                    'duration_ms': round((time.perf_counter() - started) * 1000, 2),
                })
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            self.logger.error("HTTP Request Failed", extra={
                **context,
                'duration_ms': round((time.perf_counter() - started) * 1000, 2),
                'exception_type': type(exc).__name__,
            })
            raise
