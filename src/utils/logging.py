"""JSON log output for the account service.

Every record becomes one JSON object. Context passed through
``extra={...}`` is flattened into it, except credential-bearing keys,
whose values are replaced before anything reaches the stream.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Union

REDACTED = "[REDACTED]"
REDACTED_KEYS = frozenset({
    'password', 'password_hash', 'passwordhash',
    'token', 'activation_token', 'activationtoken',
    'session_token', 'sessiontoken', 'authorization',
})

# Attributes every LogRecord has; anything else on a record came from extra=
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'taskName'}

# Libraries that log every outbound request or connection event at INFO
_CHATTY_LOGGERS = ("httpx", "httpcore", "pymongo")


def _is_secret(key: str) -> bool:
    return key.lower() in REDACTED_KEYS


class JSONFormatter(logging.Formatter):
    """Render records as single-line JSON with redacted credentials."""

    def __init__(self, service: str | None = None):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace('+00:00', 'Z'),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if self.service:
            entry["service"] = self.service

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        for key, value in vars(record).items():
            if key in _RECORD_ATTRS or key in entry or callable(value):
                continue
            entry[key] = REDACTED if _is_secret(key) else value

        return json.dumps(entry, default=str)


def setup_structured_logging(level: Union[int, str] = logging.INFO, service: str | None = None):
    """Route the root logger and uvicorn's access log through JSONFormatter.

    ``level`` accepts a logging constant or a name such as ``"DEBUG"``.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter(service=service))
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    # Access lines only for failed requests
    uvicorn_access = logging.getLogger("uvicorn.access")
    uvicorn_access.handlers = [handler]
    uvicorn_access.propagate = False
    uvicorn_access.setLevel(logging.WARNING)

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
