"""Logger implementation on top of the standard library ``logging`` module"""

import copy
import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Final, Optional, Tuple

from oid4vp_frontend.port.output import Logger, LoggerConfig, LogLevel, LogType
from oid4vp_frontend.port.output.logger import Metadata

_STDLIB_LEVELS: Final[Dict[LogLevel, int]] = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
}

SENSITIVE_KEYS: Final[Tuple[str, ...]] = (
    "password",
    "token",
    "secret",
    "key",
    "auth",
    "credential",
    "api_key",
    "apikey",
    "authorization",
    "session",
    "cookie",
    "jwk",
)
REDACTED: Final[str] = "[REDACTED]"
SECRET_DISABLED_NOTICE: Final[str] = "[REDACTED - Secret logging disabled]"

_CONTROL_CHARS: Final[re.Pattern[str]] = re.compile(r"[\x00-\x1f\x7f]")


def redact(obj: Dict[str, Any]) -> Dict[str, Any]:
    """Replace values whose key names look sensitive, recursing into dicts"""
    redacted: Dict[str, Any] = {}
    for key, value in obj.items():
        lowered = str(key).lower()
        if any(sensitive in lowered for sensitive in SENSITIVE_KEYS):
            redacted[key] = REDACTED
        elif isinstance(value, dict):
            redacted[key] = redact(value)
        else:
            redacted[key] = value
    return redacted


def strip_control_chars(message: str) -> str:
    # newlines included: one record, one line
    return _CONTROL_CHARS.sub(" ", message)


class DefaultLogger(Logger):
    """
    Logger writing formatted lines to ``logging.getLogger(config.name)``.

    Line format: ``[timestamp] [LEVEL] [service] message | {metadata}``.
    Handlers, sinks and formatters of the stdlib logger are left to the
    application.
    """

    def __init__(self, config: Optional[LoggerConfig] = None):
        self._config = config or LoggerConfig()
        self._logger = logging.getLogger(self._config.name)

    @property
    def config(self) -> LoggerConfig:
        return self._config

    def update_config(self, **changes: Any) -> None:
        self._config = self._config.model_copy(update=changes)
        self._logger = logging.getLogger(self._config.name)

    def log(self, level: LogLevel, log_type: LogType, service: str, message: str, metadata: Metadata = None) -> None:
        if not self.is_level_enabled(level) or not self.is_type_enabled(log_type):
            return

        message, metadata = self._sanitize(log_type, message, metadata)
        line = self._format(level, service, message, metadata)
        self._logger.log(
            _STDLIB_LEVELS[level],
            line,
            extra={"service": service, "log_type": log_type.value},
        )

    def _sanitize(self, log_type: LogType, message: str, metadata: Metadata) -> Tuple[str, Metadata]:
        if log_type is LogType.SECRET and not self._config.secret_logging:
            return SECRET_DISABLED_NOTICE, None

        message = strip_control_chars(message)
        if metadata and log_type in (LogType.SECRET, LogType.SECURITY):
            metadata = copy.deepcopy(metadata)
            context = metadata.get("context")
            if isinstance(context, dict):
                metadata["context"] = redact(context)
        return message, metadata

    def _format(self, level: LogLevel, service: str, message: str, metadata: Metadata) -> str:
        parts = []
        if self._config.include_timestamp:
            timestamp = (metadata or {}).get("timestamp") or datetime.now(timezone.utc).isoformat()
            parts.append(f"[{timestamp}]")
        parts.append(f"[{level.value.upper()}]")
        parts.append(f"[{service}]")
        parts.append(message)
        line = " ".join(parts)

        if self._config.include_metadata and metadata:
            extra = {k: v for k, v in metadata.items() if k != "timestamp"}
            if extra:
                line += f" | {json.dumps(extra, default=str, ensure_ascii=False)}"
        return line


# ======================
# Factory Functions
# ======================

PRODUCTION_LOGGER_CONFIG: Final[LoggerConfig] = LoggerConfig(
    min_level=LogLevel.WARN,
    secret_logging=False,
    performance_logging=False,
    include_metadata=False,
)

DEVELOPMENT_LOGGER_CONFIG: Final[LoggerConfig] = LoggerConfig(
    min_level=LogLevel.DEBUG,
    secret_logging=True,
)


def create_logger(**overrides: Any) -> DefaultLogger:
    """Create a logger from the defaults plus ``overrides`` (LoggerConfig fields)"""
    return DefaultLogger(LoggerConfig(**overrides))


def create_production_logger() -> DefaultLogger:
    return DefaultLogger(PRODUCTION_LOGGER_CONFIG)


def create_development_logger() -> DefaultLogger:
    return DefaultLogger(DEVELOPMENT_LOGGER_CONFIG)
