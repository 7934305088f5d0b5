"""Logger port - Structured, typed logging for the services"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Final, Optional

from pydantic import BaseModel, ConfigDict, Field


class LogLevel(str, Enum):
    DEBUG: Final[str] = "debug"
    INFO: Final[str] = "info"
    WARN: Final[str] = "warn"
    ERROR: Final[str] = "error"
    FATAL: Final[str] = "fatal"

    def __str__(self) -> str:
        return self.value


class LogType(str, Enum):
    """Category of a log record; each category can be switched off"""

    PROCESS: Final[str] = "process"
    SECRET: Final[str] = "secret"
    SECURITY: Final[str] = "security"
    PERFORMANCE: Final[str] = "performance"
    AUDIT: Final[str] = "audit"

    def __str__(self) -> str:
        return self.value


LOG_LEVEL_PRIORITY: Final[Dict[LogLevel, int]] = {
    LogLevel.DEBUG: 10,
    LogLevel.INFO: 20,
    LogLevel.WARN: 30,
    LogLevel.ERROR: 40,
    LogLevel.FATAL: 50,
}


class LoggerConfig(BaseModel):
    """
    Logger configuration.

    Attributes:
        min_level: Records below this level are dropped
        process_logging: Enable PROCESS records (debug/info/warn/error/fatal)
        secret_logging: Log SECRET records verbatim instead of a redaction notice
        security_logging: Enable SECURITY records
        performance_logging: Enable PERFORMANCE records
        audit_logging: Enable AUDIT records
        include_timestamp: Prefix each line with an ISO-8601 timestamp
        include_metadata: Append metadata as JSON
        name: Name of the underlying ``logging`` logger
    """

    model_config = ConfigDict(frozen=True)

    min_level: LogLevel = LogLevel.INFO
    process_logging: bool = True
    secret_logging: bool = False
    security_logging: bool = True
    performance_logging: bool = True
    audit_logging: bool = True
    include_timestamp: bool = True
    include_metadata: bool = True
    name: str = Field(default="oid4vp_frontend", min_length=1)


Metadata = Optional[Dict[str, Any]]


class Logger(ABC):
    """
    Logger used by the services.

    Metadata is a free-form mapping; the well-known keys are ``request_id``,
    ``session_id``, ``context``, ``performance`` and ``error``.
    """

    @property
    @abstractmethod
    def config(self) -> LoggerConfig:
        pass

    @abstractmethod
    def log(self, level: LogLevel, log_type: LogType, service: str, message: str, metadata: Metadata = None) -> None:
        pass

    def debug(self, service: str, message: str, metadata: Metadata = None) -> None:
        self.log(LogLevel.DEBUG, LogType.PROCESS, service, message, metadata)

    def info(self, service: str, message: str, metadata: Metadata = None) -> None:
        self.log(LogLevel.INFO, LogType.PROCESS, service, message, metadata)

    def warn(self, service: str, message: str, metadata: Metadata = None) -> None:
        self.log(LogLevel.WARN, LogType.PROCESS, service, message, metadata)

    def error(self, service: str, message: str, metadata: Metadata = None) -> None:
        self.log(LogLevel.ERROR, LogType.PROCESS, service, message, metadata)

    def fatal(self, service: str, message: str, metadata: Metadata = None) -> None:
        self.log(LogLevel.FATAL, LogType.PROCESS, service, message, metadata)

    def log_security(self, level: LogLevel, service: str, message: str, metadata: Metadata = None) -> None:
        self.log(level, LogType.SECURITY, service, message, metadata)

    def log_audit(self, service: str, action: str, metadata: Metadata = None) -> None:
        self.log(LogLevel.INFO, LogType.AUDIT, service, action, metadata)

    def log_performance(self, service: str, message: str, metadata: Metadata = None) -> None:
        self.log(LogLevel.INFO, LogType.PERFORMANCE, service, message, metadata)

    def log_secret(self, level: LogLevel, service: str, message: str, metadata: Metadata = None) -> None:
        self.log(level, LogType.SECRET, service, message, metadata)

    def is_level_enabled(self, level: LogLevel) -> bool:
        return LOG_LEVEL_PRIORITY[level] >= LOG_LEVEL_PRIORITY[self.config.min_level]

    def is_type_enabled(self, log_type: LogType) -> bool:
        if log_type is LogType.PROCESS:
            return self.config.process_logging
        if log_type is LogType.SECRET:
            # always emitted; the adapter redacts unless secret_logging is on
            return True
        if log_type is LogType.SECURITY:
            return self.config.security_logging
        if log_type is LogType.PERFORMANCE:
            return self.config.performance_logging
        return self.config.audit_logging


class NullLogger(Logger):
    """Discards everything; used when no logger is wired"""

    def __init__(self) -> None:
        self._config = LoggerConfig()

    @property
    def config(self) -> LoggerConfig:
        return self._config

    def log(self, level: LogLevel, log_type: LogType, service: str, message: str, metadata: Metadata = None) -> None:
        pass
