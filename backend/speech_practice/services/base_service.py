"""
Base Service
Shared logger setup and the result object returned by session operations.
"""
import logging
from abc import ABC, abstractmethod


class BaseService(ABC):
    """Base for services that log under `service.<name>`."""

    def __init__(self):
        self.logger = logging.getLogger(f"service.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    def log_event(self, event: str, **context) -> None:
        """Info line: `[name] event key=value ...`"""
        details = " ".join(f"{key}={value}" for key, value in context.items())
        self.logger.info(f"[{self.name}] {event} {details}".rstrip())

    def log_error(self, error: Exception, **context) -> None:
        details = " ".join(f"{key}={value}" for key, value in context.items())
        self.logger.error(f"[{self.name}] {error} {details}".rstrip(), exc_info=True)


class ServiceResult:
    """
    Outcome of a session operation.
    Failures carry an error message and may still carry data (e.g. an
    unsaved summary).
    """

    def __init__(self, success: bool, data: dict | None = None, error: str | None = None):
        self.success = success
        self.data = data or {}
        self.error = error

    @classmethod
    def success_result(cls, data: dict) -> "ServiceResult":
        return cls(success=True, data=data)

    @classmethod
    def error_result(cls, error: str, data: dict | None = None) -> "ServiceResult":
        return cls(success=False, data=data, error=error)
