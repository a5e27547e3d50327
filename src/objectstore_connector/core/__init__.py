"""Core utilities and shared components for objectstore-connector."""

from .config import settings
from .exceptions import (
    ConnectionError,
    ConnectorError,
    OperationError,
    ValidationError,
)
from .observability import get_logger, get_tracer, operation_context

__all__ = [
    "settings",
    "ConnectionError",
    "ConnectorError",
    "OperationError",
    "ValidationError",
    "get_logger",
    "get_tracer",
    "operation_context",
]
