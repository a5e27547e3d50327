"""Exception hierarchy for objectstore-connector."""

from typing import Optional


class ConnectorError(Exception):
    """Base exception for all objectstore-connector errors."""

    pass


class ValidationError(ConnectorError):
    """Raised when validation fails."""

    pass


class ConnectionError(ConnectorError):
    """Raised when the storage client cannot be constructed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class OperationError(ConnectorError):
    """Raised when a forwarded storage operation fails.

    The original exception from the storage client is kept unchanged in
    ``cause`` so callers can inspect error codes without unwrapping chains.
    """

    def __init__(self, operation: str, cause: BaseException):
        super().__init__(f"{operation} failed: {cause}")
        self.operation = operation
        self.cause = cause
