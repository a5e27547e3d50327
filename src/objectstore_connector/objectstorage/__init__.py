"""Object storage client construction and operation forwarding."""

from .clients import ClientHandle, S3ClientManager
from .forwarder import CallShape, OperationForwarder, OperationSpec
from .operations import OPERATIONS, OPERATIONS_BY_NAME

__all__ = [
    "CallShape",
    "ClientHandle",
    "OPERATIONS",
    "OPERATIONS_BY_NAME",
    "OperationForwarder",
    "OperationSpec",
    "S3ClientManager",
]
