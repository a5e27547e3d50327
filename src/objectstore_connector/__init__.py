"""Object storage connector for data-access frameworks.

This package exposes the operations of an S3-compatible object storage
client (buckets, objects, presigned URLs, policies, notifications) as one
uniform table of ``async`` callables that a host framework can mix into its
models alongside other data sources.

Key Features:
    - Single shared client per connector, built lazily and at most once
    - One calling convention for request/response, streaming and local calls
    - Failures surface as ``OperationError`` with the original cause attached
    - Works with AWS S3, MinIO and other S3-compatible services

Recommended Usage:

    >>> from objectstore_connector import ObjectStorageConnector
    >>> connector = ObjectStorageConnector(
    ...     {"endPoint": "localhost", "port": 9000, "useSSL": False,
    ...      "accessKey": "minioadmin", "secretKey": "minioadmin"}
    ... )
    >>> await connector.connect()
    >>> await connector.operations["make_bucket"]("photos")
    >>> objects = await connector.invoke("list_objects", "photos", "", True)
"""

__version__ = "0.1.0"

from .connector import ConnectorState, ObjectStorageConnector, mixin
from .core.exceptions import (
    ConnectionError,
    ConnectorError,
    OperationError,
    ValidationError,
)
from .integration import DataSource, initialize
from .objectstorage import OPERATIONS, CallShape, OperationSpec
from .schemas import ConnectorSettings

__all__ = [
    # Connector
    "ConnectorSettings",
    "ConnectorState",
    "ObjectStorageConnector",
    # Host integration
    "DataSource",
    "initialize",
    "mixin",
    # Operation table
    "CallShape",
    "OPERATIONS",
    "OperationSpec",
    # Errors
    "ConnectionError",
    "ConnectorError",
    "OperationError",
    "ValidationError",
]
