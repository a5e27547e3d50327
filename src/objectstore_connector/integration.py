"""Host framework integration.

A host data-access framework supplies a data source carrying the settings
mapping, asks this module to attach a connector to it, and copies the
published operation table onto its own models.

Example:
    >>> source = SimpleNamespace(settings={"endPoint": "localhost", "port": 9000})
    >>> connector = await initialize(source)
    >>> connector.register_model(Photo)
    >>> await Photo.make_bucket("photos")
"""

from typing import Any, Mapping, Optional, Protocol

from objectstore_connector.connector import ObjectStorageConnector, mixin
from objectstore_connector.core import get_logger
from objectstore_connector.schemas import ConnectorSettings

logger = get_logger(__name__)


class DataSource(Protocol):
    """What the connector needs from a host data source."""

    settings: Mapping[str, Any]
    connector: Optional[ObjectStorageConnector]


async def initialize(data_source: DataSource) -> ObjectStorageConnector:
    """Create a connector for ``data_source`` and attach it.

    The connector connects immediately unless the settings ask for
    ``lazyConnect``, in which case the first ``connect()`` or ``invoke()``
    builds the client.

    Returns:
        The attached connector
    """
    config = ConnectorSettings.from_mapping(data_source.settings)
    connector = ObjectStorageConnector(config)
    data_source.connector = connector

    if config.lazy_connect:
        logger.info("Connector attached, connection deferred")
    else:
        await connector.connect()
        logger.info("Connector attached and connected")

    return connector


__all__ = ["DataSource", "initialize", "mixin"]
