"""Connector lifecycle and operation table publication.

``ObjectStorageConnector`` owns one client handle for its whole lifetime and
walks through three states:

    ABSENT -> CONNECTING -> READY

``connect()`` is safe to call any number of times, concurrently or not:
only one build is ever in flight and every caller gets the same handle.
Once READY the connector publishes a read-only table mapping each
operation name to a coroutine function, and mixes it into any model
registered with ``register_model()``.
"""

import asyncio
import enum
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from objectstore_connector.core import (
    ConnectionError,
    ValidationError,
    get_logger,
    settings as app_settings,
)
from objectstore_connector.objectstorage import (
    OPERATIONS,
    ClientHandle,
    OperationForwarder,
    S3ClientManager,
)
from objectstore_connector.schemas import ConnectorSettings

logger = get_logger(__name__)

OperationTable = Mapping[str, Callable[..., Awaitable[Any]]]

DATA_SOURCE_TYPES = ("db", "files", "objectstore")


class ConnectorState(str, enum.Enum):
    """Lifecycle states of the client handle."""

    ABSENT = "absent"
    CONNECTING = "connecting"
    READY = "ready"


def mixin(model: Any, operations: OperationTable) -> None:
    """Copy every operation in ``operations`` onto ``model`` as a static attribute."""
    for name, call in operations.items():
        setattr(model, name, staticmethod(call))


class ObjectStorageConnector:
    """Connector exposing object storage operations to a host framework."""

    name = "objectstore"

    def __init__(
        self,
        config: Union[ConnectorSettings, Mapping[str, Any], None] = None,
        client_manager: Optional[S3ClientManager] = None,
    ):
        """Initialize the connector without touching the network.

        Args:
            config: Connector settings, or a raw settings mapping from the host
            client_manager: Builder for the client handle

        Raises:
            ConnectionError: If a raw settings mapping holds invalid values
        """
        if not isinstance(config, ConnectorSettings):
            config = ConnectorSettings.from_mapping(config or {})

        self.config = config
        self.debug = config.debug or app_settings.debug
        self.client_manager = client_manager or S3ClientManager(config)

        self._handle: Optional[ClientHandle] = None
        self._pending: Optional[asyncio.Future] = None
        self._operations: OperationTable = MappingProxyType({})
        self._models: dict[str, Any] = {}

        if self.debug:
            logger.info(
                "Connector settings",
                settings=config.model_dump(exclude={"secret_key", "session_token"}),
            )

    @property
    def state(self) -> ConnectorState:
        if self._handle is not None:
            return ConnectorState.READY
        if self._pending is not None:
            return ConnectorState.CONNECTING
        return ConnectorState.ABSENT

    @property
    def handle(self) -> Optional[ClientHandle]:
        return self._handle

    @property
    def operations(self) -> OperationTable:
        """The published operation table; empty until the connector is ready."""
        return self._operations

    @property
    def default_bucket(self) -> Optional[str]:
        return self.config.bucket_name

    def get_types(self) -> list[str]:
        """Data source type tags reported to the host framework."""
        return list(DATA_SOURCE_TYPES)

    async def connect(self) -> ClientHandle:
        """Return the client handle, building it on first use.

        Returns:
            The shared client handle

        Raises:
            ConnectionError: If the client could not be constructed
        """
        if self._handle is not None:
            return self._handle

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._establish())

        # Shielded so one cancelled waiter does not abort the shared build.
        return await asyncio.shield(self._pending)

    async def _establish(self) -> ClientHandle:
        logger.info("Connecting to object storage", endpoint=self.config.endpoint_url)
        try:
            handle = await asyncio.to_thread(self.client_manager.create_handle)
        except Exception as e:
            if self.debug:
                logger.error(
                    "Connection failed",
                    endpoint=self.config.endpoint_url,
                    error=str(e),
                )
            raise ConnectionError(
                f"Failed to create storage client: {e}", cause=e
            ) from e
        finally:
            self._pending = None

        self._handle = handle
        self.build_operation_table()
        return handle

    def build_operation_table(self) -> OperationTable:
        """Bind every operation to the client handle and publish the table.

        Rebuilding is safe; it replaces the published table and refreshes
        registered models.

        Raises:
            ConnectionError: If called before the client handle exists
        """
        if self._handle is None:
            raise ConnectionError("Cannot build operation table before connecting")

        forwarder = OperationForwarder(
            self._handle,
            endpoint=self._handle.endpoint_url,
            debug=self.debug,
        )
        self._operations = MappingProxyType(
            {spec.name: forwarder.bind(spec) for spec in OPERATIONS}
        )
        logger.info("Operation table published", operations=len(self._operations))

        for model_name, model in self._models.items():
            if self.debug:
                logger.info("Mixing operations into model", model=model_name)
            mixin(model, self._operations)

        return self._operations

    def register_model(self, model: Any, name: Optional[str] = None) -> None:
        """Attach operations to ``model`` now if ready, and on every rebuild."""
        self._models[name or model.__name__] = model
        if self._handle is not None:
            mixin(model, self._operations)

    async def invoke(self, operation: str, *args: Any, **kwargs: Any) -> Any:
        """Run an operation by name, connecting first if needed.

        Raises:
            ValidationError: If the operation name is unknown
            ConnectionError: If the client could not be constructed
            OperationError: If the storage call failed
        """
        await self.connect()
        try:
            call = self._operations[operation]
        except KeyError:
            raise ValidationError(f"Unknown operation: {operation}") from None
        return await call(*args, **kwargs)
