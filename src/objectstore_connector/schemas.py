"""Connector configuration schema for objectstore-connector."""

from typing import Any, Literal, Mapping, Optional

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from objectstore_connector.core import ConnectionError, get_logger

logger = get_logger(__name__)

# Options handed to the storage client. Everything else in a data source's
# settings belongs to the host framework and never reaches the client.
CLIENT_OPTION_NAMES = frozenset(
    {
        "bucket_name",
        "end_point",
        "port",
        "use_ssl",
        "access_key",
        "secret_key",
        "region",
        "transport",
        "session_token",
        "part_size",
        "path_style",
        "transport_agent",
    }
)


class ConnectorSettings(BaseModel):
    """Immutable configuration for an object storage connector.

    Field names are snake_case; the camelCase spellings used by data source
    definitions (``endPoint``, ``useSSL``, ...) are accepted as aliases.
    Unknown keys are dropped so that hosts can add settings before the
    client understands them.

    Example:
        settings = ConnectorSettings.from_mapping(
            {
                "endPoint": "localhost",
                "port": 9000,
                "useSSL": False,
                "accessKey": "minioadmin",
                "secretKey": "minioadmin",
            }
        )
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    end_point: Optional[str] = Field(
        None, alias="endPoint", description="Storage service hostname"
    )
    port: Optional[int] = Field(None, description="Storage service port")
    use_ssl: bool = Field(True, alias="useSSL", description="Connect over TLS")
    access_key: Optional[str] = Field(
        None, alias="accessKey", description="Access key ID"
    )
    secret_key: Optional[str] = Field(
        None, alias="secretKey", description="Secret access key"
    )
    session_token: Optional[str] = Field(
        None, alias="sessionToken", description="Session token for temporary credentials"
    )
    region: Optional[str] = Field(None, description="Region name")
    transport: Optional[Literal["http", "https"]] = Field(
        None, description="URL scheme override, takes precedence over use_ssl"
    )
    part_size: Optional[int] = Field(
        None, alias="partSize", description="Multipart chunk size in bytes"
    )
    path_style: bool = Field(
        False, alias="pathStyle", description="Use path-style bucket addressing"
    )
    transport_agent: Optional[dict[str, Any]] = Field(
        None,
        alias="transportAgent",
        description="Extra botocore Config options (proxies, pool size, timeouts)",
    )
    bucket_name: Optional[str] = Field(
        None, alias="bucketName", description="Default bucket name"
    )
    debug: bool = Field(False, description="Emit diagnostic logs for every operation")
    lazy_connect: bool = Field(
        False, alias="lazyConnect", description="Defer connect() at initialization"
    )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ConnectorSettings":
        """Build settings from a data source mapping, dropping unknown keys.

        Raises:
            ConnectionError: If a recognized setting has an invalid value
        """
        known = set(cls.model_fields)
        known.update(
            field.alias for field in cls.model_fields.values() if field.alias
        )
        dropped = sorted(key for key in raw if key not in known)
        if dropped:
            logger.debug("Ignoring unrecognized settings", keys=dropped)
        try:
            return cls.model_validate(dict(raw))
        except pydantic.ValidationError as e:
            raise ConnectionError(
                f"Invalid connector settings: {e}", cause=e
            ) from e

    def client_options(self) -> dict[str, Any]:
        """Return the recognized client options that are set."""
        return self.model_dump(include=set(CLIENT_OPTION_NAMES), exclude_none=True)

    @property
    def endpoint_url(self) -> Optional[str]:
        """Endpoint URL built from host, port and scheme."""
        if not self.end_point:
            return None

        scheme = self.transport or ("https" if self.use_ssl else "http")
        if self.port:
            return f"{scheme}://{self.end_point}:{self.port}"
        return f"{scheme}://{self.end_point}"
