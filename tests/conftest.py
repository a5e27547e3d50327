"""Test configuration and fixtures for objectstore-connector."""

from unittest.mock import Mock

import pytest
import pytest_asyncio
from boto3.s3.transfer import TransferConfig
from moto import mock_aws

from objectstore_connector.connector import ObjectStorageConnector
from objectstore_connector.objectstorage.clients import ClientHandle, S3ClientManager

LOCAL_ENDPOINT = "http://localhost:9002"


@pytest.fixture
def local_settings():
    """Settings for a local MinIO-style endpoint."""
    return {
        "endPoint": "localhost",
        "port": 9002,
        "useSSL": False,
        "accessKey": "K",
        "secretKey": "S",
    }


@pytest.fixture
def fake_handle():
    """Client handle whose S3 client is a Mock."""
    return ClientHandle(
        session=Mock(),
        s3=Mock(),
        transfer_config=TransferConfig(),
        endpoint_url=LOCAL_ENDPOINT,
    )


@pytest.fixture
def fake_manager(fake_handle):
    """Client manager that hands out ``fake_handle``."""
    manager = Mock(spec=S3ClientManager)
    manager.create_handle.return_value = fake_handle
    return manager


@pytest.fixture
def s3_backend(monkeypatch):
    """In-memory S3 for the duration of a test."""
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    with mock_aws():
        yield


@pytest_asyncio.fixture
async def connector(s3_backend):
    """Connected connector backed by moto's in-memory S3."""
    connector = ObjectStorageConnector(
        {
            "accessKey": "test_key",
            "secretKey": "test_secret",
            "region": "us-east-1",
        }
    )
    await connector.connect()
    return connector
