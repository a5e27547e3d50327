"""Tests for the bucket notification listener."""

from unittest.mock import Mock, patch

import pytest
from botocore.exceptions import ClientError

from objectstore_connector.objectstorage.clients import S3ClientManager
from objectstore_connector.objectstorage.operations.notifications import (
    NotificationListener,
    listen_bucket_notification,
)
from objectstore_connector.schemas import ConnectorSettings


@pytest.fixture
def handle(local_settings):
    """Real client handle for the local endpoint; no request is sent."""
    config = ConnectorSettings.from_mapping(local_settings)
    return S3ClientManager(config).create_handle()


def _response(status_code=200, chunks=(), body=b""):
    response = Mock(status_code=status_code)
    response.raw.stream.return_value = iter(chunks)
    response.raw.read.return_value = body
    return response


class TestNotificationListener:
    """Test streaming bucket notification records."""

    @patch("objectstore_connector.objectstorage.operations.notifications.URLLib3Session")
    def test_records_across_chunks(self, mock_session, handle):
        """Test records split over chunk boundaries and keep-alives are parsed."""
        mock_session.return_value.send.return_value = _response(
            chunks=[
                b'{"Records":[{"eventName":"s3:ObjectCreated:Put"}]}\n\n{"Rec',
                b'ords":[{"eventName":"s3:ObjectRemoved:Delete"}]}\n',
                b" \n",
            ]
        )

        listener = listen_bucket_notification(handle, "photos")
        records = list(listener)

        assert [record["eventName"] for record in records] == [
            "s3:ObjectCreated:Put",
            "s3:ObjectRemoved:Delete",
        ]

    @patch("objectstore_connector.objectstorage.operations.notifications.URLLib3Session")
    def test_signed_request(self, mock_session, handle):
        """Test the listen request is signed and carries the filters."""
        mock_session.return_value.send.return_value = _response()

        listener = NotificationListener(
            handle, "photos", "2024/", ".jpg", ["s3:ObjectCreated:*"]
        )
        list(listener)

        request = mock_session.return_value.send.call_args.args[0]
        assert request.method == "GET"
        assert request.url == (
            "http://localhost:9002/photos"
            "?prefix=2024%2F&suffix=.jpg&events=s3%3AObjectCreated%3A%2A"
        )
        assert "Authorization" in request.headers
        mock_session.assert_called_once_with(timeout=(60, None))

    @patch("objectstore_connector.objectstorage.operations.notifications.URLLib3Session")
    def test_default_events(self, mock_session, handle):
        mock_session.return_value.send.return_value = _response()

        list(listen_bucket_notification(handle, "photos"))

        url = mock_session.return_value.send.call_args.args[0].url
        assert url.count("events=") == 3
        assert "s3%3AObjectAccessed%3A%2A" in url

    @patch("objectstore_connector.objectstorage.operations.notifications.URLLib3Session")
    def test_stream_closed_when_exhausted(self, mock_session, handle):
        """Test the connection is released once the stream ends."""
        response = _response(chunks=[b'{"Records":[]}\n'])
        mock_session.return_value.send.return_value = response

        list(listen_bucket_notification(handle, "photos"))

        response.raw.close.assert_called_once()
        mock_session.return_value.close.assert_called_once()

    @patch("objectstore_connector.objectstorage.operations.notifications.URLLib3Session")
    def test_close_stops_listening(self, mock_session, handle):
        """Test closing the iterator early releases the connection."""
        response = _response(
            chunks=[
                b'{"Records":[{"eventName":"s3:ObjectCreated:Put"}]}\n',
                b'{"Records":[{"eventName":"s3:ObjectCreated:Copy"}]}\n',
            ]
        )
        mock_session.return_value.send.return_value = response

        records = iter(listen_bucket_notification(handle, "photos"))
        first = next(records)
        records.close()

        assert first["eventName"] == "s3:ObjectCreated:Put"
        response.raw.close.assert_called_once()

    @patch("objectstore_connector.objectstorage.operations.notifications.URLLib3Session")
    def test_error_status_raises_client_error(self, mock_session, handle):
        """Test a rejected listen request raises with the service error code."""
        mock_session.return_value.send.return_value = _response(
            status_code=403,
            body=(
                b"<Error><Code>AccessDenied</Code>"
                b"<Message>Access Denied.</Message></Error>"
            ),
        )

        with pytest.raises(ClientError) as exc_info:
            list(listen_bucket_notification(handle, "photos"))

        error = exc_info.value.response["Error"]
        assert error["Code"] == "AccessDenied"
        assert error["Message"] == "Access Denied."
        assert exc_info.value.operation_name == "ListenBucketNotification"
        mock_session.return_value.close.assert_called_once()

    @patch("objectstore_connector.objectstorage.operations.notifications.URLLib3Session")
    def test_error_without_xml_body(self, mock_session, handle):
        mock_session.return_value.send.return_value = _response(
            status_code=502, body=b"Bad Gateway"
        )

        with pytest.raises(ClientError) as exc_info:
            list(listen_bucket_notification(handle, "photos"))

        assert exc_info.value.response["Error"]["Code"] == "502"
        assert exc_info.value.response["Error"]["Message"] == "Bad Gateway"

    @patch("objectstore_connector.objectstorage.operations.notifications.URLLib3Session")
    def test_session_closed_when_send_fails(self, mock_session, handle):
        """Test a connection failure releases the HTTP session."""
        mock_session.return_value.send.side_effect = ConnectionRefusedError()

        with pytest.raises(ConnectionRefusedError):
            list(listen_bucket_notification(handle, "photos"))

        mock_session.return_value.close.assert_called_once()

    @patch("objectstore_connector.objectstorage.operations.notifications.URLLib3Session")
    def test_reopening_closes_previous_stream(self, mock_session, handle):
        """Test iterating again releases the stream still held open."""
        record = b'{"Records":[{"eventName":"s3:ObjectCreated:Put"}]}\n'
        first = _response(chunks=[record, record])
        second = _response(chunks=[record])
        mock_session.return_value.send.side_effect = [first, second]
        listener = listen_bucket_notification(handle, "photos")

        earlier = iter(listener)
        next(earlier)
        first.raw.close.assert_not_called()
        later = iter(listener)
        next(later)

        first.raw.close.assert_called_once()
        second.raw.close.assert_not_called()
