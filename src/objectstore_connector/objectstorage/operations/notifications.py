"""Bucket policy and bucket notification operations."""

import json
import xml.etree.ElementTree as ET
from typing import Iterator, Sequence
from urllib.parse import quote, urlencode

from botocore.auth import S3SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.exceptions import ClientError
from botocore.httpsession import URLLib3Session

from objectstore_connector.core import get_logger

logger = get_logger(__name__)

DEFAULT_EVENTS = (
    "s3:ObjectCreated:*",
    "s3:ObjectRemoved:*",
    "s3:ObjectAccessed:*",
)

# Connect timeout in seconds; reads never time out on a live listener.
LISTEN_CONNECT_TIMEOUT = 60
LISTEN_CHUNK_SIZE = 1024


# Policy
def get_bucket_policy(handle, bucket_name: str) -> dict:
    """Return the bucket policy document parsed from JSON."""
    response = handle.s3.get_bucket_policy(Bucket=bucket_name)
    return json.loads(response["Policy"])


def set_bucket_policy(handle, bucket_name: str, policy: dict):
    return handle.s3.put_bucket_policy(Bucket=bucket_name, Policy=json.dumps(policy))


# Notifications
def get_bucket_notification(handle, bucket_name: str):
    return handle.s3.get_bucket_notification_configuration(Bucket=bucket_name)


def set_bucket_notification(handle, bucket_name: str, notification_config: dict):
    return handle.s3.put_bucket_notification_configuration(
        Bucket=bucket_name, NotificationConfiguration=notification_config
    )


def remove_all_bucket_notification(handle, bucket_name: str):
    """Clear every queue, topic and lambda notification target."""
    return handle.s3.put_bucket_notification_configuration(
        Bucket=bucket_name, NotificationConfiguration={}
    )


def listen_bucket_notification(
    handle,
    bucket_name: str,
    prefix: str = "",
    suffix: str = "",
    events: Sequence[str] = DEFAULT_EVENTS,
) -> "NotificationListener":
    """Return a listener for live bucket events (MinIO extension).

    The request is only sent once the listener is iterated.
    """
    return NotificationListener(handle, bucket_name, prefix, suffix, events)


class NotificationListener:
    """Iterable over the records of a MinIO ``ListenBucketNotification`` stream.

    Iterating opens a long-lived, SigV4-signed ``GET /{bucket}?events=...``
    request and yields each event record as it arrives. ``close()`` ends the
    stream and releases the connection.

    Example:
        listener = await connector.invoke("listen_bucket_notification", "photos")
        for record in listener:
            print(record["eventName"], record["s3"]["object"]["key"])
    """

    def __init__(
        self,
        handle,
        bucket_name: str,
        prefix: str = "",
        suffix: str = "",
        events: Sequence[str] = DEFAULT_EVENTS,
    ):
        self.handle = handle
        self.bucket_name = bucket_name
        self.prefix = prefix
        self.suffix = suffix
        self.events = tuple(events)
        self._response = None
        self._http = None

    def __iter__(self) -> Iterator[dict]:
        return self._records()

    def _request_url(self) -> str:
        query = [("prefix", self.prefix), ("suffix", self.suffix)]
        query.extend(("events", event) for event in self.events)
        endpoint = self.handle.s3.meta.endpoint_url.rstrip("/")
        return f"{endpoint}/{self.bucket_name}?{urlencode(query, quote_via=quote)}"

    def _open(self):
        # A listener streams one request at a time.
        self.close()

        credentials = self.handle.session.get_credentials().get_frozen_credentials()
        request = AWSRequest(method="GET", url=self._request_url(), stream_output=True)
        S3SigV4Auth(credentials, "s3", self.handle.s3.meta.region_name).add_auth(request)

        self._http = URLLib3Session(timeout=(LISTEN_CONNECT_TIMEOUT, None))
        try:
            response = self._http.send(request.prepare())
        except Exception:
            self.close()
            raise
        if response.status_code >= 300:
            body = response.raw.read()
            self.close()
            raise ClientError(
                _error_response(response.status_code, body),
                "ListenBucketNotification",
            )

        logger.info(
            "Listening for bucket notifications",
            bucket=self.bucket_name,
            events=list(self.events),
        )
        self._response = response
        return response

    def _records(self) -> Iterator[dict]:
        response = self._open()
        buffer = b""
        try:
            for chunk in response.raw.stream(LISTEN_CHUNK_SIZE, decode_content=True):
                buffer += chunk
                *lines, buffer = buffer.split(b"\n")
                for line in lines:
                    line = line.strip()
                    # Blank lines are keep-alives.
                    if not line:
                        continue
                    for record in json.loads(line).get("Records") or []:
                        yield record
        finally:
            self.close()

    def close(self) -> None:
        """Stop listening and release the connection."""
        if self._response is not None:
            self._response.raw.close()
            self._response = None
        if self._http is not None:
            self._http.close()
            self._http = None


def _error_response(status_code: int, body: bytes) -> dict:
    """Build a botocore-style error response from an S3 XML error body."""
    error = {"Code": str(status_code), "Message": ""}
    try:
        root = ET.fromstring(body)
    except ET.ParseError:
        error["Message"] = body.decode("utf-8", errors="replace")
    else:
        error["Code"] = root.findtext("Code") or error["Code"]
        error["Message"] = root.findtext("Message") or ""
    return {
        "Error": error,
        "ResponseMetadata": {"HTTPStatusCode": status_code},
    }
