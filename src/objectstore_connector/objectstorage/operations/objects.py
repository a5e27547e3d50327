"""Object operations: CRUD, file helpers, retention, tagging, compose and select."""

from typing import Any, Iterable, Optional, Union

from objectstore_connector.core import get_logger

logger = get_logger(__name__)

# DeleteObjects accepts at most this many keys per request.
REMOVE_BATCH_SIZE = 1000


# Reads
def get_object(handle, bucket_name: str, object_name: str, get_opts: Optional[dict] = None):
    """Return the object's body as a readable stream."""
    response = handle.s3.get_object(Bucket=bucket_name, Key=object_name, **(get_opts or {}))
    return response["Body"]


def get_partial_object(
    handle,
    bucket_name: str,
    object_name: str,
    offset: int,
    length: Optional[int] = None,
    get_opts: Optional[dict] = None,
):
    """Return a stream over ``length`` bytes starting at ``offset``.

    Without a length (None or 0) the range runs to the end of the object.
    """
    if not length:
        byte_range = f"bytes={offset}-"
    else:
        byte_range = f"bytes={offset}-{offset + length - 1}"

    response = handle.s3.get_object(
        Bucket=bucket_name, Key=object_name, Range=byte_range, **(get_opts or {})
    )
    return response["Body"]


def f_get_object(handle, bucket_name: str, object_name: str, file_path: str):
    """Download an object to a local file."""
    return handle.s3.download_file(
        bucket_name, object_name, file_path, Config=handle.transfer_config
    )


def stat_object(handle, bucket_name: str, object_name: str):
    return handle.s3.head_object(Bucket=bucket_name, Key=object_name)


# Writes
def put_object(
    handle,
    bucket_name: str,
    object_name: str,
    data: Any,
    size: Optional[int] = None,
    put_opts: Optional[dict] = None,
):
    """Upload ``data`` (bytes, str or a readable file object) as one request."""
    kwargs = dict(put_opts or {})
    if size is not None:
        kwargs["ContentLength"] = size
    return handle.s3.put_object(Bucket=bucket_name, Key=object_name, Body=data, **kwargs)


def f_put_object(
    handle,
    bucket_name: str,
    object_name: str,
    file_path: str,
    put_opts: Optional[dict] = None,
):
    """Upload a local file, switching to multipart above the part size."""
    return handle.s3.upload_file(
        file_path,
        bucket_name,
        object_name,
        ExtraArgs=put_opts or None,
        Config=handle.transfer_config,
    )


def copy_object(
    handle,
    bucket_name: str,
    object_name: str,
    source_bucket_name: str,
    source_object_name: str,
    conditions: Optional[dict] = None,
):
    """Server-side copy of a source object to ``bucket_name/object_name``."""
    return handle.s3.copy_object(
        Bucket=bucket_name,
        Key=object_name,
        CopySource={"Bucket": source_bucket_name, "Key": source_object_name},
        **(conditions or {}),
    )


# Removal
def remove_object(
    handle, bucket_name: str, object_name: str, remove_opts: Optional[dict] = None
):
    return handle.s3.delete_object(Bucket=bucket_name, Key=object_name, **(remove_opts or {}))


def remove_objects(handle, bucket_name: str, object_list: Iterable[Union[str, dict]]):
    """Delete several objects, at most ``REMOVE_BATCH_SIZE`` per request.

    Entries are object names or ``{"Key": ..., "VersionId": ...}`` mappings.

    Returns:
        ``{"Deleted": [...], "Errors": [...]}`` merged across all requests
    """
    objects = [
        {"Key": entry} if isinstance(entry, str) else entry for entry in object_list
    ]

    result: dict[str, list] = {"Deleted": [], "Errors": []}
    for start in range(0, len(objects), REMOVE_BATCH_SIZE):
        response = handle.s3.delete_objects(
            Bucket=bucket_name,
            Delete={"Objects": objects[start : start + REMOVE_BATCH_SIZE]},
        )
        result["Deleted"].extend(response.get("Deleted", []))
        result["Errors"].extend(response.get("Errors", []))

    if result["Errors"]:
        logger.warning(
            "Some objects were not removed",
            bucket=bucket_name,
            errors=len(result["Errors"]),
        )
    return result


def remove_incomplete_upload(handle, bucket_name: str, object_name: str) -> int:
    """Abort every unfinished multipart upload of ``object_name``.

    Returns:
        Number of uploads aborted
    """
    aborted = 0
    paginator = handle.s3.get_paginator("list_multipart_uploads")
    for page in paginator.paginate(Bucket=bucket_name, Prefix=object_name):
        for upload in page.get("Uploads", []):
            if upload["Key"] != object_name:
                continue
            handle.s3.abort_multipart_upload(
                Bucket=bucket_name, Key=object_name, UploadId=upload["UploadId"]
            )
            aborted += 1

    logger.debug(
        "Incomplete uploads removed",
        bucket=bucket_name,
        object=object_name,
        aborted=aborted,
    )
    return aborted


# Retention and legal hold
def put_object_retention(
    handle, bucket_name: str, object_name: str, retention_opts: dict
):
    """Apply a retention configuration.

    ``retention_opts`` holds ``Retention`` plus optional ``VersionId`` and
    ``BypassGovernanceRetention``.
    """
    return handle.s3.put_object_retention(
        Bucket=bucket_name, Key=object_name, **retention_opts
    )


def set_object_retention(
    handle, bucket_name: str, object_name: str, mode: str, retain_until_date: Any
):
    return handle.s3.put_object_retention(
        Bucket=bucket_name,
        Key=object_name,
        Retention={"Mode": mode, "RetainUntilDate": retain_until_date},
    )


def get_object_retention(
    handle, bucket_name: str, object_name: str, get_opts: Optional[dict] = None
):
    return handle.s3.get_object_retention(
        Bucket=bucket_name, Key=object_name, **(get_opts or {})
    )


def get_object_legal_hold(
    handle, bucket_name: str, object_name: str, get_opts: Optional[dict] = None
):
    return handle.s3.get_object_legal_hold(
        Bucket=bucket_name, Key=object_name, **(get_opts or {})
    )


def set_object_legal_hold(
    handle,
    bucket_name: str,
    object_name: str,
    legal_hold: dict,
    set_opts: Optional[dict] = None,
):
    return handle.s3.put_object_legal_hold(
        Bucket=bucket_name, Key=object_name, LegalHold=legal_hold, **(set_opts or {})
    )


# Tagging
def get_object_tagging(
    handle, bucket_name: str, object_name: str, get_opts: Optional[dict] = None
):
    return handle.s3.get_object_tagging(
        Bucket=bucket_name, Key=object_name, **(get_opts or {})
    )


def set_object_tagging(
    handle,
    bucket_name: str,
    object_name: str,
    tagging: dict,
    put_opts: Optional[dict] = None,
):
    return handle.s3.put_object_tagging(
        Bucket=bucket_name, Key=object_name, Tagging=tagging, **(put_opts or {})
    )


def remove_object_tagging(
    handle, bucket_name: str, object_name: str, remove_opts: Optional[dict] = None
):
    return handle.s3.delete_object_tagging(
        Bucket=bucket_name, Key=object_name, **(remove_opts or {})
    )


# Compose and select
def compose_object(handle, bucket_name: str, object_name: str, sources: list[dict]):
    """Concatenate source objects server-side into ``bucket_name/object_name``.

    Each source is a ``CopySource`` mapping (``Bucket``, ``Key`` and optional
    ``VersionId``), optionally with a ``Range`` of the form ``bytes=a-b``.
    Every source except the last must be at least 5 MiB, as for any
    multipart upload. The upload is aborted if any part fails.
    """
    s3 = handle.s3
    upload = s3.create_multipart_upload(Bucket=bucket_name, Key=object_name)
    upload_id = upload["UploadId"]

    try:
        parts = []
        for part_number, source in enumerate(sources, start=1):
            source = dict(source)
            kwargs = {}
            if "Range" in source:
                kwargs["CopySourceRange"] = source.pop("Range")

            result = s3.upload_part_copy(
                Bucket=bucket_name,
                Key=object_name,
                UploadId=upload_id,
                PartNumber=part_number,
                CopySource=source,
                **kwargs,
            )
            parts.append(
                {"PartNumber": part_number, "ETag": result["CopyPartResult"]["ETag"]}
            )

        return s3.complete_multipart_upload(
            Bucket=bucket_name,
            Key=object_name,
            UploadId=upload_id,
            MultipartUpload={"Parts": parts},
        )
    except Exception:
        logger.warning(
            "Compose failed, aborting multipart upload",
            bucket=bucket_name,
            object=object_name,
            upload_id=upload_id,
        )
        try:
            s3.abort_multipart_upload(
                Bucket=bucket_name, Key=object_name, UploadId=upload_id
            )
        except Exception:
            logger.warning(
                "Could not abort multipart upload",
                bucket=bucket_name,
                object=object_name,
                upload_id=upload_id,
                exc_info=True,
            )
        raise


def select_object_content(handle, bucket_name: str, object_name: str, select_opts: dict):
    """Run an S3 Select query and return the response event stream.

    ``select_opts`` carries the boto3 request fields: ``Expression``,
    ``ExpressionType``, ``InputSerialization``, ``OutputSerialization`` and
    optionally ``RequestProgress``.
    """
    response = handle.s3.select_object_content(
        Bucket=bucket_name, Key=object_name, **select_opts
    )
    return response["Payload"]
