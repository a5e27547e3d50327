"""Bucket operations: lifecycle, listing and bucket-level configuration."""

from typing import Any, Iterator, Optional

from botocore.exceptions import ClientError

from ..clients.s3_client import DEFAULT_REGION

NOT_FOUND_CODES = frozenset({"404", "NoSuchBucket", "NotFound"})


# Bucket lifecycle
def make_bucket(handle, bucket_name: str, region: Optional[str] = None):
    """Create a bucket, in ``region`` when one is given.

    The default region takes no location constraint; S3 rejects one.
    """
    if region is None or region == DEFAULT_REGION:
        return handle.s3.create_bucket(Bucket=bucket_name)
    return handle.s3.create_bucket(
        Bucket=bucket_name,
        CreateBucketConfiguration={"LocationConstraint": region},
    )


def list_buckets(handle):
    return handle.s3.list_buckets()


def bucket_exists(handle, bucket_name: str) -> bool:
    """Return True if the bucket exists and is reachable."""
    try:
        handle.s3.head_bucket(Bucket=bucket_name)
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") in NOT_FOUND_CODES:
            return False
        raise
    return True


def remove_bucket(handle, bucket_name: str):
    return handle.s3.delete_bucket(Bucket=bucket_name)


# Listing
def _paginate(
    handle, method: str, entries: str, recursive: bool, **kwargs: Any
) -> Iterator[dict]:
    """Yield entries page by page, followed by common prefixes when delimited."""
    if not recursive:
        kwargs["Delimiter"] = "/"

    paginator = handle.s3.get_paginator(method)
    for page in paginator.paginate(**kwargs):
        yield from page.get(entries, [])
        yield from page.get("CommonPrefixes", [])


def list_objects(
    handle,
    bucket_name: str,
    prefix: str = "",
    recursive: bool = False,
    list_opts: Optional[dict] = None,
) -> Iterator[dict]:
    """Lazily list objects (ListObjects v1). No request is sent until iterated."""
    return _paginate(
        handle,
        "list_objects",
        "Contents",
        recursive,
        Bucket=bucket_name,
        Prefix=prefix,
        **(list_opts or {}),
    )


def list_objects_v2(
    handle,
    bucket_name: str,
    prefix: str = "",
    recursive: bool = False,
    start_after: str = "",
) -> Iterator[dict]:
    """Lazily list objects with ListObjectsV2."""
    kwargs: dict[str, Any] = {"Bucket": bucket_name, "Prefix": prefix}
    if start_after:
        kwargs["StartAfter"] = start_after
    return _paginate(handle, "list_objects_v2", "Contents", recursive, **kwargs)


def list_objects_v2_with_metadata(
    handle,
    bucket_name: str,
    prefix: str = "",
    recursive: bool = False,
    start_after: str = "",
) -> Iterator[dict]:
    """Lazily list objects with ListObjectsV2, including owner information."""
    kwargs: dict[str, Any] = {
        "Bucket": bucket_name,
        "Prefix": prefix,
        "FetchOwner": True,
    }
    if start_after:
        kwargs["StartAfter"] = start_after
    return _paginate(handle, "list_objects_v2", "Contents", recursive, **kwargs)


def list_incomplete_uploads(
    handle, bucket_name: str, prefix: str = "", recursive: bool = False
) -> Iterator[dict]:
    """Lazily list multipart uploads that were started but never completed."""
    return _paginate(
        handle,
        "list_multipart_uploads",
        "Uploads",
        recursive,
        Bucket=bucket_name,
        Prefix=prefix,
    )


# Versioning
def get_bucket_versioning(handle, bucket_name: str):
    return handle.s3.get_bucket_versioning(Bucket=bucket_name)


def set_bucket_versioning(handle, bucket_name: str, versioning_config: dict):
    return handle.s3.put_bucket_versioning(
        Bucket=bucket_name, VersioningConfiguration=versioning_config
    )


# Tagging
def get_bucket_tagging(handle, bucket_name: str):
    return handle.s3.get_bucket_tagging(Bucket=bucket_name)


def set_bucket_tagging(handle, bucket_name: str, tagging: dict):
    return handle.s3.put_bucket_tagging(Bucket=bucket_name, Tagging=tagging)


def remove_bucket_tagging(handle, bucket_name: str):
    return handle.s3.delete_bucket_tagging(Bucket=bucket_name)


# Lifecycle
def get_bucket_lifecycle(handle, bucket_name: str):
    return handle.s3.get_bucket_lifecycle_configuration(Bucket=bucket_name)


def set_bucket_lifecycle(handle, bucket_name: str, lifecycle_config: dict):
    return handle.s3.put_bucket_lifecycle_configuration(
        Bucket=bucket_name, LifecycleConfiguration=lifecycle_config
    )


def remove_bucket_lifecycle(handle, bucket_name: str):
    return handle.s3.delete_bucket_lifecycle(Bucket=bucket_name)


# Encryption
def get_bucket_encryption(handle, bucket_name: str):
    return handle.s3.get_bucket_encryption(Bucket=bucket_name)


def set_bucket_encryption(handle, bucket_name: str, encryption_config: dict):
    return handle.s3.put_bucket_encryption(
        Bucket=bucket_name, ServerSideEncryptionConfiguration=encryption_config
    )


def remove_bucket_encryption(handle, bucket_name: str):
    return handle.s3.delete_bucket_encryption(Bucket=bucket_name)


# Replication
def get_bucket_replication(handle, bucket_name: str):
    return handle.s3.get_bucket_replication(Bucket=bucket_name)


def set_bucket_replication(handle, bucket_name: str, replication_config: dict):
    return handle.s3.put_bucket_replication(
        Bucket=bucket_name, ReplicationConfiguration=replication_config
    )


def remove_bucket_replication(handle, bucket_name: str):
    return handle.s3.delete_bucket_replication(Bucket=bucket_name)


# Object lock
def get_object_lock_config(handle, bucket_name: str):
    return handle.s3.get_object_lock_configuration(Bucket=bucket_name)


def set_object_lock_config(handle, bucket_name: str, lock_config: dict):
    return handle.s3.put_object_lock_configuration(
        Bucket=bucket_name, ObjectLockConfiguration=lock_config
    )
