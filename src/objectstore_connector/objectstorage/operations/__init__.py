"""Static table of every storage operation the connector forwards."""

from types import MappingProxyType
from typing import Mapping

from ..forwarder import CallShape, OperationSpec
from . import buckets, notifications, objects, presigned

BLOCKING = CallShape.BLOCKING
STREAM = CallShape.STREAM
DIRECT = CallShape.DIRECT

OPERATIONS: tuple[OperationSpec, ...] = (
    # Bucket lifecycle
    OperationSpec("make_bucket", BLOCKING, buckets.make_bucket),
    OperationSpec("list_buckets", BLOCKING, buckets.list_buckets),
    OperationSpec("bucket_exists", BLOCKING, buckets.bucket_exists),
    OperationSpec("remove_bucket", BLOCKING, buckets.remove_bucket),
    # Listing
    OperationSpec("list_objects", STREAM, buckets.list_objects),
    OperationSpec("list_objects_v2", STREAM, buckets.list_objects_v2),
    OperationSpec(
        "list_objects_v2_with_metadata", STREAM, buckets.list_objects_v2_with_metadata
    ),
    OperationSpec("list_incomplete_uploads", STREAM, buckets.list_incomplete_uploads),
    # Bucket configuration
    OperationSpec("get_bucket_versioning", BLOCKING, buckets.get_bucket_versioning),
    OperationSpec("set_bucket_versioning", BLOCKING, buckets.set_bucket_versioning),
    OperationSpec("get_bucket_tagging", BLOCKING, buckets.get_bucket_tagging),
    OperationSpec("set_bucket_tagging", BLOCKING, buckets.set_bucket_tagging),
    OperationSpec("remove_bucket_tagging", BLOCKING, buckets.remove_bucket_tagging),
    OperationSpec("get_bucket_lifecycle", BLOCKING, buckets.get_bucket_lifecycle),
    OperationSpec("set_bucket_lifecycle", BLOCKING, buckets.set_bucket_lifecycle),
    OperationSpec("remove_bucket_lifecycle", BLOCKING, buckets.remove_bucket_lifecycle),
    OperationSpec("get_bucket_encryption", BLOCKING, buckets.get_bucket_encryption),
    OperationSpec("set_bucket_encryption", BLOCKING, buckets.set_bucket_encryption),
    OperationSpec(
        "remove_bucket_encryption", BLOCKING, buckets.remove_bucket_encryption
    ),
    OperationSpec("get_bucket_replication", BLOCKING, buckets.get_bucket_replication),
    OperationSpec("set_bucket_replication", BLOCKING, buckets.set_bucket_replication),
    OperationSpec(
        "remove_bucket_replication", BLOCKING, buckets.remove_bucket_replication
    ),
    OperationSpec("get_object_lock_config", BLOCKING, buckets.get_object_lock_config),
    OperationSpec("set_object_lock_config", BLOCKING, buckets.set_object_lock_config),
    # Objects
    OperationSpec("get_object", BLOCKING, objects.get_object),
    OperationSpec("get_partial_object", BLOCKING, objects.get_partial_object),
    OperationSpec("f_get_object", BLOCKING, objects.f_get_object),
    OperationSpec("put_object", BLOCKING, objects.put_object),
    OperationSpec("f_put_object", BLOCKING, objects.f_put_object),
    OperationSpec("copy_object", BLOCKING, objects.copy_object),
    OperationSpec("stat_object", BLOCKING, objects.stat_object),
    OperationSpec("remove_object", BLOCKING, objects.remove_object),
    OperationSpec("remove_objects", BLOCKING, objects.remove_objects),
    OperationSpec(
        "remove_incomplete_upload", BLOCKING, objects.remove_incomplete_upload
    ),
    OperationSpec("put_object_retention", BLOCKING, objects.put_object_retention),
    OperationSpec("set_object_retention", BLOCKING, objects.set_object_retention),
    OperationSpec("get_object_retention", BLOCKING, objects.get_object_retention),
    OperationSpec("get_object_legal_hold", BLOCKING, objects.get_object_legal_hold),
    OperationSpec("set_object_legal_hold", BLOCKING, objects.set_object_legal_hold),
    OperationSpec("get_object_tagging", BLOCKING, objects.get_object_tagging),
    OperationSpec("set_object_tagging", BLOCKING, objects.set_object_tagging),
    OperationSpec("remove_object_tagging", BLOCKING, objects.remove_object_tagging),
    OperationSpec("compose_object", BLOCKING, objects.compose_object),
    OperationSpec("select_object_content", BLOCKING, objects.select_object_content),
    # Presigned
    OperationSpec("presigned_url", DIRECT, presigned.presigned_url),
    OperationSpec("presigned_get_object", DIRECT, presigned.presigned_get_object),
    OperationSpec("presigned_put_object", DIRECT, presigned.presigned_put_object),
    OperationSpec("presigned_post_policy", DIRECT, presigned.presigned_post_policy),
    # Policy and notifications
    OperationSpec("get_bucket_policy", BLOCKING, notifications.get_bucket_policy),
    OperationSpec("set_bucket_policy", BLOCKING, notifications.set_bucket_policy),
    OperationSpec(
        "get_bucket_notification", BLOCKING, notifications.get_bucket_notification
    ),
    OperationSpec(
        "set_bucket_notification", BLOCKING, notifications.set_bucket_notification
    ),
    OperationSpec(
        "remove_all_bucket_notification",
        BLOCKING,
        notifications.remove_all_bucket_notification,
    ),
    OperationSpec(
        "listen_bucket_notification",
        STREAM,
        notifications.listen_bucket_notification,
    ),
)


def _index(specs: tuple[OperationSpec, ...]) -> Mapping[str, OperationSpec]:
    index: dict[str, OperationSpec] = {}
    for spec in specs:
        if spec.name in index:
            raise ValueError(f"Duplicate operation name: {spec.name}")
        index[spec.name] = spec
    return MappingProxyType(index)


OPERATIONS_BY_NAME = _index(OPERATIONS)

__all__ = ["OPERATIONS", "OPERATIONS_BY_NAME"]
