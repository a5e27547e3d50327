"""Presigned URL and POST policy generation.

Presigning is computed locally from the client's credentials; no request is
sent to the storage service.
"""

from typing import Optional

from objectstore_connector.core import ValidationError

# Seven days, the longest expiry SigV4 allows.
DEFAULT_EXPIRY = 7 * 24 * 60 * 60

CLIENT_METHODS = {
    "GET": "get_object",
    "PUT": "put_object",
    "HEAD": "head_object",
    "DELETE": "delete_object",
}


def presigned_url(
    handle,
    method: str,
    bucket_name: str,
    object_name: str,
    expiry: int = DEFAULT_EXPIRY,
    req_params: Optional[dict] = None,
) -> str:
    """Presign a GET, PUT, HEAD or DELETE request for one object.

    ``req_params`` are extra request fields, e.g. ``ResponseContentType``
    or ``VersionId``.
    """
    client_method = CLIENT_METHODS.get(method.upper())
    if client_method is None:
        raise ValidationError(
            f"Unsupported presign method: {method}. "
            f"Must be one of {', '.join(CLIENT_METHODS)}"
        )

    params = {"Bucket": bucket_name, "Key": object_name, **(req_params or {})}
    return handle.s3.generate_presigned_url(
        ClientMethod=client_method,
        Params=params,
        ExpiresIn=expiry,
        HttpMethod=method.upper(),
    )


def presigned_get_object(
    handle,
    bucket_name: str,
    object_name: str,
    expiry: int = DEFAULT_EXPIRY,
    resp_headers: Optional[dict] = None,
) -> str:
    return presigned_url(handle, "GET", bucket_name, object_name, expiry, resp_headers)


def presigned_put_object(
    handle, bucket_name: str, object_name: str, expiry: int = DEFAULT_EXPIRY
) -> str:
    return presigned_url(handle, "PUT", bucket_name, object_name, expiry)


def presigned_post_policy(
    handle,
    bucket_name: str,
    object_name: str,
    object_name_prefix: str,
    expires_in_seconds: int,
) -> dict:
    """Build a browser POST policy for uploading into a bucket.

    The form targets ``object_name`` and the policy only accepts keys that
    start with ``object_name_prefix``.

    Returns:
        Mapping with the form ``url`` and the ``fields`` to post with it
    """
    return handle.s3.generate_presigned_post(
        Bucket=bucket_name,
        Key=object_name,
        Conditions=[["starts-with", "$key", object_name_prefix]],
        ExpiresIn=expires_in_seconds,
    )
