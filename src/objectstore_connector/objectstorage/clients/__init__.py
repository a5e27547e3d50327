"""S3 client construction."""

from .s3_client import ClientHandle, S3ClientManager

__all__ = ["ClientHandle", "S3ClientManager"]
