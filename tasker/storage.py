"""
S3 upload storage.

Builds a boto3 S3 client from the ``aws`` config section and uploads named
byte streams into the configured bucket. ``endpoint_url`` points the client
at an S3-compatible store when set.
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO

import boto3

from tasker.config.schema import AWSConfig

logger = logging.getLogger(__name__)


class S3Storage:
    """Upload client bound to a single bucket."""

    def __init__(self, client: Any, bucket: str):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_config(cls, aws: AWSConfig) -> S3Storage:
        """Create a storage adapter using static credentials from config."""
        client_kwargs: dict[str, Any] = {
            "region_name": aws.region,
            "aws_access_key_id": aws.access_key_id,
            "aws_secret_access_key": aws.secret_access_key,
        }
        if aws.endpoint_url:
            client_kwargs["endpoint_url"] = aws.endpoint_url

        client = boto3.client("s3", **client_kwargs)
        logger.debug(f"S3 storage ready for bucket '{aws.upload_bucket}' in {aws.region}")
        return cls(client=client, bucket=aws.upload_bucket)

    def upload_file(self, key: str, body: BinaryIO | bytes) -> None:
        """Store ``body`` under ``key`` in the upload bucket."""
        self.client.put_object(Bucket=self.bucket, Key=key, Body=body)
        logger.info(f"Uploaded object '{key}' to bucket '{self.bucket}'")
