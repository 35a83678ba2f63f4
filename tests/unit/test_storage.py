"""Tests for the S3 upload storage adapter."""

from __future__ import annotations

import io
from unittest.mock import Mock, patch

from tasker.config.schema import AWSConfig
from tasker.storage import S3Storage

AWS = AWSConfig(
    region="eu-west-1",
    access_key_id="AKIAEXAMPLE",
    secret_access_key="secret",
    upload_bucket="uploads",
)


class TestS3StorageFromConfig:
    """Tests for client construction from config."""

    def test_builds_client_with_static_credentials(self):
        with patch("tasker.storage.boto3.client") as mock_client:
            storage = S3Storage.from_config(AWS)

        mock_client.assert_called_once_with(
            "s3",
            region_name="eu-west-1",
            aws_access_key_id="AKIAEXAMPLE",
            aws_secret_access_key="secret",
        )
        assert storage.bucket == "uploads"
        assert storage.client is mock_client.return_value

    def test_custom_endpoint_passed_through(self):
        aws = AWS.model_copy(update={"endpoint_url": "http://localhost:9000"})

        with patch("tasker.storage.boto3.client") as mock_client:
            S3Storage.from_config(aws)

        assert mock_client.call_args.kwargs["endpoint_url"] == "http://localhost:9000"


class TestUploadFile:
    def test_puts_object_in_bucket(self):
        client = Mock()
        storage = S3Storage(client=client, bucket="uploads")
        body = io.BytesIO(b"payload")

        storage.upload_file("avatars/1.png", body)

        client.put_object.assert_called_once_with(Bucket="uploads", Key="avatars/1.png", Body=body)
