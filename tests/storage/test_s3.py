from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, NoCredentialsError

from studyhub.storage.errors import ObjectExistsError, StorageConfigError, TransientBackendError
from studyhub.storage.s3 import S3Storage


def _client_error(code: str, operation: str = "PutObject") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


def _storage(**overrides) -> S3Storage:
    defaults = dict(
        bucket="my-bucket",
        region="us-east-1",
        access_key_id="key",
        secret_access_key="secret",
    )
    defaults.update(overrides)
    return S3Storage(**defaults)


class TestS3Client:
    @patch("studyhub.storage.s3.boto3")
    def test_client_is_lazy_and_cached(self, mock_boto3):
        storage = _storage()
        mock_boto3.client.assert_not_called()

        assert storage.client is storage.client
        mock_boto3.client.assert_called_once_with(
            service_name="s3",
            aws_access_key_id="key",
            aws_secret_access_key="secret",
            region_name="us-east-1",
        )

    @patch("studyhub.storage.s3.boto3")
    def test_endpoint_url_passed(self, mock_boto3):
        mock_boto3.client.return_value = MagicMock()
        storage = _storage(endpoint_url="https://storage.googleapis.com")
        storage.client

        call_kwargs = mock_boto3.client.call_args[1]
        assert call_kwargs["endpoint_url"] == "https://storage.googleapis.com"

    def test_missing_credentials_raise_config_error(self):
        storage = _storage(access_key_id="", secret_access_key="")
        with pytest.raises(StorageConfigError, match="credentials not found"):
            storage.client


class TestS3Storage:
    @patch("studyhub.storage.s3.boto3")
    def test_save_calls_put_object_and_returns_signed_url(self, mock_boto3):
        mock_client = MagicMock()
        mock_client.generate_presigned_url.return_value = "https://signed-url"
        mock_boto3.client.return_value = mock_client

        storage = _storage(presigned_expiry=3600)
        url = storage.save("questions/a.pdf", b"data")

        mock_client.put_object.assert_called_once_with(
            Bucket="my-bucket",
            Key="questions/a.pdf",
            Body=b"data",
            ContentType="application/pdf",
            IfNoneMatch="*",
        )
        mock_client.generate_presigned_url.assert_called_once_with(
            "get_object",
            Params={"Bucket": "my-bucket", "Key": "questions/a.pdf"},
            ExpiresIn=3600,
        )
        assert url == "https://signed-url"

    @patch("studyhub.storage.s3.boto3")
    def test_signing_failure_falls_back_to_plain_url(self, mock_boto3):
        mock_client = MagicMock()
        mock_client.generate_presigned_url.side_effect = _client_error("AccessDenied", "GetObject")
        mock_boto3.client.return_value = mock_client

        url = _storage().save("questions/a.pdf", b"data")
        assert url == "https://my-bucket.s3.us-east-1.amazonaws.com/questions/a.pdf"

    @patch("studyhub.storage.s3.boto3")
    def test_access_denied_is_config_error(self, mock_boto3):
        mock_client = MagicMock()
        mock_client.put_object.side_effect = _client_error("AccessDenied")
        mock_boto3.client.return_value = mock_client

        with pytest.raises(StorageConfigError):
            _storage().save("questions/a.pdf", b"data")

    @patch("studyhub.storage.s3.boto3")
    def test_existing_key_raises_object_exists(self, mock_boto3):
        mock_client = MagicMock()
        mock_client.put_object.side_effect = _client_error("PreconditionFailed")
        mock_boto3.client.return_value = mock_client

        with pytest.raises(ObjectExistsError):
            _storage().save("questions/a.pdf", b"data")

    @patch("studyhub.storage.s3.boto3")
    def test_no_credentials_is_config_error(self, mock_boto3):
        mock_client = MagicMock()
        mock_client.put_object.side_effect = NoCredentialsError()
        mock_boto3.client.return_value = mock_client

        with pytest.raises(StorageConfigError):
            _storage().save("questions/a.pdf", b"data")

    @patch("studyhub.storage.s3.boto3")
    def test_connection_failure_is_transient(self, mock_boto3):
        mock_client = MagicMock()
        mock_client.put_object.side_effect = EndpointConnectionError(endpoint_url="https://s3.example")
        mock_boto3.client.return_value = mock_client

        with pytest.raises(TransientBackendError):
            _storage().save("questions/a.pdf", b"data")

    @patch("studyhub.storage.s3.boto3")
    def test_delete_calls_delete_object(self, mock_boto3):
        mock_client = MagicMock()
        mock_boto3.client.return_value = mock_client

        _storage().delete("questions/a.pdf")
        mock_client.delete_object.assert_called_once_with(Bucket="my-bucket", Key="questions/a.pdf")

    @patch("studyhub.storage.s3.boto3")
    def test_delete_missing_key_is_noop(self, mock_boto3):
        mock_client = MagicMock()
        mock_client.delete_object.side_effect = _client_error("NoSuchKey", "DeleteObject")
        mock_boto3.client.return_value = mock_client

        _storage().delete("questions/a.pdf")

    @patch("studyhub.storage.s3.boto3")
    def test_delete_server_error_raises(self, mock_boto3):
        mock_client = MagicMock()
        mock_client.delete_object.side_effect = _client_error("InternalError", "DeleteObject")
        mock_boto3.client.return_value = mock_client

        with pytest.raises(TransientBackendError):
            _storage().delete("questions/a.pdf")


class TestS3Urls:
    def test_default_public_base_url(self):
        assert _storage().get_url("a/b.pdf") == "https://my-bucket.s3.us-east-1.amazonaws.com/a/b.pdf"

    def test_endpoint_public_base_url(self):
        storage = _storage(endpoint_url="https://storage.googleapis.com/")
        assert storage.get_url("a/b.pdf") == "https://storage.googleapis.com/my-bucket/a/b.pdf"

    def test_explicit_public_base_url(self):
        storage = _storage(public_base_url="https://cdn.example.com/")
        assert storage.get_url("a/b.pdf") == "https://cdn.example.com/a/b.pdf"

    def test_owns_signed_url(self):
        storage = _storage()
        signed = "https://my-bucket.s3.amazonaws.com/a/b.pdf?X-Amz-Signature=abc"
        assert storage.owns_url(signed)
        assert storage.owns_url("https://my-bucket.s3.us-east-1.amazonaws.com/a/b.pdf")

    def test_rejects_foreign_url(self):
        storage = _storage()
        assert not storage.owns_url("https://other-bucket.s3.amazonaws.com/a/b.pdf")
        assert not storage.owns_url("/uploads/a/b.pdf")
