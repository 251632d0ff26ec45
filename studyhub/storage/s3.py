"""Signed-URL backend for S3-compatible object stores.

Works against AWS S3 and against Firebase/Google Cloud Storage buckets through
the GCS interoperability endpoint (``S3_ENDPOINT_URL=https://storage.googleapis.com``
with HMAC keys).
"""

from __future__ import annotations

import logging
import threading

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError, PartialCredentialsError

from studyhub.storage.base import StorageBackend
from studyhub.storage.errors import ObjectExistsError, StorageConfigError, StorageError, TransientBackendError

logger = logging.getLogger(__name__)

CONFIG_ERROR_CODES = {
    "AccessDenied",
    "InvalidAccessKeyId",
    "SignatureDoesNotMatch",
    "NoSuchBucket",
    "AuthorizationHeaderMalformed",
    "InvalidBucketName",
}
MISSING_OBJECT_CODES = {"NoSuchKey", "404", "NotFound"}


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def _classify(exc: Exception, action: str, key: str) -> StorageError:
    if isinstance(exc, (NoCredentialsError, PartialCredentialsError)):
        return StorageConfigError(f"S3 credentials missing while trying to {action} {key}: {exc}")
    if isinstance(exc, ClientError) and _error_code(exc) in CONFIG_ERROR_CODES:
        return StorageConfigError(f"S3 rejected {action} of {key}: {_error_code(exc)}")
    if isinstance(exc, ClientError) and _error_code(exc) == "PreconditionFailed":
        return ObjectExistsError(f"S3 object already exists: {key}")
    return TransientBackendError(f"S3 {action} failed for {key}: {exc}")


class S3Storage(StorageBackend):
    name = "remote-signed"

    def __init__(
        self,
        bucket: str,
        region: str,
        access_key_id: str,
        secret_access_key: str,
        endpoint_url: str = "",
        public_base_url: str = "",
        presigned_expiry: int = 604800,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url.rstrip("/")
        self.presigned_expiry = presigned_expiry
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._client = None
        self._lock = threading.Lock()

        if public_base_url:
            self.public_base_url = public_base_url.rstrip("/")
        elif self.endpoint_url:
            self.public_base_url = f"{self.endpoint_url}/{bucket}"
        elif region:
            self.public_base_url = f"https://{bucket}.s3.{region}.amazonaws.com"
        else:
            self.public_base_url = f"https://{bucket}.s3.amazonaws.com"

    @property
    def client(self):
        if self._client is not None:
            return self._client
        with self._lock:
            if self._client is None:
                if not self.bucket or not self._access_key_id or not self._secret_access_key:
                    raise StorageConfigError(
                        "S3 credentials not found. Set S3_BUCKET, S3_ACCESS_KEY_ID and S3_SECRET_ACCESS_KEY"
                    )
                client_kwargs: dict = {
                    "service_name": "s3",
                    "aws_access_key_id": self._access_key_id,
                    "aws_secret_access_key": self._secret_access_key,
                }
                if self.region:
                    client_kwargs["region_name"] = self.region
                if self.endpoint_url:
                    client_kwargs["endpoint_url"] = self.endpoint_url
                try:
                    self._client = boto3.client(**client_kwargs)
                except BotoCoreError as exc:
                    raise StorageConfigError(f"S3 client initialization failed: {exc}") from exc
                logger.info("S3 storage initialized for bucket=%s", self.bucket)
        return self._client

    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                IfNoneMatch="*",
            )
        except (ClientError, BotoCoreError) as exc:
            raise _classify(exc, "upload", key) from exc
        logger.info("Uploaded %s to s3://%s/%s (%d bytes)", key, self.bucket, key, len(data))
        return self.signed_url(key)

    def signed_url(self, key: str) -> str:
        """Long-lived signed URL, or the plain object URL if signing fails.

        The plain URL only works when the bucket allows public reads; otherwise
        clients will get a 403 for this object.
        """
        try:
            url = self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=self.presigned_expiry,
            )
        except (ClientError, BotoCoreError) as exc:
            logger.warning("Could not sign URL for %s, using plain URL: %s", key, exc)
            return self.get_url(key)
        logger.debug("Generated presigned URL for %s", key)
        return url

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except ClientError as exc:
            if _error_code(exc) in MISSING_OBJECT_CODES:
                logger.debug("S3 object %s already gone", key)
                return
            raise _classify(exc, "delete", key) from exc
        except BotoCoreError as exc:
            raise _classify(exc, "delete", key) from exc
        logger.info("Deleted s3://%s/%s", self.bucket, key)

    def get_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def owns_url(self, url: str) -> bool:
        base = url.split("?", 1)[0]
        if base.startswith(f"{self.public_base_url}/"):
            return True
        if self.endpoint_url:
            return base.startswith(f"{self.endpoint_url}/{self.bucket}/")
        return base.startswith(f"https://{self.bucket}.s3.")
