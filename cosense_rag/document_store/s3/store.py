import logging
import mimetypes
from typing import Any

import boto3
from botocore.exceptions import ClientError

from cosense_rag.document_store.base import ObjectStoreBackend

logger = logging.getLogger(__name__)


class S3ObjectStore(ObjectStoreBackend):
    """S3-compatible object store (Cloudflare R2, AWS S3, MinIO)."""

    def __init__(
        self,
        *,
        bucket: str,
        region: str | None = None,
        endpoint_url: str | None = None,
        aws_access_key_id: str | None = None,
        aws_secret_access_key: str | None = None,
    ):
        self.bucket = bucket

        client_kwargs: dict[str, Any] = {}
        if region:
            client_kwargs["region_name"] = region
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        if aws_access_key_id and aws_secret_access_key:
            client_kwargs["aws_access_key_id"] = aws_access_key_id
            client_kwargs["aws_secret_access_key"] = aws_secret_access_key

        self._client = boto3.client("s3", **client_kwargs)

    def _content_type(self, key: str) -> str:
        if key.endswith(".mdx"):
            return "text/markdown; charset=utf-8"
        content_type, _ = mimetypes.guess_type(key)
        return content_type or "text/plain; charset=utf-8"

    def put_object(self, key: str, content: str) -> None:
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=content.encode("utf-8"),
            ContentType=self._content_type(key),
        )

    def get_object(self, key: str) -> str | None:
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if e.response["Error"]["Code"] in ("404", "NoSuchKey"):
                return None
            raise
        return response["Body"].read().decode("utf-8")

    def delete_object(self, key: str) -> None:
        self._client.delete_object(Bucket=self.bucket, Key=key)

    def list_keys(self, prefix: str = "") -> list[str]:
        keys: list[str] = []
        paginator = self._client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            keys.extend(obj["Key"] for obj in page.get("Contents", []))
        return keys

    def ping(self) -> None:
        self._client.head_bucket(Bucket=self.bucket)
