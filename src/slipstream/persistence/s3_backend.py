"""S3 payslip storage backend implementing IBlobStore."""

from __future__ import annotations

from urllib.parse import quote, unquote

import boto3
from botocore.exceptions import ClientError

from slipstream.core.exceptions import BlobStoreError
from slipstream.models.delivery import UploadResult


class S3BlobStore:
    """Production IBlobStore backed by S3.

    Objects are addressed by ``<folder>/<file_name>``. The public URL is built
    from ``public_base_url`` when one fronts the bucket, otherwise from the
    bucket's virtual-hosted (or endpoint-override) address.
    """

    def __init__(self, bucket: str, region: str = "us-east-1",
                 endpoint_url: str | None = None, public_base_url: str | None = None) -> None:
        self._bucket = bucket
        self._region = region
        self._endpoint_url = endpoint_url
        kwargs: dict = {"region_name": region}
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("s3", **kwargs)
        if public_base_url:
            self._base_url = public_base_url.rstrip("/")
        elif endpoint_url:
            self._base_url = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            self._base_url = f"https://{bucket}.s3.{region}.amazonaws.com"

    def public_url(self, key: str) -> str:
        return f"{self._base_url}/{quote(key)}"

    def key_for(self, url: str) -> str:
        prefix = f"{self._base_url}/"
        if not url.startswith(prefix):
            raise BlobStoreError(f"URL {url!r} does not belong to bucket {self._bucket!r}")
        return unquote(url[len(prefix):])

    def read(self, key: str) -> bytes:
        try:
            resp = self._client.get_object(Bucket=self._bucket, Key=key)
            return resp["Body"].read()
        except ClientError as exc:
            raise BlobStoreError(f"S3 read failed for {key!r}: {exc}") from exc

    def write(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        try:
            self._client.put_object(
                Bucket=self._bucket, Key=key, Body=data, ContentType=content_type,
            )
            return key
        except ClientError as exc:
            raise BlobStoreError(f"S3 write failed for {key!r}: {exc}") from exc

    # ---- IBlobStore methods ----

    def upload(self, data: bytes, file_name: str, folder: str) -> UploadResult:
        key = self.write(f"{folder.strip('/')}/{file_name}", data)
        return UploadResult(public_url=self.public_url(key), key=key)

    def download(self, url: str) -> bytes:
        return self.read(self.key_for(url))
