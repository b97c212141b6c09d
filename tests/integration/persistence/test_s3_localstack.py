"""S3BlobStore against LocalStack."""

from __future__ import annotations

import uuid

import pytest

from slipstream.core.exceptions import BlobStoreError
from slipstream.persistence.s3_backend import S3BlobStore
from tests.integration.conftest import LOCALSTACK_URL, skip_no_localstack


@pytest.fixture
def blob_store(payslip_bucket):
    return S3BlobStore(bucket=payslip_bucket, region="us-east-1", endpoint_url=LOCALSTACK_URL)


@skip_no_localstack
class TestS3LocalStack:
    def test_upload_then_download(self, blob_store, payslip_bucket):
        folder = f"Payslips/run-{uuid.uuid4().hex[:8]}"
        result = blob_store.upload(b"%PDF-1.4 test", "FINZ001_Payslip.pdf", folder)
        assert result.public_url == f"{LOCALSTACK_URL}/{payslip_bucket}/{folder}/FINZ001_Payslip.pdf"
        assert blob_store.download(result.public_url) == b"%PDF-1.4 test"

    def test_missing_object(self, blob_store):
        with pytest.raises(BlobStoreError):
            blob_store.read(f"missing/{uuid.uuid4().hex}.pdf")
