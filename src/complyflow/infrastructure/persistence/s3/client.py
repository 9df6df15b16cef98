"""Object storage for files organisations upload to their knowledge base.

Uploads live in an S3-compatible bucket (Supabase Storage, MinIO or AWS S3).
The ``storage_path`` recorded in ``organization_knowledge_base`` may or may
not be prefixed with the bucket name, so both forms resolve to the same key.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import aioboto3
from botocore.exceptions import ClientError

from complyflow.exception.api_exceptions import StorageError

logger = logging.getLogger(__name__)

MISSING_OBJECT_CODES = ("NoSuchKey", "404")


class KnowledgeFileStorage:
    """Reads organisation uploads from the knowledge bucket.

    Attributes:
        bucket_name: Bucket holding uploaded files
        endpoint_url: S3-compatible endpoint (None for AWS)
        region: Storage region
    """

    def __init__(
        self,
        bucket_name: str,
        access_key_id: str,
        secret_access_key: str,
        endpoint_url: Optional[str] = None,
        region: str = "eu-west-2",
    ):
        self.bucket_name = bucket_name
        self.endpoint_url = endpoint_url
        self.region = region
        self._credentials = {
            "aws_access_key_id": access_key_id,
            "aws_secret_access_key": secret_access_key,
        }
        self._session = aioboto3.Session()

    @asynccontextmanager
    async def _s3(self):
        async with self._session.client(
            "s3",
            region_name=self.region,
            endpoint_url=self.endpoint_url,
            **self._credentials,
        ) as client:
            yield client

    def object_key(self, storage_path: str) -> str:
        """Key of an upload within the bucket."""
        key = storage_path.lstrip("/")
        prefix = f"{self.bucket_name}/"
        if key.startswith(prefix):
            key = key[len(prefix) :]
        return key

    async def download(self, storage_path: str) -> bytes:
        """Fetch the raw bytes of an uploaded file.

        Raises:
            StorageError: If the object is missing or the store rejects the read
        """
        key = self.object_key(storage_path)
        async with self._s3() as s3:
            try:
                response = await s3.get_object(Bucket=self.bucket_name, Key=key)
                async with response["Body"] as body:
                    data = await body.read()
            except ClientError as e:
                if e.response["Error"]["Code"] in MISSING_OBJECT_CODES:
                    raise StorageError(f"File not found in storage: {key}") from e
                raise StorageError(f"Storage read failed for {key}") from e

        logger.debug(f"Downloaded {len(data)} bytes of {key}")
        return data
