"""S3-compatible artifact store (Cloudflare R2 in production)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from thisaicodes.domain.models.generation import FileDescriptor, GeneratedFile
from thisaicodes.domain.providers.interfaces import ArtifactStore, ArtifactStoreError

DEFAULT_PUBLIC_URL = "https://storage.thisaicodes.com"
DEFAULT_NAMESPACE = "generations"


def object_key(namespace: str, generation_id: str, filename: str) -> str:
    return f"{namespace}/{generation_id}/{filename}"


@dataclass
class S3ArtifactStore(ArtifactStore):
    bucket: str
    public_url: str = DEFAULT_PUBLIC_URL
    namespace: str = DEFAULT_NAMESPACE
    endpoint_url: str | None = None
    region: str | None = None
    _client: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._log = logging.getLogger(__name__)

    def put(self, generation_id: str, file: GeneratedFile) -> FileDescriptor:
        key = object_key(self.namespace, generation_id, file.name)
        content_type = file.type or "text/plain"
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=file.content.encode("utf-8"),
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise ArtifactStoreError(f"Artifact upload failed for {key}: {exc}") from exc
        self._log.debug(
            "Stored generated file",
            extra={"generation_id": generation_id, "bucket": self.bucket, "key": key},
        )
        return FileDescriptor(
            name=file.name,
            url=f"{self.public_url.rstrip('/')}/{key}",
            type=file.type,
        )

    @property
    def client(self):
        if self._client is None:
            session = boto3.session.Session()
            self._client = session.client(
                "s3",
                endpoint_url=self.endpoint_url or None,
                region_name=self.region or None,
                config=Config(s3={"addressing_style": "path"}),
            )
        return self._client


def from_env() -> S3ArtifactStore:
    from django.conf import settings

    return S3ArtifactStore(
        bucket=getattr(settings, "GENERATION_STORAGE_BUCKET", ""),
        public_url=getattr(settings, "GENERATION_STORAGE_PUBLIC_URL", DEFAULT_PUBLIC_URL),
        namespace=getattr(settings, "GENERATION_STORAGE_NAMESPACE", DEFAULT_NAMESPACE),
        endpoint_url=getattr(settings, "GENERATION_STORAGE_ENDPOINT_URL", "") or None,
        region=getattr(settings, "GENERATION_STORAGE_REGION", "") or None,
    )
