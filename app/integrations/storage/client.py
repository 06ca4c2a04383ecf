"""Supabase-compatible object storage client."""
import logging
from typing import Any

import httpx

from app.config import settings
from app.integrations.resilience import CircuitOpenError, get_circuit_breaker, retry_with_backoff

logger = logging.getLogger(__name__)

BUCKETS = ("advisor-headshots", "blog-images", "firm-logos")


class StorageError(Exception):
    """Raised when an object could not be stored."""


class StorageClient:
    """Async client for the storage REST API.

    Uploads are authenticated with the service key and go through the
    ``storage`` circuit breaker with exponential-backoff retries.
    """

    def __init__(
        self,
        base_url: str | None = None,
        service_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        max_retries: int = 3,
        backoff_base: float = 1.0,
    ):
        self.base_url = (base_url or settings.STORAGE_URL).rstrip("/")
        key = settings.STORAGE_SERVICE_KEY if service_key is None else service_key
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self._breaker = get_circuit_breaker("storage")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout or settings.STORAGE_TIMEOUT_SECONDS,
            headers={"Authorization": f"Bearer {key}", "apikey": key},
            transport=transport,
        )

    async def close(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.base_url}/object/public/{bucket}/{path}"

    async def _post_object(self, bucket: str, path: str, data: bytes, content_type: str) -> dict[str, Any]:
        resp = await self._client.post(
            f"/object/{bucket}/{path}",
            content=data,
            headers={"Content-Type": content_type, "x-upsert": "false", "cache-control": "3600"},
        )
        resp.raise_for_status()
        return resp.json() if resp.content else {}

    async def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        """Store ``data`` at ``bucket/path`` and return its public URL."""
        if bucket not in BUCKETS:
            raise StorageError(f"Unknown bucket '{bucket}'")
        try:
            await retry_with_backoff(
                self._breaker.call, self._post_object, bucket, path, data, content_type,
                max_retries=self.max_retries,
                backoff_base=self.backoff_base,
            )
        except CircuitOpenError as exc:
            logger.warning("Storage circuit open, upload of %s/%s refused", bucket, path)
            raise StorageError("Storage service temporarily unavailable") from exc
        except httpx.HTTPError as exc:
            logger.error("Upload of %s/%s failed: %s", bucket, path, exc)
            raise StorageError("Upload failed") from exc

        logger.info("Uploaded %s/%s (%d bytes)", bucket, path, len(data))
        return self.public_url(bucket, path)
