"""
Blob fetch tasks.

Fetch raw document bytes from local disk, HTTP(S) or S3 given the
document's stored locator.

Dependencies: httpx, boto3
System role: First stage of document ingestion pipeline
"""

import asyncio
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol
from urllib.parse import unquote, urlparse

import boto3
import httpx
from botocore.exceptions import BotoCoreError, ClientError

from curriculum_rag.core.exceptions import BlobFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchedBlob:
    """Raw document bytes and the content type reported by the store, if any."""

    data: bytes
    mime_type: str | None = None


class BlobFetcher(Protocol):
    async def fetch(self, locator: str) -> FetchedBlob: ...


class LocalBlobFetcher:
    """Read documents from the local filesystem (plain paths or file:// URLs)."""

    async def fetch(self, locator: str) -> FetchedBlob:
        parsed = urlparse(locator)
        path = Path(unquote(parsed.path) if parsed.scheme == "file" else locator)

        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            raise BlobFetchError(f"Failed to read local file: {e}", locator) from e

        mime_type, _ = mimetypes.guess_type(path.name)
        return FetchedBlob(data=data, mime_type=mime_type)


class HttpBlobFetcher:
    """Download documents over HTTP(S)."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize HTTP fetcher.

        Args:
            timeout_seconds: Per-request timeout when no client is injected
            client: Shared AsyncClient; a short-lived one is created per fetch otherwise
        """
        self._timeout = timeout_seconds
        self._client = client

    async def _get(self, client: httpx.AsyncClient, locator: str) -> httpx.Response:
        response = await client.get(locator, follow_redirects=True)
        response.raise_for_status()
        return response

    async def fetch(self, locator: str) -> FetchedBlob:
        try:
            if self._client is not None:
                response = await self._get(self._client, locator)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await self._get(client, locator)
        except httpx.HTTPStatusError as e:
            raise BlobFetchError(
                f"HTTP {e.response.status_code} fetching document",
                locator,
                {"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise BlobFetchError(f"Failed to download document: {e}", locator) from e

        content_type = response.headers.get("content-type")
        mime_type = content_type.split(";")[0].strip() if content_type else None
        return FetchedBlob(data=response.content, mime_type=mime_type)


class S3BlobFetcher:
    """Download documents from S3 (s3://bucket/key or a bare key in the default bucket)."""

    def __init__(self, bucket: str, region: str = "eu-west-1", client=None) -> None:
        """
        Initialize S3 fetcher.

        Args:
            bucket: Default bucket for bare object keys
            region: AWS region for the bucket
            client: Injected boto3 S3 client
        """
        self._bucket = bucket
        self._s3_client = client or boto3.client("s3", region_name=region)

    def _resolve(self, locator: str) -> tuple[str, str]:
        parsed = urlparse(locator)
        if parsed.scheme == "s3":
            return parsed.netloc, parsed.path.lstrip("/")
        return self._bucket, locator.lstrip("/")

    def _download(self, bucket: str, key: str) -> FetchedBlob:
        response = self._s3_client.get_object(Bucket=bucket, Key=key)
        return FetchedBlob(data=response["Body"].read(), mime_type=response.get("ContentType"))

    async def fetch(self, locator: str) -> FetchedBlob:
        bucket, key = self._resolve(locator)
        if not bucket or not key:
            raise BlobFetchError(f"Invalid S3 locator: {locator}", locator)

        try:
            return await asyncio.to_thread(self._download, bucket, key)
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            if error_code in ("404", "NoSuchKey"):
                raise BlobFetchError(f"File not found in S3: {key}", locator) from e
            raise BlobFetchError(f"Failed to download from S3: {e}", locator) from e
        except BotoCoreError as e:
            raise BlobFetchError(f"Failed to download from S3: {e}", locator) from e


class RoutingBlobFetcher:
    """Dispatch to a concrete fetcher by locator scheme."""

    def __init__(
        self,
        local: BlobFetcher | None = None,
        http: BlobFetcher | None = None,
        s3: BlobFetcher | None = None,
    ) -> None:
        self._local = local or LocalBlobFetcher()
        self._http = http
        self._s3 = s3

    def _select(self, locator: str) -> BlobFetcher | None:
        scheme = urlparse(locator).scheme.lower()
        if scheme in ("http", "https"):
            return self._http
        if scheme == "s3":
            return self._s3
        # Windows drive letters parse as one-letter schemes
        if scheme in ("", "file") or len(scheme) == 1:
            return self._local
        return None

    async def fetch(self, locator: str) -> FetchedBlob:
        if not locator:
            raise BlobFetchError("Document has no storage locator")

        fetcher = self._select(locator)
        if fetcher is None:
            raise BlobFetchError(f"No fetcher configured for locator: {locator}", locator)

        logger.info(
            f"{__name__}:fetch - Fetching document bytes",
            extra={"fetcher": type(fetcher).__name__},
        )
        return await fetcher.fetch(locator)
