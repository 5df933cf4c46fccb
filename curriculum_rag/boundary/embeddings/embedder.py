"""
Embedding adapter with normalization, timeouts, retries and validation.

Wraps any LangChain ``Embeddings`` provider. Every upstream call is bounded
by a timeout. Transient failures are retried with exponential-jitter
backoff; whatever still fails surfaces as EmbeddingProviderError.

Dependencies: langchain_core, tenacity, httpx, openai
System role: The single embedding path for ingestion and query time
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Sequence

import httpx
import openai
from langchain_core.embeddings import Embeddings
from tenacity import (
    AsyncRetrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from curriculum_rag.core.exceptions import EmbeddingProviderError

logger = logging.getLogger(__name__)


def normalize_text(text: str) -> str:
    """Flatten embedded newlines to spaces and trim."""
    return text.replace("\n", " ").strip()


# Request timeout, rate limit and upstream 5xx
RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

_TRANSIENT_ERRORS = (
    TimeoutError,
    ConnectionError,
    httpx.TransportError,
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


def is_transient_error(exc: BaseException) -> bool:
    """
    Whether another attempt could succeed.

    Provider SDK errors without a known class are judged by their HTTP
    status, exposed as ``status_code`` (OpenAI) or ``code`` (Google).
    Authentication, validation and unknown-model errors are final.
    """
    if isinstance(exc, _TRANSIENT_ERRORS):
        return True
    status = getattr(exc, "status_code", None)
    if status is None:
        status = getattr(exc, "code", None)
    return isinstance(status, int) and status in RETRYABLE_STATUS_CODES


class Embedder:
    """
    Maps text to fixed-dimension vectors through one embedding provider.

    The provider and dimension are injected so tests can pass deterministic
    stub providers. ``embed_many`` issues one batched upstream call.
    """

    def __init__(
        self,
        provider: Embeddings,
        dimension: int = 1536,
        timeout_seconds: float | None = 30.0,
        max_attempts: int = 3,
        retry_wait_initial: float = 1.0,
        retry_wait_max: float = 10.0,
    ) -> None:
        """
        Initialize the embedder.

        Args:
            provider: LangChain embeddings implementation
            dimension: Expected vector length for every output
            timeout_seconds: Bound on each upstream call (None disables)
            max_attempts: Attempts per call before EmbeddingProviderError
            retry_wait_initial: First backoff delay in seconds
            retry_wait_max: Backoff ceiling in seconds
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.provider = provider
        self.dimension = dimension
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max_attempts
        self._retry_wait_initial = retry_wait_initial
        self._retry_wait_max = retry_wait_max

    async def _call(
        self,
        operation: str,
        call: Callable[[], Awaitable[Any]],
    ) -> Any:
        retrying = AsyncRetrying(
            retry=retry_if_exception(is_transient_error),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(
                initial=self._retry_wait_initial,
                max=self._retry_wait_max,
                jitter=self._retry_wait_initial,
            ),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:{operation} - Retry "
                f"{retry_state.attempt_number}/{self.max_attempts} after "
                f"{type(retry_state.outcome.exception()).__name__}"
            ),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await asyncio.wait_for(call(), timeout=self.timeout_seconds)
        except asyncio.TimeoutError as e:
            raise EmbeddingProviderError(
                "Embedding request timed out",
                details={"operation": operation, "timeout_seconds": self.timeout_seconds},
            ) from e
        except Exception as e:
            raise EmbeddingProviderError(
                f"Embedding request failed: {e}",
                details={"operation": operation, "error_type": type(e).__name__},
            ) from e

    def _validate_vector(self, vector: Sequence[float], operation: str) -> list[float]:
        if len(vector) != self.dimension:
            raise EmbeddingProviderError(
                "Embedding provider returned a vector of unexpected dimension",
                details={
                    "operation": operation,
                    "expected": self.dimension,
                    "actual": len(vector),
                },
            )
        return [float(x) for x in vector]

    async def embed_one(self, text: str) -> list[float]:
        """
        Embed a single text.

        Raises:
            EmbeddingProviderError: On upstream failure, timeout or bad dimension
        """
        normalized = normalize_text(text)
        vector = await self._call(
            "embed_one", lambda: self.provider.aembed_query(normalized)
        )
        return self._validate_vector(vector, "embed_one")

    async def embed_many(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed several texts in one upstream request.

        Output i is the embedding of input i. An empty input returns an
        empty list without contacting the provider.

        Raises:
            EmbeddingProviderError: On upstream failure, timeout, wrong count or dimension
        """
        if not texts:
            return []

        normalized = [normalize_text(t) for t in texts]
        vectors = await self._call(
            "embed_many", lambda: self.provider.aembed_documents(normalized)
        )
        if len(vectors) != len(normalized):
            raise EmbeddingProviderError(
                "Embedding provider returned the wrong number of vectors",
                details={"expected": len(normalized), "actual": len(vectors)},
            )

        logger.debug(
            f"{__name__}:embed_many - Embedded batch",
            extra={"count": len(vectors), "dimension": self.dimension},
        )
        return [self._validate_vector(v, "embed_many") for v in vectors]
