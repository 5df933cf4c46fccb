"""
Gemini embeddings pinned to the chunks table dimension.

GoogleGenerativeAIEmbeddings only honours output_dimensionality when it is
passed per call, so this adapter owns a client and supplies the dimension
and retrieval task type on every request.

Dependencies: langchain_google_genai, langchain_core
System role: Keeps Google vectors the same length as the chunks column
"""

import logging

from langchain_core.embeddings import Embeddings
from langchain_google_genai import GoogleGenerativeAIEmbeddings

logger = logging.getLogger(__name__)

DOCUMENT_TASK = "RETRIEVAL_DOCUMENT"
QUERY_TASK = "RETRIEVAL_QUERY"


class FixedDimensionEmbeddings(Embeddings):
    """
    LangChain Embeddings over a Gemini client with a fixed output dimension.

    gemini-embedding-001 can truncate to 1536 dimensions, which lets it fill
    the same column as OpenAI's text-embedding-3-small.
    """

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        client: GoogleGenerativeAIEmbeddings | None = None,
        **client_kwargs,
    ) -> None:
        """
        Args:
            model: Gemini embedding model ID
            output_dimensionality: Length of every returned vector
            client: Pre-built client (tests inject a fake)
            **client_kwargs: Passed to GoogleGenerativeAIEmbeddings, e.g. google_api_key
        """
        self.model = model
        self.output_dimensionality = output_dimensionality
        self._client = client or GoogleGenerativeAIEmbeddings(model=model, **client_kwargs)
        logger.info(
            f"{__name__}:__init__ - Gemini embeddings ready",
            extra={"model": model, "dimension": output_dimensionality},
        )

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return self._client.embed_documents(
            texts,
            task_type=DOCUMENT_TASK,
            output_dimensionality=self.output_dimensionality,
        )

    def embed_query(self, text: str) -> list[float]:
        return self._client.embed_query(
            text,
            task_type=QUERY_TASK,
            output_dimensionality=self.output_dimensionality,
        )

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        return await self._client.aembed_documents(
            texts,
            task_type=DOCUMENT_TASK,
            output_dimensionality=self.output_dimensionality,
        )

    async def aembed_query(self, text: str) -> list[float]:
        return await self._client.aembed_query(
            text,
            task_type=QUERY_TASK,
            output_dimensionality=self.output_dimensionality,
        )
