"""
Dependency injection container.

Lazily builds and caches the core components from settings. Every
component can also be constructed directly with injected collaborators,
which is what tests do.

Dependencies: curriculum_rag.configs, curriculum_rag.boundary, curriculum_rag.core
System role: DI container for scripts and the host application
"""

from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from curriculum_rag.boundary.db.connection import get_async_engine, get_async_session_factory
from curriculum_rag.boundary.embeddings import Embedder, build_embedder
from curriculum_rag.boundary.vdb import VectorIndexBase, get_vector_index
from curriculum_rag.configs import Settings, get_settings
from curriculum_rag.core.document_processing import BatchPolicy, ChunkSeeder, IngestionPipeline
from curriculum_rag.core.document_processing.tasks import (
    HttpBlobFetcher,
    LocalBlobFetcher,
    RoutingBlobFetcher,
    S3BlobFetcher,
)
from curriculum_rag.core.retriever import Retriever


class ServiceContainer:
    """Container for cached service instances."""

    def __init__(
        self,
        settings: Settings | None = None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        embedder: Embedder | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._engine: AsyncEngine | None = None
        self._session_factory = session_factory
        self._embedder = embedder
        self._vector_index: VectorIndexBase | None = None
        self._retriever: Retriever | None = None
        self._fetcher: RoutingBlobFetcher | None = None
        self._pipeline: IngestionPipeline | None = None
        self._seeder: ChunkSeeder | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = get_async_engine(self.settings.database)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = get_async_session_factory(self.engine)
        return self._session_factory

    @property
    def embedder(self) -> Embedder:
        if self._embedder is None:
            self._embedder = build_embedder(self.settings.embedding)
        return self._embedder

    @property
    def vector_index(self) -> VectorIndexBase:
        if self._vector_index is None:
            self._vector_index = get_vector_index(self.session_factory, self.settings.retrieval)
        return self._vector_index

    @property
    def retriever(self) -> Retriever:
        if self._retriever is None:
            self._retriever = Retriever(
                embedder=self.embedder,
                index=self.vector_index,
                default_limit=self.settings.retrieval.default_limit,
                default_threshold=self.settings.retrieval.similarity_threshold,
            )
        return self._retriever

    @property
    def fetcher(self) -> RoutingBlobFetcher:
        if self._fetcher is None:
            storage = self.settings.storage
            self._fetcher = RoutingBlobFetcher(
                local=LocalBlobFetcher(),
                http=HttpBlobFetcher(timeout_seconds=storage.http_timeout_seconds),
                s3=S3BlobFetcher(bucket=storage.s3_bucket, region=storage.s3_region),
            )
        return self._fetcher

    @property
    def pipeline(self) -> IngestionPipeline:
        if self._pipeline is None:
            ingestion = self.settings.ingestion
            self._pipeline = IngestionPipeline(
                session_factory=self.session_factory,
                embedder=self.embedder,
                fetcher=self.fetcher,
                policy=BatchPolicy.from_settings(ingestion),
                chunk_size=ingestion.chunk_size,
                chunk_overlap=ingestion.chunk_overlap,
                fetch_timeout_seconds=ingestion.fetch_timeout_seconds,
            )
        return self._pipeline

    @property
    def seeder(self) -> ChunkSeeder:
        if self._seeder is None:
            self._seeder = ChunkSeeder(
                session_factory=self.session_factory,
                embedder=self.embedder,
                policy=BatchPolicy.from_settings(self.settings.ingestion, seeding=True),
            )
        return self._seeder

    @property
    def stale_after(self) -> timedelta:
        return timedelta(minutes=self.settings.ingestion.stale_after_minutes)

    async def dispose(self) -> None:
        """Close pooled database connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
