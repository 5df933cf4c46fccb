"""
Test suite for settings, the engine helpers and the vector index factory.

System role: Verification of configuration wiring
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from curriculum_rag.boundary.db.connection import get_async_db, get_async_engine
from curriculum_rag.boundary.vdb import ExactVectorIndex, PgVectorIndex, get_vector_index
from curriculum_rag.configs.database import DatabaseSettings
from curriculum_rag.configs.ingestion import IngestionSettings
from curriculum_rag.configs.retrieval import RetrievalSettings
from curriculum_rag.core.document_processing import BatchPolicy
from curriculum_rag.core.exceptions import ValidationError


class TestDatabaseSettings:
    def test_async_database_url_should_use_asyncpg(self) -> None:
        settings = DatabaseSettings(
            host="db", port=5433, user="u", password="p", db="rag", sslmode="prefer", url=None
        )

        assert settings.async_database_url == "postgresql+asyncpg://u:p@db:5433/rag"
        assert settings.is_postgres is True

    def test_sslmode_require_should_add_ssl_param(self) -> None:
        settings = DatabaseSettings(host="db", sslmode="require", url=None)

        assert settings.async_database_url.endswith("?ssl=require")

    def test_url_override_should_win(self) -> None:
        settings = DatabaseSettings(url="sqlite+aiosqlite:///local.db")

        assert settings.async_database_url == "sqlite+aiosqlite:///local.db"
        assert settings.is_postgres is False

    def test_env_prefix_should_be_read(self, monkeypatch) -> None:
        monkeypatch.setenv("POSTGRES_HOST", "rds.internal")

        assert DatabaseSettings().host == "rds.internal"


class TestEngineHelpers:
    @pytest.mark.asyncio
    async def test_sqlite_engine_should_skip_pool_arguments(self) -> None:
        engine = get_async_engine(DatabaseSettings(url="sqlite+aiosqlite:///:memory:"))

        assert engine.dialect.name == "sqlite"
        await engine.dispose()

    @pytest.mark.asyncio
    async def test_get_async_db_should_yield_session(self, session_factory) -> None:
        sessions = get_async_db(session_factory)

        session = await sessions.__anext__()
        assert session.is_active
        await sessions.aclose()


class TestBatchPolicy:
    def test_from_settings_should_pick_seed_delay_when_seeding(self) -> None:
        settings = IngestionSettings(batch_delay_seconds=0.5, seed_batch_delay_seconds=1.5)

        assert BatchPolicy.from_settings(settings).batch_delay_seconds == 0.5
        assert BatchPolicy.from_settings(settings, seeding=True).batch_delay_seconds == 1.5

    @pytest.mark.parametrize(
        "kwargs",
        [{"embed_batch_size": 0}, {"insert_batch_size": 0}, {"batch_delay_seconds": -1}],
    )
    def test_invalid_policy_should_raise(self, kwargs) -> None:
        with pytest.raises(ValueError):
            BatchPolicy(**kwargs)


class TestVectorIndexFactory:
    @pytest.mark.parametrize(
        "index_type, expected",
        [("pgvector", PgVectorIndex), ("exact", ExactVectorIndex), ("EXACT", ExactVectorIndex)],
    )
    def test_get_vector_index_should_select_backend(self, index_type, expected) -> None:
        index = get_vector_index(MagicMock(), RetrievalSettings(index_type=index_type))

        assert isinstance(index, expected)

    def test_unknown_index_type_should_raise(self) -> None:
        with pytest.raises(ValidationError):
            get_vector_index(MagicMock(), RetrievalSettings(index_type="faiss"))


class TestPgVectorAlignment:
    def test_empty_subject_should_leave_only_level_condition(self) -> None:
        expression = PgVectorIndex(MagicMock())._alignment_expression("", "Form 2")

        sql = str(expression.compile(dialect=postgresql.dialect()))

        assert "chunks.level" in sql
        assert "chunks.subject" not in sql
