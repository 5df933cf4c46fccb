"""
Test suite for the command-line scripts.

System role: Verification of schema creation and seed CLI argument handling
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.ext.asyncio import create_async_engine

from curriculum_rag.scripts.create_tables import create_all_tables, drop_all_tables
from curriculum_rag.scripts.seed_chunks import build_parser, main


class TestCreateTables:
    @pytest.mark.asyncio
    async def test_create_and_drop_should_manage_tables(self) -> None:
        engine = create_async_engine("sqlite+aiosqlite:///:memory:")
        try:
            await create_all_tables(engine)
            async with engine.connect() as conn:
                created = await conn.run_sync(lambda sync: inspect(sync).get_table_names())

            await drop_all_tables(engine)
            async with engine.connect() as conn:
                remaining = await conn.run_sync(lambda sync: inspect(sync).get_table_names())
        finally:
            await engine.dispose()

        assert {"documents", "chunks"} <= set(created)
        assert remaining == []


class TestSeedCli:
    def test_parser_defaults(self) -> None:
        args = build_parser().parse_args(["chunks.json"])

        assert args.path == "chunks.json"
        assert args.subject == "History"
        assert args.language == "sw"

    def test_unreadable_seed_file_should_exit_with_code_2(self, tmp_path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([str(tmp_path / "missing.json")])

        assert exc_info.value.code == 2

    def test_malformed_seed_file_should_exit_with_code_2(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SystemExit) as exc_info:
            main([str(path)])

        assert exc_info.value.code == 2
