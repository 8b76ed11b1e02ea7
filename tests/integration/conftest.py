import os
from collections.abc import Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from docintake.config.settings import Settings
from docintake.database.connection import close_pool, get_connection, init_pool

_DOCUMENTS_DDL = """
CREATE TABLE IF NOT EXISTS documents (
    id UUID PRIMARY KEY,
    user_id TEXT NOT NULL,
    title TEXT NOT NULL,
    content TEXT NOT NULL,
    type TEXT NOT NULL,
    file_type TEXT NOT NULL,
    file_size BIGINT NOT NULL,
    file_ref TEXT,
    status TEXT NOT NULL DEFAULT 'PENDING',
    structured_data JSONB,
    extracted_data JSONB NOT NULL DEFAULT '{}'::jsonb,
    created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docintake_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(_DOCUMENTS_DDL)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM documents WHERE id = ANY(%s::uuid[])", (cleanup,))
        conn.commit()


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    return tmp_path
