import os
import uuid
from collections.abc import Generator
from datetime import datetime, timezone
from typing import Any

import psycopg
import pytest

from docscan.config.settings import Settings
from docscan.database.connection import (
    close_pool,
    conninfo_from_settings,
    get_connection,
    init_pool,
)
from docscan.database.migrations import apply_schema
from docscan.scan.models import ScanJob, ScanStatus


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docscan_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        psycopg.connect(conninfo_from_settings(test_settings), connect_timeout=3).close()
    except psycopg.Error as e:
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at it")
    init_pool(test_settings, max_size=4)
    try:
        apply_schema()
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture(autouse=True)
def clean_tables(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    if "integration_pool" not in request.fixturenames:
        yield
        return
    yield
    with get_connection() as conn:
        conn.execute("DELETE FROM scan_jobs")
        conn.commit()


@pytest.fixture
def make_job() -> Any:
    def _make(status: ScanStatus = ScanStatus.QUEUED, file_name: str = "doc.pdf") -> ScanJob:
        return ScanJob(
            id=f"scan-{uuid.uuid4().hex}",
            file_name=file_name,
            status=status,
            created_at=datetime.now(timezone.utc),
            file_size_bytes=1024,
        )

    return _make
