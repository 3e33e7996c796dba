"""Shared fixtures.

The environment is configured before any ``redesigner`` import so the cached
settings and module-level engines point at a throwaway SQLite file and Celery
runs tasks eagerly in-process.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="redesigner-tests-")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/test.db"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CRAWL_DELAY_SECONDS"] = "0"
os.environ["LINK_CHECK_LIMIT"] = "0"
os.environ["OPENAI_API_KEY"] = "test-key"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"

import pytest  # noqa: E402

import redesigner.models  # noqa: E402,F401
from redesigner.database import Base, SyncSessionLocal, sync_engine  # noqa: E402
from redesigner.repositories import SqlJobStore  # noqa: E402


@pytest.fixture(autouse=True)
def _tables():
    """Fresh schema for every test."""
    Base.metadata.create_all(sync_engine)
    yield
    Base.metadata.drop_all(sync_engine)


@pytest.fixture()
def store() -> SqlJobStore:
    return SqlJobStore(SyncSessionLocal)


CLEAN_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<title>Acme Redesigned</title>
</head>
<body>
<main><h1>Acme</h1><p>Fresh new look.</p></main>
</body>
</html>"""


@pytest.fixture()
def clean_html() -> str:
    return CLEAN_HTML
