# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from tasktracker.config import Settings
from tasktracker.db import TaskStore
from tasktracker.main import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        app_name="Task Tracker",
        log_level="DEBUG",
        host="127.0.0.1",
        port=8000,
        reload=False,
        cors_origins=["*"],
        database_url=f"sqlite:///{tmp_path / 'tasks.db'}",
        db_retry_delay=0.01,
    )


@pytest.fixture()
def store(settings: Settings) -> Iterator[TaskStore]:
    s = TaskStore(settings.database_url)
    yield s
    s.close()


@pytest.fixture()
def client(settings: Settings, store: TaskStore) -> Iterator[TestClient]:
    """Client whose lifespan has already connected the store."""
    app = create_app(settings, store)
    with TestClient(app) as c:
        yield c
