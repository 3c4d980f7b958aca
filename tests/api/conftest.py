from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from bitebox.api.main import app
from bitebox.infrastructure.db import session as db_session
from bitebox.infrastructure.db.models import menu, order, review  # noqa: F401
from bitebox.infrastructure.db.models.account import Base
from bitebox.tools.seed import seed_demo_data


@pytest.fixture
def engine(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Engine]:
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{tmp_path / 'bitebox.db'}")
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.delenv("REDIS_URL", raising=False)
    db_session.dispose_engines()

    database_engine = db_session.get_engine()
    Base.metadata.create_all(database_engine)
    seed_demo_data(database_engine)

    yield database_engine

    db_session.dispose_engines()


@pytest.fixture
def client(engine: Engine) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
