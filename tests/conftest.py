"""テスト共通フィクスチャ — インメモリSQLiteをget_dbに差し込む"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from onsen_api.database import get_db, init_db, set_sqlite_pragma
from onsen_api.main import app
from onsen_api.models import Onsen

# 松江市内の2件 + 遠方1件
MATSUE_ONSENS = [
    {"name": "松江しんじ湖温泉", "description": "宍道湖畔の温泉街", "tags": "outdoor,露天風呂",
     "latitude": 35.4681, "longitude": 133.0486},
    {"name": "玉造温泉", "description": "美肌の湯", "tags": "indoor,家族風呂",
     "latitude": 35.4690, "longitude": 133.0490},
    {"name": "乳頭温泉", "description": "秘湯", "tags": "outdoor",
     "latitude": 40.0, "longitude": 140.0},
]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", set_sqlite_pragma)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def seeded_db(db):
    for row in MATSUE_ONSENS:
        db.add(Onsen(**row))
    db.commit()
    return db


@pytest.fixture
def client(session_factory, seeded_db):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
