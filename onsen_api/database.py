"""DB接続・セッション管理"""
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .config import DATABASE_URL

# SQLite用: スレッド間共有を許可
connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False

engine = create_engine(DATABASE_URL, connect_args=connect_args, echo=False)


def set_sqlite_pragma(dbapi_conn, connection_record):
    """WALモード + 外部キー有効化"""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


if DATABASE_URL.startswith("sqlite"):
    event.listen(engine, "connect", set_sqlite_pragma)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


class Base(DeclarativeBase):
    pass


def init_db(bind=None):
    """テーブルがなければ作成"""
    from . import models  # noqa: F401  Base.metadataへの登録
    bind = bind or engine
    db_path = bind.url.database
    if bind.url.get_backend_name() == "sqlite" and db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind)


def get_db():
    """FastAPI Depends用"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
