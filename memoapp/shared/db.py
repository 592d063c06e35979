import logging
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from memoapp.shared.config import settings

logger = logging.getLogger(__name__)

# Local SQLite DB under ./storage/ (dev only, created if missing)
ROOT = Path(__file__).resolve().parents[2]   # project root
STORAGE_DIR = ROOT / "storage"


class DatabaseNotConfigured(RuntimeError):
    pass


class Base(DeclarativeBase):
    pass


def database_url() -> str:
    if settings.DATABASE_URL:
        return settings.DATABASE_URL
    if settings.ENV == "dev":
        STORAGE_DIR.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{(STORAGE_DIR / 'memos.db').as_posix()}"
    raise DatabaseNotConfigured("DATABASE_URL is not configured")


_engine: Engine | None = None

def get_engine() -> Engine:
    global _engine
    if _engine is None:
        url = database_url()
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        _engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        logger.info("database engine ready (%s)", _engine.url.get_backend_name())
    return _engine

SessionLocal = sessionmaker(autoflush=False)

# FastAPI dep
def get_db():
    db = SessionLocal(bind=get_engine())
    try:
        yield db
    finally:
        db.close()

def init_db(engine: Engine | None = None):
    Base.metadata.create_all(bind=engine or get_engine())
