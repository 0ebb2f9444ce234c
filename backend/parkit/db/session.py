from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
import importlib.util
from parkit.core.config import settings


def _normalize_url(url: str) -> str:
    """Route plain postgres URLs to psycopg v3 unless psycopg2 is installed."""
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    if url.startswith("postgresql://") and importlib.util.find_spec("psycopg2") is None:
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


if not settings.database_url:
    raise RuntimeError("DATABASE_URL environment variable must be set")
SQLALCHEMY_DATABASE_URL = _normalize_url(settings.database_url)

engine_kwargs = {}
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    # in-memory sqlite: all sessions must share the one connection holding the data
    if SQLALCHEMY_DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_kwargs)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
