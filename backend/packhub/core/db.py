# backend/packhub/core/db.py
import os
from datetime import datetime, timezone

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.engine import make_url
from sqlalchemy.pool import StaticPool
from dotenv import dotenv_values, find_dotenv

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))  # backend/


def _load_env() -> str:
    """
    Copy backend/.env (or the nearest .env) into os.environ. Variables that are
    already set win, so CI and tests can point DATABASE_URL elsewhere.
    """
    path = os.path.join(BASE_DIR, ".env")
    if not os.path.exists(path):
        path = find_dotenv(filename=".env", usecwd=True)
    if not path:
        return ""
    # utf-8-sig and the key strip cope with files saved with a BOM
    for key, value in dotenv_values(path, encoding="utf-8-sig").items():
        key = key.replace("\ufeff", "").strip()
        if value is not None and not os.environ.get(key, "").strip():
            os.environ[key] = value
    return path

dotenv_path = _load_env()

DSN = os.environ.get("DATABASE_URL")
if not DSN or not DSN.strip():
    raise RuntimeError(f"DATABASE_URL is not set. .env: {dotenv_path or '(not found)'}")

url = make_url(DSN)
engine_kwargs = dict(pool_pre_ping=True)

backend = url.get_backend_name()  # e.g. 'sqlite', 'postgresql'
if backend.startswith("sqlite"):
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    # in-memory database must live on a single shared connection
    if url.database in (None, "", ":memory:"):
        engine_kwargs["poolclass"] = StaticPool
elif backend.startswith("postgresql"):
    engine_kwargs.update(pool_size=5, max_overflow=10)

engine = create_engine(DSN, **engine_kwargs)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
