"""Database setup helpers (SQLAlchemy engine/session)."""
import os
from contextlib import contextmanager
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker, declarative_base

from sitecms.domain.errors import DuplicateRecordError, RecordStoreError

# Load environment variables from the project root .env
project_dir = Path(__file__).parent.parent.parent.parent
load_dotenv(project_dir / ".env")

from sitecms.config import settings  # noqa: E402

DATABASE_URL = os.getenv("DATABASE_URL", settings.DATABASE_URL)


def build_engine(url: str):
    """Create an engine; SQLite needs cross-thread access for FastAPI workers."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, future=True, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()


def get_db():
    """FastAPI-style dependency to provide a DB session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_errors(session: Session, action: str):
    """Roll back and re-raise SQLAlchemy failures as record store errors."""
    try:
        yield
    except IntegrityError as e:
        session.rollback()
        raise DuplicateRecordError(f"{action} failed: {e.orig}") from e
    except SQLAlchemyError as e:
        session.rollback()
        raise RecordStoreError(f"{action} failed: {e}") from e
