"""
Database Configuration for MermaidUI

SQLAlchemy database setup and session management for the SQLite store
holding collections and diagrams.

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""
import logging

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from config.settings import config
from models.domain import Base, Collection

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_NAME = "Default Collection"
DEFAULT_COLLECTION_DESCRIPTION = "Your default collection of diagrams"


def enable_sqlite_foreign_keys(target: Engine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite connection.

    SQLite ignores ON DELETE CASCADE unless the pragma is set per connection.
    """
    @event.listens_for(target, "connect")
    def _set_sqlite_pragma(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


DATABASE_PATH = config.DATABASE_PATH
DATABASE_URL = config.DATABASE_URL

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},  # FastAPI runs sync endpoints in a thread pool
    pool_pre_ping=True,
    echo=False
)
enable_sqlite_foreign_keys(engine)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_default_collection(db: Session) -> bool:
    """
    Insert the default collection when the collections table is empty.

    Returns:
        bool: True if a collection was created, False if one already existed
    """
    if db.query(Collection).count() > 0:
        return False
    db.add(Collection(
        name=DEFAULT_COLLECTION_NAME,
        description=DEFAULT_COLLECTION_DESCRIPTION
    ))
    db.commit()
    logger.info("[Database] Seeded '%s'", DEFAULT_COLLECTION_NAME)
    return True


def init_db(bind: Engine = None):
    """
    Initialize database: create tables and seed the default collection.

    This function:
    1. Makes sure the database directory exists
    2. Creates missing tables using inspector to avoid conflicts
    3. Seeds the default collection if no collection exists yet

    Safe to call repeatedly; never adds a second default collection.
    """
    target = bind or engine

    if target is engine:
        DATABASE_PATH.parent.mkdir(parents=True, exist_ok=True)

    try:
        inspector = inspect(target)
        existing_tables = set(inspector.get_table_names())
    except Exception as e:
        logger.debug("Inspector check failed (assuming new database): %s", e)
        existing_tables = set()

    expected_tables = set(Base.metadata.tables.keys())
    missing_tables = expected_tables - existing_tables
    if missing_tables:
        logger.info("[Database] Creating tables: %s", ", ".join(sorted(missing_tables)))
    Base.metadata.create_all(bind=target, checkfirst=True)

    db = Session(bind=target) if bind is not None else SessionLocal()
    try:
        seed_default_collection(db)
    except Exception as e:
        db.rollback()
        logger.error("[Database] Error seeding database: %s", e)
        raise
    finally:
        db.close()

    logger.debug("[Database] Ready (%d tables)", len(expected_tables))


def get_db():
    """
    Dependency function to get database session

    Usage in FastAPI:
        @router.get("/collections")
        def list_collections(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_integrity() -> bool:
    """
    Check database integrity using connection test.

    Returns:
        bool: True if database is healthy, False otherwise
    """
    try:
        with engine.connect() as conn:
            result = conn.execute(text("SELECT 1"))
            result.fetchone()
        return True
    except Exception as e:
        logger.error("[Database] Integrity check error: %s", e)
        return False


def close_db():
    """
    Close database connections (call on shutdown)
    """
    engine.dispose()
    logger.info("Database connections closed")
