from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
import os
from typing import Optional
from functools import lru_cache

# database URLs per APP_ENV
SQLITE_DEV_DB = "sqlite:///./dev.db"
SQLITE_TEST_DB = "sqlite:///./test.db"
SQLITE_PROD_DB = "sqlite:///./prod.db"

Base = declarative_base()

def get_database_url() -> str:
    """Resolve the database URL for the current APP_ENV"""
    env = os.getenv("APP_ENV", "development")
    if env == "test":
        return SQLITE_TEST_DB
    elif env == "production":
        return os.getenv("DATABASE_URL", SQLITE_PROD_DB)
    else:  # development
        return SQLITE_DEV_DB

@lru_cache()
def get_engine():
    """Create the engine for the current environment"""
    database_url = get_database_url()
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(database_url, connect_args=connect_args)

def get_session_maker():
    """Session factory bound to the engine"""
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())

def get_session():
    """Yield a session and close it when the request ends"""
    SessionLocal = get_session_maker()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()

def create_tables(db_engine: Optional[object] = None):
    """Create all tables

    Args:
        db_engine: optional engine; the default engine is used when omitted
    """
    # register the mapped classes on Base.metadata
    from app.models import post, tag, post_tag  # noqa: F401

    engine = db_engine or get_engine()
    Base.metadata.create_all(bind=engine)
