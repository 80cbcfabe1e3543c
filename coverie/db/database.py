from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from coverie.core.config import get_settings

# Settings reads .env itself
SQLALCHEMY_DATABASE_URL = get_settings().database_url

# SQLite needs this when the session is used from FastAPI's threadpool
connect_args = (
    {"check_same_thread": False}
    if SQLALCHEMY_DATABASE_URL.startswith("sqlite")
    else {}
)

# Create engine
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

# Base class for models
Base = declarative_base()

# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
