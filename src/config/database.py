"""
Database Configuration
SQLAlchemy engine, session factory and request-scoped session dependency
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from src.config.settings import settings


connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # SQLite connections are shared across the threadpool FastAPI runs sync code in
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Yield a database session for the duration of one request

    Yields:
        Session: SQLAlchemy session, closed when the request finishes
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
