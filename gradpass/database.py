import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from gradpass.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

Base = declarative_base()


def make_engine(database_url: str):
    """Create an engine; SQLite connections are shared across request threads."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    return create_engine(database_url, connect_args=connect_args)


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind=None):
    """Create all tables that do not exist yet."""
    # Models must be imported so they register on Base.metadata
    import gradpass.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ready")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
