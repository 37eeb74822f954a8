"""
Database engine, session factory and schema bootstrap.

DATABASE_URL defaults to a local SQLite file; production points it at
Postgres, whose schema is owned by the alembic migrations. init_db() is run
by the worker at boot: it registers every model and, on SQLite only, creates
missing tables so a fresh local checkout can take jobs straight away.
"""
import importlib
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from outreach_engine.config import DATABASE_URL

logger = logging.getLogger('outreach_engine.database')

MODEL_MODULES = ('profile', 'contact', 'agent_run', 'activity_event',
                 'sentiment_reading', 'integration')


class Base(DeclarativeBase):
    pass


def normalize_url(raw: str) -> str:
    """Hosted Postgres hands out postgres:// URLs; SQLAlchemy 2.x only accepts postgresql://."""
    if raw.startswith('postgres://'):
        return 'postgresql://' + raw[len('postgres://'):]
    return raw


def is_sqlite(db_url: str) -> bool:
    return db_url.startswith('sqlite')


def engine_options(db_url: str) -> dict:
    """create_engine kwargs: SQLite is shared across worker threads, Postgres is pooled."""
    if is_sqlite(db_url):
        return {'connect_args': {'check_same_thread': False}}
    return {'pool_pre_ping': True, 'pool_size': 5, 'max_overflow': 10}


url = normalize_url(DATABASE_URL)
engine = create_engine(url, **engine_options(url))
SessionLocal = sessionmaker(bind=engine)


def get_session():
    """Return a new DB session."""
    return SessionLocal()


def import_models():
    """Import every model module so Base.metadata knows about all tables."""
    for name in MODEL_MODULES:
        importlib.import_module(f'outreach_engine.models.{name}')


def init_db():
    """Register models; create missing tables when running against SQLite."""
    import_models()
    if is_sqlite(url):
        Base.metadata.create_all(engine)
        logger.info("SQLite schema ready (%d tables)", len(Base.metadata.tables))
    else:
        logger.info("Using migrated schema at %s", engine.url.render_as_string(hide_password=True))
