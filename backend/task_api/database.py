import logging

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, DeclarativeBase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class DatabaseInitError(RuntimeError):
    pass


def init_db(database_url: str, **engine_kwargs) -> Engine:
    """
    Connect to the database and make sure the schema exists.
    Raises DatabaseInitError instead of exiting, the caller decides what to do.
    """
    # models must be imported so their tables are registered on Base.metadata
    from . import models  # noqa: F401

    engine_kwargs.setdefault("pool_pre_ping", True)
    try:
        engine = create_engine(database_url, **engine_kwargs)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise DatabaseInitError(f"Failed to connect to database: {e}") from e
    logger.info("Database connection established successfully.")

    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        engine.dispose()
        raise DatabaseInitError(f"Failed to migrate database schema: {e}") from e
    logger.info("Database migration completed.")

    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
