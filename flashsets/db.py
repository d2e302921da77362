from __future__ import annotations

from sqlalchemy import Engine, create_engine, inspect
from sqlalchemy.orm import sessionmaker

from flashsets.config import DB_CONNECTION_STRING, LOGGER
from flashsets.models import register_models
from flashsets.models.base import Base

engine = create_engine(DB_CONNECTION_STRING)
Session = sessionmaker(engine)

# Engines whose tables are known to exist
_initialized_engines: set[str] = set()


def initialize_database(bind: Engine | None = None) -> bool:
    """
    Create any missing collection tables. Call this once at application startup.
    Returns False if the database could not be reached or prepared.
    """
    bind = bind or engine
    key = str(bind.url)
    if key in _initialized_engines:
        return True

    try:
        register_models()
        model_tables = set(Base.metadata.tables.keys())
        tables_to_create = model_tables - set(inspect(bind).get_table_names())

        if tables_to_create:
            LOGGER.info(f"Creating missing database tables: {sorted(tables_to_create)}")
            Base.metadata.create_all(bind=bind)
        else:
            LOGGER.debug(f"Database already has all {len(model_tables)} tables")

        _initialized_engines.add(key)
        return True
    except Exception as e:
        LOGGER.error(f"Error initializing database at {bind.url}: {e}")
        return False
