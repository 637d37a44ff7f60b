"""Database engine for the embedded invite store.

The store lives in a single SQLite file accessed through SQLAlchemy's asyncio
engine. The engine holds exactly one connection: every store operation checks
it out for the whole transaction, which serializes operations within the
process, and the connection runs in SQLite's exclusive locking mode, which
keeps any other process out of the file while the store is open.
"""

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from rsvp.config import DatabaseSettings

# Connection execution option selecting how SQLAlchemy's BEGIN is emitted
BEGIN_MODE = "sqlite_begin_mode"


def create_engine(database: DatabaseSettings, echo: bool = False) -> AsyncEngine:
    """Create async database engine.

    Args:
        database: Database path and timeouts
        echo: Log every SQL statement

    Returns:
        Configured async engine; nothing is opened until first use
    """
    engine = create_async_engine(
        database.url,
        echo=echo,
        pool_size=1,  # Single connection, single writer
        max_overflow=0,
        pool_timeout=database.pool_timeout,
        connect_args={"timeout": database.lock_timeout},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Let SQLAlchemy's begin event own the transaction boundaries
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA locking_mode=EXCLUSIVE")
        cursor.execute("PRAGMA synchronous=FULL")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        mode = conn.get_execution_options().get(BEGIN_MODE, "IMMEDIATE")
        conn.exec_driver_sql(f"BEGIN {mode}")

    return engine
