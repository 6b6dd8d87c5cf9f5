# db/db_manager.py

import logging
from contextlib import contextmanager

import psycopg2
from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool

from processing.errors import FetchError

logger = logging.getLogger("db.manager")

# one connection per concurrent export query
DEFAULT_MAX_CONNECTIONS = 5


def create_pool(connection_string: str, use_ssl: bool = True, max_connections: int = DEFAULT_MAX_CONNECTIONS):
    """
    Creates a thread-safe pool of read-only connections to the index database.

    Args:
        connection_string: libpq DSN or postgres:// URL
        use_ssl: False only for local debugging (DEBUG env)
        max_connections: Upper bound of simultaneously open connections

    Returns:
        ThreadedConnectionPool whose connections return rows as dicts
    """
    try:
        pool = ThreadedConnectionPool(
            1,
            max_connections,
            dsn=connection_string,
            sslmode="require" if use_ssl else "disable",
            cursor_factory=RealDictCursor,
        )
    except psycopg2.Error as e:
        raise FetchError(f"Could not connect to the index database: {e}") from e
    logger.info(f"Connection pool ready (max {max_connections}, ssl={'on' if use_ssl else 'off'})")
    return pool


@contextmanager
def pooled_connection(pool):
    """Borrows a read-only autocommit connection and always hands it back."""
    conn = pool.getconn()
    try:
        conn.set_session(readonly=True, autocommit=True)
        yield conn
    finally:
        pool.putconn(conn)


def close_pool(pool) -> None:
    try:
        pool.closeall()
    except psycopg2.Error as e:
        logger.error(f"An idle client has experienced an error while closing: {e}")
