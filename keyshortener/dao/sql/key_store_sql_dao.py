"""Data Access Object (DAO) implementation for short key mappings in a relational table

The mappings live in a two-column table keyed by the fixed-width short key:

    CREATE TABLE short_urls (
        id  CHAR(10) PRIMARY KEY,
        url TEXT NOT NULL
    );

The table is created on first use when it doesn't exist yet. Any SQLAlchemy
supported database works; PostgreSQL is used in deployed environments and
SQLite in tests.

An in-memory SQLite database exists only inside the connection that opened it.
For such URLs the engine keeps a single connection (StaticPool) usable from
any thread, and the DAO runs one statement block at a time on it.

Classes:
    KeyStoreSQLDAO:
        DAO for storing and retrieving short key mappings through SQLAlchemy.

Functions:
    short_urls_table(name, metadata=None) -> Table:
        Build the table definition for a given table name.

    create_key_store_engine(sql_url) -> Engine:
        Build an engine suited to the database behind `sql_url`.

Example:
    >>> dao = KeyStoreSQLDAO(sql_url='postgresql+psycopg://app:secret@db/shortener')
    >>> dao.put_if_absent('3fGh_0aZk9', 'https://example.com') is None
    True
    >>> dao.get('3fGh_0aZk9')
    'https://example.com'
"""

import contextlib
import logging
import threading
from typing import Optional

from beartype import beartype
from sqlalchemy import CHAR, Column, Engine, MetaData, Table, Text, create_engine, insert, make_url, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from keyshortener.dao.base import KeyStoreBaseDAO
from keyshortener.dao.sql.helpers import handle_sql_error
from keyshortener.utils.constants import DEFAULT_TABLE_NAME, SHORT_KEY_LENGTH


logger = logging.getLogger(__name__)


def short_urls_table(name: str = DEFAULT_TABLE_NAME, metadata: Optional[MetaData] = None) -> Table:
    return Table(
        name,
        metadata if metadata is not None else MetaData(),
        Column('id', CHAR(SHORT_KEY_LENGTH), primary_key=True),
        Column('url', Text, nullable=False),
    )


def create_key_store_engine(sql_url: str) -> Engine:
    """Build an engine for `sql_url`

    In-memory SQLite gets one connection shared by every thread; anything
    else gets the dialect's default pool with pre-ping.

    Example:
        >>> create_key_store_engine('sqlite://').pool
        <sqlalchemy.pool.impl.StaticPool object at ...>
    """
    url = make_url(sql_url)
    if url.get_backend_name() == 'sqlite' and url.database in (None, '', ':memory:'):
        return create_engine(url, poolclass=StaticPool, connect_args={'check_same_thread': False})
    return create_engine(url, pool_pre_ping=True)


class KeyStoreSQLDAO(KeyStoreBaseDAO):
    """SQL-based Data Access Object (DAO) for short key mappings

    Attributes:
        engine (sqlalchemy.Engine):
            Engine used to open connections to the database.
        table (sqlalchemy.Table):
            Table holding the mappings.

    Methods:
        get(key: str) -> str | None:
            SELECT the URL for a short key.

        put(key: str, url: str) -> KeyStoreSQLDAO:
            UPDATE the row for a short key, INSERT it when missing.

        put_if_absent(key: str, url: str) -> str | None:
            INSERT the row; on a primary key violation return the stored URL.

        All methods raise DataStoreError on database errors.
    """

    def __init__(
        self,
        sql_url: Optional[str] = 'sqlite://',
        sql_table_name: Optional[str] = DEFAULT_TABLE_NAME,
        sql_engine: Optional[Engine] = None,
        sql_create_table: Optional[bool] = True,
    ):
        """Initialize a SQL-based key store

        Args:
            sql_url (Optional[str]):
                SQLAlchemy database URL. Defaults to an in-memory SQLite database.

            sql_table_name (Optional[str]):
                Name of the mappings table. Defaults to 'short_urls'.

            sql_engine (Optional[sqlalchemy.Engine]):
                Pre-initialized engine. If None, one is built with `create_key_store_engine(sql_url)`.

            sql_create_table (Optional[bool]):
                If True, create the mappings table when it doesn't exist.

        Raises:
            DataStoreError:
                If the table can't be created (connectivity issues, permissions, etc.).
        """
        if sql_engine is None:
            sql_engine = create_key_store_engine(sql_url)

        self.engine = sql_engine
        self.table = short_urls_table(sql_table_name)

        # A single pooled connection carries one transaction at a time
        self._lock = threading.RLock() if isinstance(self.engine.pool, StaticPool) else contextlib.nullcontext()

        if sql_create_table:
            self._create_table()

    @handle_sql_error
    def _create_table(self) -> None:
        with self._lock:
            self.table.metadata.create_all(self.engine, checkfirst=True)
        logger.debug('Ensured key store table exists.', extra={'table': self.table.name})

    @handle_sql_error
    @beartype
    def get(self, key: str) -> str | None:
        statement = select(self.table.c.url).where(self.table.c.id == key)
        with self._lock, self.engine.connect() as conn:
            return conn.execute(statement).scalar_one_or_none()

    @handle_sql_error
    @beartype
    def put(self, key: str, url: str) -> 'KeyStoreSQLDAO':
        with self._lock, self.engine.begin() as conn:
            result = conn.execute(update(self.table).where(self.table.c.id == key).values(url=url))
            if result.rowcount == 0:
                conn.execute(insert(self.table).values(id=key, url=url))
        return self

    @handle_sql_error
    @beartype
    def put_if_absent(self, key: str, url: str) -> str | None:
        """Insert a mapping unless the short key is already taken

        The primary key constraint makes the check and the write a single
        atomic statement; the loser of a concurrent insert gets an
        IntegrityError and reads back the winner's URL.
        """
        with self._lock:
            try:
                with self.engine.begin() as conn:
                    conn.execute(insert(self.table).values(id=key, url=url))
            except IntegrityError:
                logger.debug('Short key already taken.', extra={'shortKey': key, 'table': self.table.name})
                return self.get(key)
        return None
