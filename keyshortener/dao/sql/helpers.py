import functools
from typing import Any
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError

from keyshortener.dao.exceptions import DataStoreError


__all__ = []


def handle_sql_error[F: Callable[..., Any]](method: F) -> F:
    """Wrap SQL-interacting DAO methods to handle database errors

    Args:
        method (Callable[..., Any]):
            DAO method performing SQL statements which may raise sqlalchemy.exc.SQLAlchemyError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on any database error.

    Example:
        >>> @handle_sql_error
        ... def get(self, key):
        ...     with self.engine.connect() as conn:
        ...         return conn.execute(...).scalar_one_or_none()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            url = self.engine.url.render_as_string(hide_password=True)
            raise DataStoreError(f"Database error at {url} (table '{self.table.name}').") from e

    return wrapper
