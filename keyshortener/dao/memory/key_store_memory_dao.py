"""Process-local key store backed by a dictionary.

Intended for local development and tests. Mappings live only as long as the
process; every thread of the process shares the same instance.

Classes:
    KeyStoreMemoryDAO:
        Thread-safe in-memory implementation of KeyStoreBaseDAO.
"""

import threading

from beartype import beartype

from keyshortener.dao.base import KeyStoreBaseDAO


class KeyStoreMemoryDAO(KeyStoreBaseDAO):
    """Thread-safe in-memory key store

    All operations take a single lock, so `put_if_absent()` is atomic with
    respect to every other operation on the same instance.

    Example:
        >>> dao = KeyStoreMemoryDAO()
        >>> dao.put_if_absent('3fGh_0aZk9', 'https://example.com') is None
        True
        >>> dao.put_if_absent('3fGh_0aZk9', 'https://example.org')
        'https://example.com'
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._lock = threading.Lock()
        self._data: dict[str, str] = dict(initial or {})

    @beartype
    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    @beartype
    def put(self, key: str, url: str) -> 'KeyStoreMemoryDAO':
        with self._lock:
            self._data[key] = url
        return self

    @beartype
    def put_if_absent(self, key: str, url: str) -> str | None:
        with self._lock:
            existing = self._data.get(key)
            if existing is None:
                self._data[key] = url
            return existing

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
