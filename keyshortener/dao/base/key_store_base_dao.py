"""Abstract base class for key store data access objects (DAOs).

A key store maps short keys to original URLs. This class establishes the
contract every backend (in-memory, Redis, SQL) implements so the allocation
logic never depends on the persistence mechanism.

Responsibilities:
    - Retrieve the URL mapped to a short key.
    - Store a short key to URL mapping.
    - Atomically store a mapping only when the short key is still free.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from keyshortener.dao.memory import KeyStoreMemoryDAO
        >>> dao = KeyStoreMemoryDAO()
        >>> dao.put('3fGh_0aZk9', 'https://example.com/blog/article-123')
        <KeyStoreMemoryDAO>
        >>> dao.get('3fGh_0aZk9')
        'https://example.com/blog/article-123'
        >>> dao.get('missing') is None
        True
        >>> dao.put_if_absent('3fGh_0aZk9', 'https://example.com/other')
        'https://example.com/blog/article-123'
"""

from abc import ABC, abstractmethod


class KeyStoreBaseDAO(ABC):
    """Interface for key store data access objects (DAOs).

    Methods:
        get(key: str) -> str | None:
            Retrieve the URL mapped to a short key. None if the key is free.
            Raises DataStoreError on connection or read failure.

        put(key: str, url: str) -> KeyStoreBaseDAO:
            Map a short key to a URL, replacing any previous mapping.
            Raises DataStoreError on connection or write failure.

        put_if_absent(key: str, url: str) -> str | None:
            Map a short key to a URL only if the key is free.
            Returns None when written, otherwise the URL already stored.
            Raises DataStoreError on connection or write failure.

    Subclassing:
        Datastore-specific implementations must implement `get()` and `put()`.
        The default `put_if_absent()` is a plain read-then-write and is NOT
        atomic; backends shared between concurrent callers must override it
        with an atomic primitive.

    NOTE:
        - Mappings are never updated in place by the application and there
          is no interface to delete entries.
    """

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Retrieve the URL mapped to a short key.

        Args:
            key (str):
                The short key to look up.

        Returns:
            str | None: The stored URL if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def put(self, key: str, url: str) -> 'KeyStoreBaseDAO':
        """Map a short key to a URL.

        Args:
            key (str):
                The short key.
            url (str):
                The original URL.

        Returns:
            KeyStoreBaseDAO: self (for method chaining)

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def put_if_absent(self, key: str, url: str) -> str | None:
        """Map a short key to a URL unless the key is already taken.

        Args:
            key (str):
                The short key.
            url (str):
                The original URL.

        Returns:
            str | None: None if the mapping was written, otherwise the URL
            already stored under `key` (the store is left untouched).

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        existing = self.get(key)
        if existing is not None:
            return existing
        self.put(key, url)
        return None

    def __repr__(self) -> str:
        return f'<{type(self).__name__}>'
