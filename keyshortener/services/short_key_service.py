"""Short key allocation and resolution.

Classes:
    ShortKeyService:
        Allocate collision-free short keys for URLs and resolve them back.

Example:
    >>> from keyshortener.dao.memory import KeyStoreMemoryDAO
    >>> service = ShortKeyService(store=KeyStoreMemoryDAO())
    >>> result = service.allocate('https://example.com')
    >>> result.outcome
    <AllocationOutcome.CREATED: 'created'>
    >>> service.allocate('https://example.com').outcome
    <AllocationOutcome.ALREADY_EXISTS: 'already_exists'>
    >>> service.resolve(result.key)
    'https://example.com'
"""

import logging

from keyshortener.dao.base import KeyStoreBaseDAO
from keyshortener.exceptions import InvalidArgumentError, KeyspaceExhaustedError, NotFoundError
from keyshortener.models import AllocationOutcome, AllocationResult
from keyshortener.types import ShortKeyDeriver
from keyshortener.utils.constants import DEFAULT_MAX_ALLOCATION_ATTEMPTS
from keyshortener.utils.shortener import derive_short_key


logger = logging.getLogger(__name__)


class ShortKeyService:
    """Allocate and resolve short keys against a key store

    The key store is shared by every caller; the service itself holds no
    mutable state and is safe to use from many threads at once.

    Attributes:
        store (KeyStoreBaseDAO):
            Key store holding short key to URL mappings.
        deriver (ShortKeyDeriver):
            Function deriving a candidate key from (url, attempt).
        max_attempts (int):
            Number of candidate keys tried before giving up.
    """

    def __init__(
        self,
        store: KeyStoreBaseDAO,
        deriver: ShortKeyDeriver = derive_short_key,
        max_attempts: int = DEFAULT_MAX_ALLOCATION_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be a positive integer (given value: {max_attempts}).')

        self.store = store
        self.deriver = deriver
        self.max_attempts = max_attempts

    def allocate(self, url: str) -> AllocationResult:
        """Find or create the short key for a URL

        Candidate keys are derived for attempts 0, 1, 2, ... and checked in
        order:
        - free key: claim it with `put_if_absent()` (the only write) => CREATED
        - key already mapped to `url` => ALREADY_EXISTS, nothing written
        - key mapped to another URL (collision) => next attempt

        Args:
            url (str):
                The original URL. Stored and compared verbatim.

        Returns:
            AllocationResult: the short key and whether it was created by this call.

        Raises:
            InvalidArgumentError:
                If `url` is empty. The key store is not touched.
            KeyspaceExhaustedError:
                If every attempt up to `max_attempts` collided.
            DataStoreError:
                If the key store fails. Not retried.
        """
        if not url:
            raise InvalidArgumentError('URL must be a non-empty string.')

        for attempt in range(self.max_attempts):
            key = self.deriver(url, attempt)
            stored = self.store.get(key)

            if stored is None:
                # A concurrent allocation may claim the key between get() and here,
                # in which case the winner's URL comes back and is compared below.
                stored = self.store.put_if_absent(key, url)
                if stored is None:
                    logger.debug('Allocated short key.', extra={'shortKey': key, 'attempt': attempt})
                    return AllocationResult(key=key, target=url, outcome=AllocationOutcome.CREATED)

            if stored == url:
                logger.debug('URL already has a short key.', extra={'shortKey': key, 'attempt': attempt})
                return AllocationResult(key=key, target=url, outcome=AllocationOutcome.ALREADY_EXISTS)

            logger.info('Short key collision, retrying with next attempt.', extra={'shortKey': key, 'attempt': attempt})

        logger.error('Gave up allocating a short key.', extra={'maxAttempts': self.max_attempts})
        raise KeyspaceExhaustedError(f'No free short key found after {self.max_attempts} attempts.')

    def resolve(self, key: str) -> str:
        """Return the original URL for a short key

        Raises:
            InvalidArgumentError:
                If `key` is empty. The key store is not touched.
            NotFoundError:
                If no URL is mapped to `key`.
            DataStoreError:
                If the key store fails.
        """
        if not key:
            raise InvalidArgumentError('Short key must be a non-empty string.')

        url = self.store.get(key)
        if url is None:
            raise NotFoundError(f"Short key '{key}' not found.")
        return url
