"""Short key derivation utility

This module provides a helper function for deriving fixed-length short keys
from an original URL and an attempt counter.

Functions:
    derive_short_key(url, attempt=0, length=10):
        Derive a short key suitable for use as a URL slug.

Example:
    >>> from keyshortener.utils import derive_short_key
    >>> key = derive_short_key('https://example.com', 0)
    >>> len(key)
    10
    >>> key == derive_short_key('https://example.com', 0)
    True
"""

import hashlib

from beartype import beartype

from keyshortener.utils.constants import SHORT_KEY_ALPHABET, SHORT_KEY_LENGTH


BASE = len(SHORT_KEY_ALPHABET)  # 10 digits + 26 lowercase + 26 uppercase + '_'
DIGEST_SIZE = hashlib.sha256().digest_size


@beartype
def derive_short_key(url: str, attempt: int = 0, length: int = SHORT_KEY_LENGTH) -> str:
    """Derive a deterministic short key from a URL and an attempt counter.

    The URL is salted with the decimal representation of `attempt` and hashed
    with SHA-256. Each of the first `length` digest bytes is mapped onto the
    63-symbol alphabet [0-9a-zA-Z_] with `byte % 63`.

    Retrying with `attempt + 1` yields an unrelated key, which is how the
    allocator moves past collisions without any randomness.

    Args:
        url (str):
            The original URL.

        attempt (int, optional):
            Non-negative allocation attempt used as a salt.
            Defaults to 0.

        length (int, optional):
            Length of the resulting key (1 to 32).
            Defaults to 10.

    Returns:
        str: A short key over [0-9a-zA-Z_].

    Raises:
        ValueError:
            If `attempt` is negative or `length` is outside the digest size.

    NOTE:
        - `byte % 63` folds 256 values onto 63 symbols, so the first four
          symbols are very slightly more likely. This doesn't matter for
          collision avoidance at a 63^10 key space.
        - The function is pure: identical inputs always produce identical keys.
    """
    if attempt < 0:
        raise ValueError(f'Attempt must be a non-negative integer (given value: {attempt}).')
    if not 0 < length <= DIGEST_SIZE:
        raise ValueError(f'Length must be between 1 and {DIGEST_SIZE} (given value: {length}).')

    digest = hashlib.sha256(f'{url}{attempt}'.encode('utf-8')).digest()
    return ''.join(SHORT_KEY_ALPHABET[byte % BASE] for byte in digest[:length])
