"""Unit tests for the derive_short_key function in shortener.py.

Test coverage includes:

1. Basic functionality
   - Ensures the function returns a 10-character key over [0-9a-zA-Z_].
   - Ensures the key is built from the SHA-256 digest of url + attempt.

2. Determinism
   - Same URL and attempt always produce identical output.

3. Attempt salting
   - Different attempts for the same URL produce different keys.
   - Different URLs produce different keys.

4. Edge cases
   - Handles unicode URLs, large attempts and custom lengths.

5. Error handling
   - Ensures invalid inputs raise appropriate exceptions.
"""

import hashlib
import re

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from keyshortener.utils.shortener import derive_short_key
from keyshortener.utils.constants import SHORT_KEY_ALPHABET, SHORT_KEY_LENGTH


SHORT_KEY_PATTERN = re.compile(r'^[0-9a-zA-Z_]{10}$')


# -------------------------------
# 1. Basic functionality
# -------------------------------


def test_alphabet_order():
    assert SHORT_KEY_ALPHABET == '0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_'


@pytest.mark.parametrize(
    'url, attempt, expected',
    [
        # sha256('http://example.com0') = 65695bf17b54999a208e...
        ('http://example.com', 0, 'CGsQYlrswg'),
        # sha256('http://example.com7') = 7af9b4553efb1e444619...
        ('http://example.com', 7, 'XYSm__u57p'),
        ('https://example.com/blog/chuck-norris-is-awesome', 0, 'g5MiJJ70er'),
    ],
)
def test_derive_short_key_known_values(url, attempt, expected):
    assert derive_short_key(url, attempt) == expected


@pytest.mark.parametrize(
    'url, attempt',
    [
        ('http://example.com', 0),
        ('https://example.com/blog/article-123?utm_source=newsletter', 3),
        ('x', 17),
    ],
)
def test_derive_short_key_shape(url, attempt):
    """Ensure keys are 10 characters long and use the 63-symbol alphabet."""
    key = derive_short_key(url, attempt)
    assert len(key) == SHORT_KEY_LENGTH
    assert SHORT_KEY_PATTERN.match(key)


def test_derive_short_key_maps_digest_bytes_modulo_63():
    """Ensure each key symbol is the alphabet entry at digest byte % 63."""
    digest = hashlib.sha256(b'http://example.com7').digest()
    expected = ''.join(SHORT_KEY_ALPHABET[b % 63] for b in digest[:10])
    assert derive_short_key('http://example.com', 7) == expected


def test_derive_short_key_uses_decimal_attempt():
    """Ensure the attempt is appended in decimal form (url + '12', not url + '0xc')."""
    assert derive_short_key('http://example.com/', 12) == derive_short_key('http://example.com/1', 2)


# -------------------------------
# 2. Determinism
# -------------------------------


def test_derive_short_key_is_deterministic():
    keys = {derive_short_key('https://example.com/page', 5) for _ in range(10)}
    assert len(keys) == 1


# -------------------------------
# 3. Attempt salting
# -------------------------------


def test_different_attempts_produce_different_keys():
    keys = [derive_short_key('https://example.com/page', attempt) for attempt in range(50)]
    assert len(set(keys)) == len(keys)


def test_different_urls_produce_different_keys():
    keys = [derive_short_key(f'https://example.com/page/{i}', 0) for i in range(200)]
    assert len(set(keys)) == len(keys)


def test_default_attempt_is_zero():
    assert derive_short_key('https://example.com') == derive_short_key('https://example.com', 0)


# -------------------------------
# 4. Edge cases
# -------------------------------


def test_unicode_url():
    digest = hashlib.sha256('https://пример.рф/страница0'.encode('utf-8')).digest()
    expected = ''.join(SHORT_KEY_ALPHABET[b % 63] for b in digest[:10])
    assert derive_short_key('https://пример.рф/страница', 0) == expected


def test_large_attempt():
    key = derive_short_key('https://example.com', 10**18)
    assert SHORT_KEY_PATTERN.match(key)


@pytest.mark.parametrize('length', [1, 7, 32])
def test_custom_length(length):
    key = derive_short_key('https://example.com', 0, length=length)
    assert len(key) == length
    assert derive_short_key('https://example.com', 0).startswith(key[:10])


# -------------------------------
# 5. Error handling
# -------------------------------


def test_negative_attempt_raises_value_error():
    with pytest.raises(ValueError, match='non-negative'):
        derive_short_key('https://example.com', -1)


@pytest.mark.parametrize('length', [0, -3, 33])
def test_invalid_length_raises_value_error(length):
    with pytest.raises(ValueError, match='Length must be between 1 and 32'):
        derive_short_key('https://example.com', 0, length=length)


@pytest.mark.parametrize(
    'url, attempt',
    [
        (None, 0),
        (12345, 0),
        ('https://example.com', '1'),
        ('https://example.com', 1.5),
    ],
)
def test_invalid_types_raise(url, attempt):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        derive_short_key(url, attempt)
