"""Unit tests for KeyStoreMemoryDAO

Test coverage includes:

1. get() / put()
   - Missing keys return None, stored keys return their URL.
   - put() overwrites and chains.

2. put_if_absent()
   - Writes free keys and returns None.
   - Leaves taken keys untouched and returns the stored URL.
   - Is atomic under concurrent callers.

3. Type checking
"""

from concurrent.futures import ThreadPoolExecutor

import pytest
from beartype.roar import BeartypeCallHintParamViolation

from keyshortener.dao.memory import KeyStoreMemoryDAO


@pytest.fixture
def dao():
    return KeyStoreMemoryDAO()


def test_get_missing_key(dao):
    assert dao.get('3fGh_0aZk9') is None


def test_put_and_get(dao):
    assert dao.put('3fGh_0aZk9', 'https://example.com') is dao
    assert dao.get('3fGh_0aZk9') == 'https://example.com'


def test_put_overwrites(dao):
    dao.put('3fGh_0aZk9', 'https://example.com').put('3fGh_0aZk9', 'https://example.org')
    assert dao.get('3fGh_0aZk9') == 'https://example.org'
    assert len(dao) == 1


def test_initial_mappings():
    dao = KeyStoreMemoryDAO(initial={'3fGh_0aZk9': 'https://example.com'})
    assert dao.get('3fGh_0aZk9') == 'https://example.com'


def test_put_if_absent_writes_free_key(dao):
    assert dao.put_if_absent('3fGh_0aZk9', 'https://example.com') is None
    assert dao.get('3fGh_0aZk9') == 'https://example.com'


def test_put_if_absent_keeps_taken_key(dao):
    dao.put('3fGh_0aZk9', 'https://example.com')

    assert dao.put_if_absent('3fGh_0aZk9', 'https://example.org') == 'https://example.com'
    assert dao.get('3fGh_0aZk9') == 'https://example.com'


def test_put_if_absent_is_atomic(dao):
    urls = [f'https://example.com/{i}' for i in range(64)]

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(lambda url: dao.put_if_absent('3fGh_0aZk9', url), urls))

    winners = [url for url, result in zip(urls, results) if result is None]
    assert len(winners) == 1
    assert all(result == winners[0] for result in results if result is not None)
    assert dao.get('3fGh_0aZk9') == winners[0]


@pytest.mark.parametrize('key', [None, 42, b'3fGh_0aZk9'])
def test_invalid_key_type(dao, key):
    with pytest.raises((TypeError, BeartypeCallHintParamViolation)):
        dao.get(key)


def test_repr(dao):
    assert repr(dao) == '<KeyStoreMemoryDAO>'
