"""Unit tests for the redirect_url AWS Lambda handler.

Test coverage includes:

1. Successful redirect
   - Ensures known keys return a 302 redirect with the stored Location.

2. Invalid path parameters
   - Missing or empty `key` returns 400 without touching the key store.

3. Unknown key
   - Ensures unknown keys return 404.

4. Server errors
   - Key store initialization and lookup failures return 500.
   - Invalid configuration returns 500 with its own error code.
"""

import json
from unittest.mock import MagicMock

import pytest

from keyshortener.lambdas.redirect_url import app
from keyshortener.dao.base import KeyStoreBaseDAO
from keyshortener.dao.exceptions import DataStoreError
from keyshortener.dao.memory import KeyStoreMemoryDAO
from keyshortener.exceptions import BadConfigurationError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture()
def target_url():
    return 'https://example.com/blog/chuck-norris-is-awesome'


@pytest.fixture()
def apigw_event():
    return {
        'resource': '/{key}',
        'httpMethod': 'GET',
        'path': '/3fGh_0aZk9',
        'pathParameters': {'key': '3fGh_0aZk9'},
        'requestContext': {'domainName': 'sho.rt', 'stage': 'Prod'},
    }


@pytest.fixture()
def context():
    class _Context:
        function_name = 'redirect_url'

    return _Context()


@pytest.fixture()
def store(target_url):
    return KeyStoreMemoryDAO(initial={'3fGh_0aZk9': target_url})


@pytest.fixture(autouse=True)
def _patch_lambda_dependencies(monkeypatch, store):
    """Automatically patch Lambda dependencies for all tests."""
    monkeypatch.setattr(app, 'default_key_store', lambda lambda_name: store)
    monkeypatch.setattr('keyshortener.utils.helpers.running_locally', lambda: False)


# -------------------------------
# 1. Successful redirect
# -------------------------------


def test_lambda_handler(apigw_event, context, target_url):
    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 302
    assert response['headers']['Location'] == target_url
    assert json.loads(response['body']) == {}


# -------------------------------
# 2. Invalid path parameters
# -------------------------------


@pytest.mark.parametrize('path_parameters', [None, {}, {'shortcode': '3fGh_0aZk9'}, {'key': ''}])
def test_lambda_handler_missing_key(monkeypatch, apigw_event, context, path_parameters):
    mock_store = MagicMock(spec=KeyStoreBaseDAO)
    monkeypatch.setattr(app, 'default_key_store', lambda lambda_name: mock_store)
    apigw_event['pathParameters'] = path_parameters

    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 400
    assert body['errorCode'] == 'MISSING_SHORT_KEY'
    mock_store.get.assert_not_called()


# -------------------------------
# 3. Unknown key
# -------------------------------


def test_lambda_handler_unknown_key(apigw_event, context):
    apigw_event['pathParameters'] = {'key': 'missing'}

    response = app.lambda_handler(apigw_event, context)
    body = json.loads(response['body'])

    assert response['statusCode'] == 404
    assert body['errorCode'] == 'SHORT_KEY_NOT_FOUND'
    assert body['message'] == "Not Found (short url https://sho.rt/missing doesn't exist)"


# -------------------------------
# 4. Server errors
# -------------------------------


def test_lambda_handler_key_store_unreachable(monkeypatch, apigw_event, context):
    def failing_key_store(lambda_name):
        raise DataStoreError('unreachable')

    monkeypatch.setattr(app, 'default_key_store', failing_key_store)

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 500
    assert json.loads(response['body'])['errorCode'] == 'KEY_STORE_UNAVAILABLE'


def test_lambda_handler_bad_key_store_configuration(monkeypatch, apigw_event, context):
    def failing_key_store(lambda_name):
        raise BadConfigurationError('bad backend')

    monkeypatch.setattr(app, 'default_key_store', failing_key_store)

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 500
    assert json.loads(response['body'])['errorCode'] == 'INVALID_CONFIGURATION'


def test_lambda_handler_key_store_failure(monkeypatch, apigw_event, context):
    failing_store = MagicMock(spec=KeyStoreBaseDAO)
    failing_store.get.side_effect = DataStoreError('boom')
    monkeypatch.setattr(app, 'default_key_store', lambda lambda_name: failing_store)

    response = app.lambda_handler(apigw_event, context)

    assert response['statusCode'] == 500
    assert json.loads(response['body'])['errorCode'] == 'KEY_STORE_UNAVAILABLE'
