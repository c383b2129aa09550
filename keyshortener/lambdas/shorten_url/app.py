import json
import logging
from typing import Any

from keyshortener.dao.exceptions import DataStoreError
from keyshortener.dao.factory import default_key_store
from keyshortener.exceptions import ConfigurationError, InvalidArgumentError, KeyspaceExhaustedError
from keyshortener.services import ShortKeyService
from keyshortener.utils import get_short_url, guarantee_500_response, max_allocation_attempts
from keyshortener.lambdas.shorten_url.constants import (
    ALREADY_EXISTS_MESSAGE,
    CREATED_MESSAGE,
    INVALID_CONFIGURATION,
    INVALID_JSON_BODY,
    KEY_STORE_UNAVAILABLE,
    KEYSPACE_EXHAUSTED,
    MISSING_TARGET_URL,
    SHORT_KEY_ALREADY_EXISTS,
    SHORT_KEY_CREATED,
)


logger = logging.getLogger(__name__)

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def response_500(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Internal Server Error'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 500,
        'body': json.dumps(body),
    }


def response_400(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 400,
        'body': json.dumps(body),
    }


def response_2xx(status_code: int, body: dict) -> dict:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
        'body': json.dumps(body),
    }


@guarantee_500_response
def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Build the short key service on top of the configured key store
    - Step 2: Extract original URL from request body
    - Step 3: Allocate a short key (or find the existing one)
    - Step 4: Respond with the short key and short URL

    HTTP responses:
        201: New short key allocated
            message: 'Data received successfully'
            key, short_url, target_url
        200: URL was already shortened
            message: 'Data already received'
            key, short_url, target_url
        400: Bad client request
            message: invalid JSON or missing/empty target_url
        500: Internal server error
            message: invalid configuration, key store unreachable or keyspace exhausted

    Args:
        event (Dict[str, Any]):
            API Gateway event payload in Lambda Proxy format.
        context (Any):
            AWS Lambda context object containing runtime information.

    Returns:
        Dict[str, Any]:
            API Gateway Lambda Proxy response.

    Example:
        >>> event = {'body': '{"target_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['message']
        'Data received successfully'
    """
    # 1- Build service on top of the shared key store
    try:
        service = ShortKeyService(store=default_key_store('shorten_url'), max_attempts=max_allocation_attempts())
    except ConfigurationError:
        logger.exception('Invalid configuration. Responding with 500.', extra={'event': INVALID_CONFIGURATION})
        return response_500(message='invalid configuration', error_code=INVALID_CONFIGURATION)
    except DataStoreError:
        logger.exception('Failed to initialize key store. Responding with 500.', extra={'event': KEY_STORE_UNAVAILABLE})
        return response_500(error_code=KEY_STORE_UNAVAILABLE)

    # 2- Extract original URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    target_url = request_body.get('target_url') if isinstance(request_body, dict) else None
    if not isinstance(target_url, str):
        logger.info('Missing "target_url" in body. Responding with 400.', extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'target_url' in JSON body", error_code=MISSING_TARGET_URL)

    # 3- Allocate short key
    try:
        result = service.allocate(target_url)
    except InvalidArgumentError:
        logger.info('Empty "target_url" in body. Responding with 400.', extra={'event': MISSING_TARGET_URL})
        return response_400(message="empty 'target_url' in JSON body", error_code=MISSING_TARGET_URL)
    except DataStoreError:
        logger.exception('Key store failed during allocation. Responding with 500.', extra={'event': KEY_STORE_UNAVAILABLE})
        return response_500(error_code=KEY_STORE_UNAVAILABLE)
    except KeyspaceExhaustedError:
        logger.exception('No free short key found. Responding with 500.', extra={'event': KEYSPACE_EXHAUSTED})
        return response_500(message='no free short key', error_code=KEYSPACE_EXHAUSTED)

    # 4- Respond with the short key
    record = result.record()
    body = {
        'key': record.key,
        'short_url': get_short_url(record.key, event),
        'target_url': record.target,
    }
    if result.created:
        logger.info('Allocated new short key. Responding with 201.', extra={'shortKey': record.key, 'event': SHORT_KEY_CREATED})
        return response_2xx(201, {'message': CREATED_MESSAGE, **body})

    logger.info('URL already shortened. Responding with 200.', extra={'shortKey': record.key, 'event': SHORT_KEY_ALREADY_EXISTS})
    return response_2xx(200, {'message': ALREADY_EXISTS_MESSAGE, **body})
