import json
import logging
from typing import Any

from keyshortener.dao.exceptions import DataStoreError
from keyshortener.dao.factory import default_key_store
from keyshortener.exceptions import ConfigurationError, InvalidArgumentError, NotFoundError
from keyshortener.services import ShortKeyService
from keyshortener.utils import get_short_url, guarantee_500_response
from keyshortener.lambdas.redirect_url.constants import (
    INVALID_CONFIGURATION,
    KEY_STORE_UNAVAILABLE,
    MISSING_SHORT_KEY,
    REDIRECT_SUCCESS,
    SHORT_KEY_NOT_FOUND,
)


logger = logging.getLogger(__name__)


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


def response_404(message: str | None = None, error_code: str | None = None) -> dict:
    base = 'Not Found'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return {
        'statusCode': 404,
        'body': json.dumps(body),
    }


def response_302(*, location: str) -> dict:
    return {
        'statusCode': 302,
        'headers': {
            'Location': location,
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
        },
        'body': json.dumps({}),  # no body needed for redirects
    }


@guarantee_500_response
def lambda_handler(event: dict, context: Any) -> dict:
    """Handle incoming API Gateway requests to redirect short URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Build the short key service on top of the configured key store
    - Step 2: Extract short key from request path
    - Step 3: Resolve short key to the original URL
    - Step 4: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing or empty short key in path parameters
        404: Not found
            message: short key isn't mapped to any URL
        500: Internal server error
            message: key store unreachable or misconfigured

    Example:
        >>> event = {'pathParameters': {'key': '3fGh_0aZk9'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Build service on top of the shared key store
    try:
        service = ShortKeyService(store=default_key_store('redirect_url'))
    except ConfigurationError:
        logger.exception('Invalid configuration. Responding with 500.', extra={'event': INVALID_CONFIGURATION})
        return response_500(message='invalid configuration', error_code=INVALID_CONFIGURATION)
    except DataStoreError:
        logger.exception('Failed to initialize key store. Responding with 500.', extra={'event': KEY_STORE_UNAVAILABLE})
        return response_500(error_code=KEY_STORE_UNAVAILABLE)

    # 2- Extract short key from request's path
    short_key = (event.get('pathParameters') or {}).get('key')
    if short_key is None:
        logger.info('Missing "key" in path. Responding with 400.', extra={'event': MISSING_SHORT_KEY})
        return response_400(message="missing 'key' in path", error_code=MISSING_SHORT_KEY)

    # 3- Resolve short key
    try:
        target_url = service.resolve(short_key)
    except InvalidArgumentError:
        logger.info('Empty "key" in path. Responding with 400.', extra={'event': MISSING_SHORT_KEY})
        return response_400(message="empty 'key' in path", error_code=MISSING_SHORT_KEY)
    except NotFoundError:
        logger.info(
            'Short key not found in key store. Responding with 404.',
            extra={'shortKey': short_key, 'event': SHORT_KEY_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(short_key, event)} doesn't exist", error_code=SHORT_KEY_NOT_FOUND)
    except DataStoreError:
        logger.exception('Key store failed during resolution. Responding with 500.', extra={'event': KEY_STORE_UNAVAILABLE})
        return response_500(error_code=KEY_STORE_UNAVAILABLE)

    # 4- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortKey': short_key, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=target_url)
