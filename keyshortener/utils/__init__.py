from keyshortener.utils.config import app_env, app_name, app_prefix, load_config, max_allocation_attempts
from keyshortener.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from keyshortener.utils.shortener import derive_short_key
from keyshortener.utils.logging import initialize_logging


__all__ = [
    'derive_short_key',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'max_allocation_attempts',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
