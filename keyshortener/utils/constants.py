# Short key shape: 10 symbols over [0-9a-zA-Z_]
SHORT_KEY_ALPHABET = '0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_'
SHORT_KEY_LENGTH = 10

# Upper bound on derivation attempts per allocation
DEFAULT_MAX_ALLOCATION_ATTEMPTS = 256

# Default relational table holding key -> URL mappings
DEFAULT_TABLE_NAME = 'short_urls'

# Key store backends
MEMORY_BACKEND = 'memory'
REDIS_BACKEND = 'redis'
SQL_BACKEND = 'sql'
KEY_STORE_BACKENDS = frozenset({MEMORY_BACKEND, REDIS_BACKEND, SQL_BACKEND})

# Application environment variables
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
LOG_LEVEL_ENV = 'LOG_LEVEL'
AWS_SAM_LOCAL_ENV = 'AWS_SAM_LOCAL'
MAX_ALLOCATION_ATTEMPTS_ENV = 'MAX_ALLOCATION_ATTEMPTS'

# AWS AppConfig identifiers
APPCONFIG_APP_ID_ENV = 'APPCONFIG_APP_ID'
APPCONFIG_ENV_ID_ENV = 'APPCONFIG_ENV_ID'
APPCONFIG_PROFILE_ID_ENV = 'APPCONFIG_PROFILE_ID'

# Local (environment based) key store configuration
KEY_STORE_BACKEND_ENV = 'KEY_STORE_BACKEND'
REDIS_HOST_ENV = 'REDIS_HOST'
REDIS_PORT_ENV = 'REDIS_PORT'
REDIS_DB_ENV = 'REDIS_DB'
REDIS_USERNAME_ENV = 'REDIS_USERNAME'  # optional
REDIS_PASSWORD_ENV = 'REDIS_PASSWORD'  # optional
DATABASE_URL_ENV = 'DATABASE_URL'
TABLE_NAME_ENV = 'TABLE_NAME'
