"""Application-specific exceptions.

Every exception carries an `error_code` which the Lambda handlers echo back
to clients in the `errorCode` response field.

Classes:
    KeyShortenerError:
        Base exception for all application-specific errors.

    InvalidArgumentError:
        Raised when a caller passes an empty URL or short key.

    NotFoundError:
        Raised when a short key is not mapped to any URL.

    KeyspaceExhaustedError:
        Raised when allocation gives up after the maximum number of attempts.

    ConfigurationError / BadConfigurationError:
        Raised when the application is configured with invalid parameters.
"""


class KeyShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:keyshortener_error'


class InvalidArgumentError(KeyShortenerError, ValueError):
    """Raised when an operation receives an empty or malformed argument."""

    error_code = 'app:invalid_argument_error'


class NotFoundError(KeyShortenerError):
    """Raised when a short key doesn't exist in the key store."""

    error_code = 'app:not_found_error'


class KeyspaceExhaustedError(KeyShortenerError):
    """Raised when no free short key was found within the attempt ceiling."""

    error_code = 'app:keyspace_exhausted_error'


class ConfigurationError(KeyShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
