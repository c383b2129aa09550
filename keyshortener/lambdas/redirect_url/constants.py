# Client error events
MISSING_SHORT_KEY = 'MISSING_SHORT_KEY'
SHORT_KEY_NOT_FOUND = 'SHORT_KEY_NOT_FOUND'

# Server error events
KEY_STORE_UNAVAILABLE = 'KEY_STORE_UNAVAILABLE'
INVALID_CONFIGURATION = 'INVALID_CONFIGURATION'

# Success events
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
