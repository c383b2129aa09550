# Client error events
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_TARGET_URL = 'MISSING_TARGET_URL'

# Server error events
KEY_STORE_UNAVAILABLE = 'KEY_STORE_UNAVAILABLE'
INVALID_CONFIGURATION = 'INVALID_CONFIGURATION'
KEYSPACE_EXHAUSTED = 'KEYSPACE_EXHAUSTED'

# Success events
SHORT_KEY_CREATED = 'SHORT_KEY_CREATED'
SHORT_KEY_ALREADY_EXISTS = 'SHORT_KEY_ALREADY_EXISTS'

# Response messages
CREATED_MESSAGE = 'Data received successfully'
ALREADY_EXISTS_MESSAGE = 'Data already received'
