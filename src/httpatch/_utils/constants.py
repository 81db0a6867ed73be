# Environment variables
ENV_BASE_URL = "HTTPATCH_BASE_URL"
ENV_TIMEOUT = "HTTPATCH_TIMEOUT"

# Headers
HEADER_CONTENT_TYPE = "Content-Type"

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

LOGGER_NAME = "httpatch"

# Seconds
DEFAULT_TIMEOUT = 30.0
