# Authentication
AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "bearer"

# Request tracing
REQUEST_ID_HEADER = "X-Request-ID"

# Paths the request logger ignores
QUIET_PATHS = {"/favicon.ico"}
