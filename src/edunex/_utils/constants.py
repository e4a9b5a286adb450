# Environment variables
ENV_API_GATEWAY_URL = "EDUNEX_API_GATEWAY_URL"
ENV_ACCESS_TOKEN = "EDUNEX_ACCESS_TOKEN"
ENV_TOKEN_TYPE = "EDUNEX_TOKEN_TYPE"
ENV_TOKEN_EXPIRES_AT = "EDUNEX_TOKEN_EXPIRES_AT"
ENV_SESSION_COOKIE = "EDUNEX_SESSION_COOKIE"

# Defaults
DEFAULT_API_GATEWAY_URL = "http://localhost:8090/api"
DEFAULT_TOKEN_TYPE = "Bearer"
DEFAULT_TIMEOUT = 30.0
DEFAULT_REFRESH_WAIT_TIMEOUT = 60.0

# Headers
HEADER_AUTHORIZATION = "Authorization"
HEADER_CONTENT_TYPE = "Content-Type"

# Auth endpoints
ENDPOINT_LOGIN = "/auth/login"
ENDPOINT_REGISTER = "/auth/register"
ENDPOINT_LOGOUT = "/auth/logout"
ENDPOINT_REFRESH = "/auth/refresh"
ENDPOINT_LOGIN_URLS = "/auth/login-urls"
ENDPOINT_OAUTH_CALLBACK = "/auth/callback"
ENDPOINT_SEND_PASSWORD_RESET = "/auth/send-password-reset"
ENDPOINT_VERIFY_EMAIL = "/auth/verify-email"
ENDPOINT_CHANGE_PASSWORD = "/auth/change-password"

# Endpoints that must never carry an Authorization header
PUBLIC_ENDPOINTS = (
    ENDPOINT_REGISTER,
    ENDPOINT_LOGIN,
    ENDPOINT_REFRESH,
    ENDPOINT_SEND_PASSWORD_RESET,
    ENDPOINT_OAUTH_CALLBACK,
    ENDPOINT_LOGIN_URLS,
    "/auth/diagnose",
    "/auth/health",
)

LOGIN_REDIRECT_URL = "/auth/login"

# Course content
PASSING_SCORE = 75
ROLE_STUDENT = "STUDENT"
ROLE_INSTRUCTOR = "INSTRUCTOR"
STATUS_PUBLISHED = "PUBLISHED"

# Files
DOTENV_FILE = ".env"
