"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_TOKEN_HOURS = 24
DEFAULT_WEB_SESSION_TTL_SECONDS = 5 * 60
WEB_SESSION_POLL_SECONDS = 2
SESSION_ID_BYTES = 16
MIN_PASSWORD_LENGTH = 6
QR_LOGIN_PREFIX = "web-login"

DEFAULT_ADMIN_PREFERENCES = {
    "autoRefresh": True,
    "refreshInterval": 3,
    "darkMode": False,
    "notifications": True,
    "sessionTimeout": 30,
}
