"""
utils/constants.py

Purpose: Centralized static content

- All client-facing response messages
- Field names of the user document

(Prevents hardcoding across the codebase)
"""

# ============================================================
# USER DOCUMENT FIELDS
# ============================================================

FIELD_NAME = "name"
FIELD_EMAIL = "email"
FIELD_ADDRESS = "address"
FIELD_PASSWORD_HASH = "password_hash"
FIELD_MOBILE_NUMBER = "mobile_number"
FIELD_SESSION_TOKENS = "session_tokens"
FIELD_CREATED_AT = "created_at"
FIELD_LAST_LOGIN_AT = "last_login_at"

# ============================================================
# REGISTRATION
# ============================================================

MSG_ALL_FIELDS_REQUIRED = "All fields are required"
MSG_INVALID_NAME = "Name must be at least 3 characters long"
MSG_INVALID_EMAIL = "Invalid email format"
MSG_INVALID_ADDRESS = "Address must be at least 10 characters long"
MSG_INVALID_PASSWORD = (
    "Password must be at least 7 characters long and contain at least one special character"
)
MSG_INVALID_MOBILE = "Invalid mobile number"
MSG_EMAIL_EXISTS = "Email already exists"
MSG_REGISTERED = "User registered successfully"

# ============================================================
# LOGIN / LOGOUT
# ============================================================

MSG_CREDENTIALS_REQUIRED = "Email and password are required"
MSG_INVALID_CREDENTIALS = "Invalid email or password"
MSG_LOGIN_SUCCESS = "Login successful"
MSG_TOKEN_REQUIRED = "Token is required for logout"
MSG_SESSION_NOT_FOUND = "Session not found"
MSG_LOGOUT_SUCCESS = "Logout successful"

# ============================================================
# AUTH GATE
# ============================================================

MSG_TOKEN_MISSING = "Authentication token is missing"
MSG_TOKEN_INVALID = "Invalid or expired token"
MSG_USER_NOT_FOUND = "User not found"
MSG_SESSION_INACTIVE = "Session is no longer active"

# ============================================================
# LOOKUPS
# ============================================================

MSG_INVALID_MOBILE_FORMAT = "Invalid mobile number format"
MSG_USERS_FETCHED = "Users fetched successfully"

# ============================================================
# HEALTH
# ============================================================

CONNECTED_MESSAGE = "Connected successfully"
