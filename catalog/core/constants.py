"""
Service Constants (Single Source of Truth)

Static values fixed at build time; never overridden by environment variables.
"""

# =============================================================================
# Service Identity
# =============================================================================
SERVICE_NAME = "catalog-api"
SERVICE_VERSION = "1.0.0"

# =============================================================================
# Logging Constants (12-Factor App Compliance)
# =============================================================================
# ECS (Elastic Common Schema) version
ECS_VERSION = "8.11.0"

# LogRecord attributes to exclude from extra fields
# Reference: https://docs.python.org/3/library/logging.html#logrecord-attributes
EXCLUDED_LOG_RECORD_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
        "asctime",
    }
)

# Extra keys promoted to ECS fields; everything else lands under "labels"
ECS_FIELD_MAP = {
    "file_name": "file.name",
    "content_type": "file.mime_type",
    "size_bytes": "file.size",
    "account_id": "user.id",
    "role": "user.roles",
}

# =============================================================================
# PII Masking Configuration
# =============================================================================
# Sensitive field names (case-insensitive substring matching)
# Reference: OWASP Logging Cheat Sheet
SENSITIVE_FIELD_PATTERNS = frozenset(
    {
        "password",  # Login, registration, password reset
        "secret",  # jwt_secret_key, S3 secret access key
        "token",  # Access tokens
        "authorization",  # HTTP Authorization header
    }
)

MASK_PLACEHOLDER = "***REDACTED***"

MASK_PRESERVE_PREFIX = 4
MASK_PRESERVE_SUFFIX = 4
MASK_MIN_LENGTH = 10

# =============================================================================
# Image Upload
# =============================================================================
# Content-Type → 확장자 매핑
CONTENT_TYPE_TO_EXT = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

# Content-Type → Pillow format written on re-encode
CONTENT_TYPE_TO_FORMAT = {
    "image/png": "PNG",
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/gif": "GIF",
    "image/webp": "WEBP",
}

# Content-Type → Pillow formats accepted on decode (MPO: multi-picture JPEG from phone cameras)
CONTENT_TYPE_DECODED_FORMATS = {
    "image/png": frozenset({"PNG"}),
    "image/jpeg": frozenset({"JPEG", "MPO"}),
    "image/jpg": frozenset({"JPEG", "MPO"}),
    "image/gif": frozenset({"GIF"}),
    "image/webp": frozenset({"WEBP"}),
}

# Storage key prefixes per owning entity
PRODUCT_IMAGE_NAMESPACE = "products"
BANNER_IMAGE_NAMESPACE = "banners"

# =============================================================================
# Pagination
# =============================================================================
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
