"""
Qiita client - Async client for the Qiita API v2.

Layers:
- core: Raw types, HTTP client and pagination
- sdk: High-level Qiita client with nice ergonomics
"""

from qiita_client.core.errors import (
    APIError,
    ConfigurationError,
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    QiitaError,
    RateLimitError,
    UnauthorizedError,
)
from qiita_client.sdk import Qiita

__version__ = "0.1.0"
__all__ = [
    "APIError",
    "ConfigurationError",
    "ForbiddenError",
    "InternalServerError",
    "NotFoundError",
    "Qiita",
    "QiitaError",
    "RateLimitError",
    "UnauthorizedError",
]
