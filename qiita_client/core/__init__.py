"""
Core layer - Raw types and HTTP client.

This layer provides:
- Typed dataclasses for the Qiita API v2 resources
- Low-level async HTTP client with auth and error handling
- Restartable pagination over list endpoints
"""

from qiita_client.core.client import APIClient, APIResponse, ClientConfig, RequestDescriptor
from qiita_client.core.errors import (
    APIError,
    ConfigurationError,
    ForbiddenError,
    InternalServerError,
    NotFoundError,
    QiitaError,
    RateLimitError,
    UnauthorizedError,
    ValidationError,
)
from qiita_client.core.pagination import Paginator
from qiita_client.core.types import (
    AccessToken,
    AuthenticatedUser,
    Comment,
    ExpandedTemplate,
    Group,
    Item,
    Like,
    Project,
    Reaction,
    Tag,
    Tagging,
    Team,
    TeamInvitation,
    Template,
    User,
)

__all__ = [
    "APIClient",
    "APIError",
    "APIResponse",
    "AccessToken",
    "AuthenticatedUser",
    "ClientConfig",
    "Comment",
    "ConfigurationError",
    "ExpandedTemplate",
    "ForbiddenError",
    "Group",
    "InternalServerError",
    "Item",
    "Like",
    "NotFoundError",
    "Paginator",
    "Project",
    "QiitaError",
    "RateLimitError",
    "Reaction",
    "RequestDescriptor",
    "Tag",
    "Tagging",
    "Team",
    "TeamInvitation",
    "Template",
    "UnauthorizedError",
    "User",
    "ValidationError",
]
