"""
Core types for the Qiita API v2 resources.

These dataclasses provide type safety and IDE support for API responses.
"""

from dataclasses import dataclass, field
from typing import Any

# =============================================================================
# User Types
# =============================================================================


@dataclass
class User:
    """A Qiita user."""

    id: str
    permanent_id: int = 0
    name: str | None = None
    description: str | None = None
    profile_image_url: str | None = None
    followees_count: int = 0
    followers_count: int = 0
    items_count: int = 0
    location: str | None = None
    organization: str | None = None
    website_url: str | None = None
    facebook_id: str | None = None
    github_login_name: str | None = None
    linkedin_id: str | None = None
    twitter_screen_name: str | None = None

    @classmethod
    def _fields_from_dict(cls, data: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": data["id"],
            "permanent_id": data.get("permanent_id", 0),
            "name": data.get("name") or None,
            "description": data.get("description") or None,
            "profile_image_url": data.get("profile_image_url"),
            "followees_count": data.get("followees_count", 0),
            "followers_count": data.get("followers_count", 0),
            "items_count": data.get("items_count", 0),
            "location": data.get("location") or None,
            "organization": data.get("organization") or None,
            "website_url": data.get("website_url") or None,
            "facebook_id": data.get("facebook_id") or None,
            "github_login_name": data.get("github_login_name") or None,
            "linkedin_id": data.get("linkedin_id") or None,
            "twitter_screen_name": data.get("twitter_screen_name") or None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        """Create from API response dict."""
        return cls(**cls._fields_from_dict(data))


@dataclass
class AuthenticatedUser(User):
    """The user that owns the access token."""

    image_monthly_upload_limit: int = 0
    image_monthly_upload_remaining: int = 0
    team_only: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AuthenticatedUser":
        """Create from API response dict."""
        return cls(
            **cls._fields_from_dict(data),
            image_monthly_upload_limit=data.get("image_monthly_upload_limit", 0),
            image_monthly_upload_remaining=data.get("image_monthly_upload_remaining", 0),
            team_only=data.get("team_only", False),
        )


def _user_or_none(data: dict[str, Any] | None) -> User | None:
    return User.from_dict(data) if data else None


# =============================================================================
# Tag Types
# =============================================================================


@dataclass
class Tagging:
    """A tag attached to an item or template."""

    name: str
    versions: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tagging":
        """Create from API response dict."""
        return cls(name=data["name"], versions=data.get("versions") or [])

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request."""
        return {"name": self.name, "versions": self.versions}


@dataclass
class Tag:
    """A tag as listed on /tags."""

    id: str
    followers_count: int = 0
    items_count: int = 0
    icon_url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tag":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            followers_count=data.get("followers_count", 0),
            items_count=data.get("items_count", 0),
            icon_url=data.get("icon_url"),
        )


def _taggings(raw: list[dict[str, Any]] | None) -> list[Tagging]:
    return [Tagging.from_dict(tag) for tag in raw or []]


# =============================================================================
# Item Types
# =============================================================================


@dataclass
class Group:
    """A Qiita Team group."""

    id: int
    name: str
    url_name: str
    private: bool = False
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Group":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            url_name=data.get("url_name", ""),
            private=data.get("private", False),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class Item:
    """A posted article."""

    id: str
    title: str
    body: str = ""
    rendered_body: str = ""
    url: str | None = None
    coediting: bool = False
    private: bool = False
    comments_count: int = 0
    likes_count: int = 0
    page_views_count: int | None = None
    tags: list[Tagging] = field(default_factory=list)
    user: User | None = None
    group: Group | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            body=data.get("body") or "",
            rendered_body=data.get("rendered_body") or "",
            url=data.get("url"),
            coediting=data.get("coediting", False),
            private=data.get("private", False),
            comments_count=data.get("comments_count", 0),
            likes_count=data.get("likes_count", 0),
            # Only returned to the item's author
            page_views_count=data.get("page_views_count"),
            tags=_taggings(data.get("tags")),
            user=_user_or_none(data.get("user")),
            group=Group.from_dict(data["group"]) if data.get("group") else None,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class Comment:
    """A comment on an item or project."""

    id: str
    body: str = ""
    rendered_body: str = ""
    user: User | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Comment":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            body=data.get("body") or "",
            rendered_body=data.get("rendered_body") or "",
            user=_user_or_none(data.get("user")),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class Like:
    """A like on an item."""

    user: User | None = None
    created_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Like":
        """Create from API response dict."""
        return cls(user=_user_or_none(data.get("user")), created_at=data.get("created_at"))


@dataclass
class Reaction:
    """An emoji reaction."""

    name: str
    image_url: str | None = None
    user: User | None = None
    created_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Reaction":
        """Create from API response dict."""
        return cls(
            name=data["name"],
            image_url=data.get("image_url"),
            user=_user_or_none(data.get("user")),
            created_at=data.get("created_at"),
        )


# =============================================================================
# Team Types
# =============================================================================


@dataclass
class Project:
    """A Qiita Team project."""

    id: int
    name: str
    body: str = ""
    rendered_body: str = ""
    archived: bool = False
    reactions_count: int = 0
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            body=data.get("body") or "",
            rendered_body=data.get("rendered_body") or "",
            archived=data.get("archived", False),
            reactions_count=data.get("reactions_count", 0),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class Team:
    """A Qiita Team the user belongs to."""

    id: str
    name: str
    active: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Team":
        """Create from API response dict."""
        return cls(id=data["id"], name=data.get("name", ""), active=data.get("active", True))


@dataclass
class TeamInvitation:
    """A pending team invitation. The URL expires after one day."""

    email: str
    url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TeamInvitation":
        """Create from API response dict."""
        return cls(email=data["email"], url=data.get("url"))


# =============================================================================
# Template Types
# =============================================================================


@dataclass
class ExpandedTemplate:
    """A template with its variables expanded."""

    expanded_title: str = ""
    expanded_body: str = ""
    expanded_tags: list[Tagging] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ExpandedTemplate":
        """Create from API response dict."""
        return cls(
            expanded_title=data.get("expanded_title") or "",
            expanded_body=data.get("expanded_body") or "",
            expanded_tags=_taggings(data.get("expanded_tags")),
        )


@dataclass
class Template:
    """An item template."""

    id: int
    name: str
    title: str = ""
    body: str = ""
    tags: list[Tagging] = field(default_factory=list)
    expanded_title: str = ""
    expanded_body: str = ""
    expanded_tags: list[Tagging] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Template":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            title=data.get("title") or "",
            body=data.get("body") or "",
            tags=_taggings(data.get("tags")),
            expanded_title=data.get("expanded_title") or "",
            expanded_body=data.get("expanded_body") or "",
            expanded_tags=_taggings(data.get("expanded_tags")),
        )


# =============================================================================
# Access Token Types
# =============================================================================


@dataclass
class AccessToken:
    """An access token issued for an OAuth client."""

    client_id: str
    token: str
    scopes: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AccessToken":
        """Create from API response dict."""
        return cls(
            client_id=data.get("client_id", ""),
            token=data["token"],
            scopes=data.get("scopes") or [],
        )
