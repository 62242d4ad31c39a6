"""
Qiita SDK - High-level async client with nice ergonomics.

This layer provides a clean, typed interface for the Qiita API v2 resources.
Built on top of the core APIClient.
"""

import builtins
import urllib.parse
from collections.abc import Sequence
from typing import Any

import httpx

from qiita_client.core.client import DEFAULT_MAX_PAGE, DEFAULT_TIMEOUT, APIClient
from qiita_client.core.errors import NotFoundError
from qiita_client.core.pagination import PaginationMode, Paginator
from qiita_client.core.types import (
    AccessToken,
    AuthenticatedUser,
    Comment,
    ExpandedTemplate,
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

TagInput = Tagging | str


def _tags_payload(tags: Sequence[TagInput]) -> builtins.list[dict[str, Any]]:
    """Accept Tagging objects or bare tag names."""
    return [tag.to_dict() if isinstance(tag, Tagging) else {"name": tag, "versions": []} for tag in tags]


def _compact(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop unset (None) fields from a request body."""
    return {k: v for k, v in payload.items() if v is not None}


def _segment(value: str | int) -> str:
    """Percent-encode one URL path segment (tag ids like "c#" included)."""
    return urllib.parse.quote(str(value), safe="")


async def _exists(client: APIClient, path: str) -> bool:
    """Check endpoints that answer 204 for yes and 404 for no."""
    try:
        await client.get(path)
    except NotFoundError:
        return False
    return True


class Qiita:
    """
    High-level Qiita API client with typed methods and nice ergonomics.

    Example:
        async with Qiita(token="...") as qiita:
            me = await qiita.me()
            item = await qiita.items.get("c686397e4a0f4f11683d")

            async for page in qiita.items.list(query="tag:python", per_page=20):
                for item in page:
                    print(item.title)

    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        version_path: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        pagination: PaginationMode = "link",
        max_page: int | None = DEFAULT_MAX_PAGE,
        stop_on_empty: bool = True,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the Qiita client.

        Args:
            token: Qiita access token (or QIITA_TOKEN env var)
            base_url: Qiita host (or QIITA_BASE_URL env var)
            version_path: API version path (or QIITA_API_VERSION env var)
            timeout: Request timeout in seconds
            pagination: "link" to follow Link headers, "page" to count pages
            max_page: Highest page number requested in "page" mode (None for no cap)
            stop_on_empty: Stop "page" mode pagination at the first empty page
            http_client: Shared httpx AsyncClient; created lazily when omitted

        """
        self._client = APIClient(
            token=token,
            base_url=base_url,
            version_path=version_path,
            timeout=timeout,
            pagination=pagination,
            max_page=max_page,
            stop_on_empty=stop_on_empty,
            http_client=http_client,
        )

        # Sub-clients for different resources
        self.access_tokens = AccessTokenOperations(self._client)
        self.comments = CommentOperations(self._client)
        self.items = ItemOperations(self._client)
        self.tags = TagOperations(self._client)
        self.templates = TemplateOperations(self._client)
        self.projects = ProjectOperations(self._client)
        self.users = UserOperations(self._client)
        self.teams = TeamOperations(self._client)

    @property
    def token(self) -> str:
        return self._client.token

    @token.setter
    def token(self, value: str) -> None:
        self._client.token = value

    @property
    def base_url(self) -> str:
        return self._client.base_url

    @base_url.setter
    def base_url(self, value: str) -> None:
        self._client.base_url = value

    @property
    def version_path(self) -> str:
        return self._client.version_path

    @version_path.setter
    def version_path(self, value: str) -> None:
        self._client.version_path = value

    async def me(self) -> AuthenticatedUser:
        """Shortcut for users.authenticated()."""
        return await self.users.authenticated()

    def my_items(self, page: int | None = None, per_page: int | None = None) -> Paginator[Item]:
        """Shortcut for users.authenticated_items()."""
        return self.users.authenticated_items(page=page, per_page=per_page)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "Qiita":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


# =============================================================================
# Access Token Operations
# =============================================================================


class AccessTokenOperations:
    """Operations for issuing and revoking access tokens."""

    def __init__(self, client: APIClient):
        self._client = client

    async def create(self, client_id: str, client_secret: str, code: str) -> AccessToken:
        """
        Exchange an authorization code for a new access token.

        Args:
            client_id: ID of the registered OAuth client
            client_secret: Secret of the registered OAuth client
            code: Code appended to the redirect URL after authorization

        Returns:
            The issued AccessToken

        """
        response = await self._client.post(
            "/access_tokens",
            {"client_id": client_id, "client_secret": client_secret, "code": code},
        )
        return AccessToken.from_dict(response.data)

    async def delete(self, token: str) -> bool:
        """Revoke an access token so it can no longer be used."""
        await self._client.delete(f"/access_tokens/{_segment(token)}")
        return True


# =============================================================================
# Comment Operations
# =============================================================================


class CommentOperations:
    """Operations on a single comment."""

    def __init__(self, client: APIClient):
        self._client = client

    async def get(self, comment_id: str) -> Comment:
        response = await self._client.get(f"/comments/{_segment(comment_id)}")
        return Comment.from_dict(response.data)

    async def update(self, comment_id: str, body: str) -> Comment:
        """
        Update a comment.

        Args:
            comment_id: The comment ID
            body: New Markdown body

        Returns:
            Updated Comment

        """
        response = await self._client.patch(f"/comments/{_segment(comment_id)}", {"body": body})
        return Comment.from_dict(response.data)

    async def delete(self, comment_id: str) -> bool:
        await self._client.delete(f"/comments/{_segment(comment_id)}")
        return True

    async def reactions(self, comment_id: str) -> builtins.list[Reaction]:
        """List emoji reactions on a comment, newest first."""
        response = await self._client.get(f"/comments/{_segment(comment_id)}/reactions")
        return [Reaction.from_dict(r) for r in response.data]

    async def add_reaction(self, comment_id: str, name: str) -> Reaction:
        """Add an emoji reaction (e.g. "+1") to a comment."""
        response = await self._client.post(f"/comments/{_segment(comment_id)}/reactions", {"name": name})
        return Reaction.from_dict(response.data)

    async def remove_reaction(self, comment_id: str, name: str) -> Reaction:
        """Remove an emoji reaction from a comment."""
        response = await self._client.delete(f"/comments/{_segment(comment_id)}/reactions/{_segment(name)}")
        return Reaction.from_dict(response.data)


# =============================================================================
# Item Operations
# =============================================================================


class ItemOperations:
    """Operations for items (articles)."""

    def __init__(self, client: APIClient):
        self._client = client

    def list(
        self,
        query: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> Paginator[Item]:
        """
        List items, newest first.

        Args:
            query: Search query (e.g. "tag:python user:qiita")
            page: Start page (1 to 100)
            per_page: Items per page (1 to 100)

        Returns:
            Paginator yielding pages of Items

        """
        return self._client.paginate(
            "/items",
            {"page": page, "per_page": per_page, "query": query},
            parser=Item.from_dict,
        )

    async def get(self, item_id: str) -> Item:
        """
        Get an item by ID.

        Args:
            item_id: The item ID

        Returns:
            Item details

        """
        response = await self._client.get(f"/items/{_segment(item_id)}")
        return Item.from_dict(response.data)

    async def create(
        self,
        title: str,
        body: str,
        tags: Sequence[TagInput],
        private: bool = False,
        coediting: bool | None = None,
        group_url_name: str | None = None,
        tweet: bool | None = None,
    ) -> Item:
        """
        Post a new item.

        Args:
            title: Item title
            body: Markdown body
            tags: Taggings or tag names (at least one)
            private: Publish as a limited-sharing item (not available on Qiita Team)
            coediting: Enable co-editing (Qiita Team only)
            group_url_name: Group to publish to (Qiita Team only)
            tweet: Tweet the item (requires Twitter integration)

        Returns:
            Created Item

        """
        payload = _compact(
            {
                "title": title,
                "body": body,
                "tags": _tags_payload(tags),
                "private": private,
                "coediting": coediting,
                "group_url_name": group_url_name,
                "tweet": tweet,
            }
        )
        response = await self._client.post("/items", payload)
        return Item.from_dict(response.data)

    async def update(
        self,
        item_id: str,
        title: str | None = None,
        body: str | None = None,
        tags: Sequence[TagInput] | None = None,
        private: bool | None = None,
        coediting: bool | None = None,
        group_url_name: str | None = None,
    ) -> Item:
        """
        Update an item. Only the given fields are sent.

        Args:
            item_id: The item ID
            title: New title
            body: New Markdown body
            tags: New taggings or tag names
            private: Limited-sharing flag
            coediting: Co-editing flag (Qiita Team only)
            group_url_name: Group to publish to (Qiita Team only)

        Returns:
            Updated Item

        """
        payload = _compact(
            {
                "title": title,
                "body": body,
                "tags": _tags_payload(tags) if tags is not None else None,
                "private": private,
                "coediting": coediting,
                "group_url_name": group_url_name,
            }
        )
        response = await self._client.patch(f"/items/{_segment(item_id)}", payload)
        return Item.from_dict(response.data)

    async def delete(self, item_id: str) -> bool:
        await self._client.delete(f"/items/{_segment(item_id)}")
        return True

    async def is_liked(self, item_id: str) -> bool:
        """Check whether the authenticated user likes an item."""
        return await _exists(self._client, f"/items/{_segment(item_id)}/like")

    async def like(self, item_id: str) -> bool:
        await self._client.put(f"/items/{_segment(item_id)}/like")
        return True

    async def unlike(self, item_id: str) -> bool:
        await self._client.delete(f"/items/{_segment(item_id)}/like")
        return True

    async def is_stocked(self, item_id: str) -> bool:
        """Check whether the authenticated user stocked an item."""
        return await _exists(self._client, f"/items/{_segment(item_id)}/stock")

    async def stock(self, item_id: str) -> bool:
        await self._client.put(f"/items/{_segment(item_id)}/stock")
        return True

    async def unstock(self, item_id: str) -> bool:
        await self._client.delete(f"/items/{_segment(item_id)}/stock")
        return True

    async def likes(self, item_id: str) -> builtins.list[Like]:
        """List likes on an item, newest first."""
        response = await self._client.get(f"/items/{_segment(item_id)}/likes")
        return [Like.from_dict(like) for like in response.data]

    def stockers(
        self,
        item_id: str,
        page: int | None = None,
        per_page: int | None = None,
    ) -> Paginator[User]:
        """List users who stocked an item, most recent stock first."""
        return self._client.paginate(
            f"/items/{_segment(item_id)}/stockers",
            {"page": page, "per_page": per_page},
            parser=User.from_dict,
        )

    async def reactions(self, item_id: str) -> builtins.list[Reaction]:
        response = await self._client.get(f"/items/{_segment(item_id)}/reactions")
        return [Reaction.from_dict(r) for r in response.data]

    async def add_reaction(self, item_id: str, name: str) -> Reaction:
        response = await self._client.post(f"/items/{_segment(item_id)}/reactions", {"name": name})
        return Reaction.from_dict(response.data)

    async def remove_reaction(self, item_id: str, name: str) -> Reaction:
        response = await self._client.delete(f"/items/{_segment(item_id)}/reactions/{_segment(name)}")
        return Reaction.from_dict(response.data)

    async def comments(self, item_id: str) -> builtins.list[Comment]:
        """List comments on an item, newest first."""
        response = await self._client.get(f"/items/{_segment(item_id)}/comments")
        return [Comment.from_dict(c) for c in response.data]

    async def add_comment(self, item_id: str, body: str) -> Comment:
        """Post a Markdown comment on an item."""
        response = await self._client.post(f"/items/{_segment(item_id)}/comments", {"body": body})
        return Comment.from_dict(response.data)

    async def add_tagging(self, item_id: str, name: str, versions: Sequence[str] = ()) -> Tagging:
        """
        Add a tag to an item (Qiita Team only).

        Args:
            item_id: The item ID
            name: Tag name
            versions: Tag versions

        Returns:
            The created Tagging

        """
        response = await self._client.post(
            f"/items/{_segment(item_id)}/taggings",
            {"name": name, "versions": builtins.list(versions)},
        )
        return Tagging.from_dict(response.data)

    async def remove_tagging(self, item_id: str, tagging_id: str) -> bool:
        """Remove a tag from an item (Qiita Team only)."""
        await self._client.delete(f"/items/{_segment(item_id)}/taggings/{_segment(tagging_id)}")
        return True


# =============================================================================
# Tag Operations
# =============================================================================


class TagOperations:
    """Operations for tags."""

    def __init__(self, client: APIClient):
        self._client = client

    def list(
        self,
        sort: str | None = None,
        page: int | None = None,
        per_page: int | None = None,
    ) -> Paginator[Tag]:
        """
        List tags.

        Args:
            sort: "count" for item count order, "name" for name order
            page: Start page (1 to 100)
            per_page: Tags per page (1 to 100)

        Returns:
            Paginator yielding pages of Tags

        """
        return self._client.paginate(
            "/tags",
            {"page": page, "per_page": per_page, "sort": sort},
            parser=Tag.from_dict,
        )

    async def get(self, tag_id: str) -> Tag:
        response = await self._client.get(f"/tags/{_segment(tag_id)}")
        return Tag.from_dict(response.data)

    async def is_following(self, tag_id: str) -> bool:
        """Check whether the authenticated user follows a tag."""
        return await _exists(self._client, f"/tags/{_segment(tag_id)}/following")

    async def follow(self, tag_id: str) -> bool:
        await self._client.put(f"/tags/{_segment(tag_id)}/following")
        return True

    async def unfollow(self, tag_id: str) -> bool:
        await self._client.delete(f"/tags/{_segment(tag_id)}/following")
        return True

    def items(
        self,
        tag_id: str,
        page: int | None = None,
        per_page: int | None = None,
    ) -> Paginator[Item]:
        """List items with a tag, most recently tagged first."""
        return self._client.paginate(
            f"/tags/{_segment(tag_id)}/items",
            {"page": page, "per_page": per_page},
            parser=Item.from_dict,
        )

    async def search(self, q: str) -> builtins.list[dict[str, Any]]:
        """
        Search tags by name prefix.

        This endpoint is undocumented and lives outside the versioned API,
        so results are returned as raw dicts.

        Args:
            q: Search string

        Returns:
            Matching tags as returned by the API

        """
        response = await self._client.get(f"{self._client.base_url}/api/tags", {"q": q})
        return response.data


# =============================================================================
# Template Operations
# =============================================================================


class TemplateOperations:
    """Operations for Qiita Team item templates."""

    def __init__(self, client: APIClient):
        self._client = client

    def list(self, page: int | None = None, per_page: int | None = None) -> Paginator[Template]:
        return self._client.paginate(
            "/templates",
            {"page": page, "per_page": per_page},
            parser=Template.from_dict,
        )

    async def get(self, template_id: int) -> Template:
        response = await self._client.get(f"/templates/{_segment(template_id)}")
        return Template.from_dict(response.data)

    async def create(self, name: str, title: str, body: str, tags: Sequence[TagInput]) -> Template:
        """
        Create a template.

        Args:
            name: Name identifying the template
            title: Title pattern of generated items
            body: Body of the template
            tags: Taggings or tag names

        Returns:
            Created Template

        """
        payload = {"name": name, "title": title, "body": body, "tags": _tags_payload(tags)}
        response = await self._client.post("/templates", payload)
        return Template.from_dict(response.data)

    async def update(
        self,
        template_id: int,
        name: str | None = None,
        title: str | None = None,
        body: str | None = None,
        tags: Sequence[TagInput] | None = None,
    ) -> Template:
        """Update a template. Only the given fields are sent."""
        payload = _compact(
            {
                "name": name,
                "title": title,
                "body": body,
                "tags": _tags_payload(tags) if tags is not None else None,
            }
        )
        response = await self._client.patch(f"/templates/{_segment(template_id)}", payload)
        return Template.from_dict(response.data)

    async def delete(self, template_id: int) -> bool:
        await self._client.delete(f"/templates/{_segment(template_id)}")
        return True

    async def expand(self, title: str, body: str, tags: Sequence[TagInput]) -> ExpandedTemplate:
        """Preview a template with its variables (e.g. %{Year}) expanded."""
        payload = {"title": title, "body": body, "tags": _tags_payload(tags)}
        response = await self._client.post("/expanded_templates", payload)
        return ExpandedTemplate.from_dict(response.data)


# =============================================================================
# Project Operations
# =============================================================================


class ProjectOperations:
    """Operations for Qiita Team projects."""

    def __init__(self, client: APIClient):
        self._client = client

    def list(self, page: int | None = None, per_page: int | None = None) -> Paginator[Project]:
        """
        List projects in the team, newest first.

        Args:
            page: Start page (1 to 100)
            per_page: Projects per page (1 to 100)

        Returns:
            Paginator yielding pages of Projects

        """
        return self._client.paginate(
            "/projects",
            {"page": page, "per_page": per_page},
            parser=Project.from_dict,
        )

    async def get(self, project_id: int) -> Project:
        response = await self._client.get(f"/projects/{_segment(project_id)}")
        return Project.from_dict(response.data)

    async def create(
        self,
        name: str,
        body: str,
        tags: Sequence[TagInput] = (),
        archived: bool = False,
    ) -> Project:
        """
        Create a project.

        Args:
            name: Project name
            body: Markdown body
            tags: Taggings or tag names
            archived: Whether the project is archived

        Returns:
            Created Project

        """
        payload = {"name": name, "body": body, "tags": _tags_payload(tags), "archived": archived}
        response = await self._client.post("/projects", payload)
        return Project.from_dict(response.data)

    async def update(
        self,
        project_id: int,
        name: str | None = None,
        body: str | None = None,
        tags: Sequence[TagInput] | None = None,
        archived: bool | None = None,
    ) -> Project:
        """Update a project. Only the given fields are sent."""
        payload = _compact(
            {
                "name": name,
                "body": body,
                "tags": _tags_payload(tags) if tags is not None else None,
                "archived": archived,
            }
        )
        response = await self._client.patch(f"/projects/{_segment(project_id)}", payload)
        return Project.from_dict(response.data)

    async def delete(self, project_id: int) -> bool:
        await self._client.delete(f"/projects/{_segment(project_id)}")
        return True

    async def comments(self, project_id: int) -> builtins.list[Comment]:
        response = await self._client.get(f"/projects/{_segment(project_id)}/comments")
        return [Comment.from_dict(c) for c in response.data]

    async def add_comment(self, project_id: int, body: str) -> Comment:
        response = await self._client.post(f"/projects/{_segment(project_id)}/comments", {"body": body})
        return Comment.from_dict(response.data)

    async def reactions(self, project_id: int) -> builtins.list[Reaction]:
        response = await self._client.get(f"/projects/{_segment(project_id)}/reactions")
        return [Reaction.from_dict(r) for r in response.data]

    async def add_reaction(self, project_id: int, name: str) -> Reaction:
        response = await self._client.post(f"/projects/{_segment(project_id)}/reactions", {"name": name})
        return Reaction.from_dict(response.data)

    async def remove_reaction(self, project_id: int, name: str) -> Reaction:
        response = await self._client.delete(f"/projects/{_segment(project_id)}/reactions/{_segment(name)}")
        return Reaction.from_dict(response.data)


# =============================================================================
# User Operations
# =============================================================================


class UserOperations:
    """Operations for users and follow relations."""

    def __init__(self, client: APIClient):
        self._client = client

    def _user_list(self, path: str, page: int | None, per_page: int | None) -> Paginator[User]:
        return self._client.paginate(path, {"page": page, "per_page": per_page}, parser=User.from_dict)

    def _item_list(self, path: str, page: int | None, per_page: int | None) -> Paginator[Item]:
        return self._client.paginate(path, {"page": page, "per_page": per_page}, parser=Item.from_dict)

    def list(self, page: int | None = None, per_page: int | None = None) -> Paginator[User]:
        """List all users, newest first."""
        return self._user_list("/users", page, per_page)

    async def get(self, user_id: str) -> User:
        """
        Get a user by ID.

        Args:
            user_id: The user ID (login name)

        Returns:
            User details

        """
        response = await self._client.get(f"/users/{_segment(user_id)}")
        return User.from_dict(response.data)

    def followees(self, user_id: str, page: int | None = None, per_page: int | None = None) -> Paginator[User]:
        """List users the user follows."""
        return self._user_list(f"/users/{_segment(user_id)}/followees", page, per_page)

    def followers(self, user_id: str, page: int | None = None, per_page: int | None = None) -> Paginator[User]:
        """List users following the user."""
        return self._user_list(f"/users/{_segment(user_id)}/followers", page, per_page)

    def items(self, user_id: str, page: int | None = None, per_page: int | None = None) -> Paginator[Item]:
        """List the user's items, newest first."""
        return self._item_list(f"/users/{_segment(user_id)}/items", page, per_page)

    def stocks(self, user_id: str, page: int | None = None, per_page: int | None = None) -> Paginator[Item]:
        """List items the user stocked, most recent stock first."""
        return self._item_list(f"/users/{_segment(user_id)}/stocks", page, per_page)

    def following_tags(
        self,
        user_id: str,
        page: int | None = None,
        per_page: int | None = None,
    ) -> Paginator[Tag]:
        """List tags the user follows, most recent follow first."""
        return self._client.paginate(
            f"/users/{_segment(user_id)}/following_tags",
            {"page": page, "per_page": per_page},
            parser=Tag.from_dict,
        )

    async def is_following(self, user_id: str) -> bool:
        """Check whether the authenticated user follows a user."""
        return await _exists(self._client, f"/users/{_segment(user_id)}/following")

    async def follow(self, user_id: str) -> bool:
        await self._client.put(f"/users/{_segment(user_id)}/following")
        return True

    async def unfollow(self, user_id: str) -> bool:
        await self._client.delete(f"/users/{_segment(user_id)}/following")
        return True

    async def authenticated(self) -> AuthenticatedUser:
        """Get the user that owns the access token."""
        response = await self._client.get("/authenticated_user")
        return AuthenticatedUser.from_dict(response.data)

    def authenticated_items(self, page: int | None = None, per_page: int | None = None) -> Paginator[Item]:
        """List the authenticated user's items, including private ones."""
        return self._item_list("/authenticated_user/items", page, per_page)


# =============================================================================
# Team Operations
# =============================================================================


class TeamOperations:
    """Operations for Qiita Team membership."""

    def __init__(self, client: APIClient):
        self._client = client

    async def list(self) -> builtins.list[Team]:
        """List teams the user belongs to, newest first."""
        response = await self._client.get("/teams")
        return [Team.from_dict(t) for t in response.data]

    async def invitations(self) -> builtins.list[TeamInvitation]:
        """List pending invitations."""
        response = await self._client.get("/team_invitations")
        return [TeamInvitation.from_dict(i) for i in response.data]

    async def invite(self, email: str) -> TeamInvitation:
        """
        Invite a member to the team.

        Args:
            email: Address to invite

        Returns:
            TeamInvitation with the invitation URL

        """
        response = await self._client.post("/team_invitations", {"email": email})
        return TeamInvitation.from_dict(response.data)

    async def cancel_invitation(self, email: str) -> bool:
        await self._client.delete(f"/team_invitations/{_segment(email)}")
        return True
