"""Tests for decoding API payloads into dataclasses."""

from qiita_client.core.types import (
    AccessToken,
    AuthenticatedUser,
    Item,
    Tagging,
    Template,
    User,
)


class TestUser:
    def test_empty_strings_become_none(self):
        user = User.from_dict(
            {
                "id": "qiitan",
                "permanent_id": 1,
                "name": "",
                "description": "Hello, world.",
                "github_login_name": "",
                "twitter_screen_name": "qiita",
                "items_count": 300,
            }
        )

        assert user.name is None
        assert user.github_login_name is None
        assert user.description == "Hello, world."
        assert user.twitter_screen_name == "qiita"
        assert user.items_count == 300

    def test_authenticated_user_is_a_user(self):
        me = AuthenticatedUser.from_dict({"id": "qiitan", "image_monthly_upload_remaining": 524288})

        assert isinstance(me, User)
        assert me.image_monthly_upload_remaining == 524288
        assert me.team_only is False


class TestItem:
    def test_nested_fields(self):
        item = Item.from_dict(
            {
                "id": "c686397e4a0f4f11683d",
                "title": "Example title",
                "tags": [{"name": "Ruby", "versions": ["0.0.1"]}, {"name": "Rails"}],
                "user": {"id": "qiitan"},
                "group": {"id": 1, "name": "Dev", "url_name": "dev", "private": False},
                "page_views_count": 100,
            }
        )

        assert item.tags == [Tagging(name="Ruby", versions=["0.0.1"]), Tagging(name="Rails")]
        assert item.user == User(id="qiitan")
        assert item.group is not None and item.group.url_name == "dev"
        assert item.page_views_count == 100

    def test_optional_fields_missing(self):
        item = Item.from_dict({"id": "abc", "title": "t", "user": None, "group": None, "tags": None})

        assert item.user is None
        assert item.group is None
        assert item.tags == []
        assert item.page_views_count is None


class TestTemplate:
    def test_taggings_decoded(self):
        template = Template.from_dict(
            {
                "id": 1,
                "name": "Daily report",
                "title": "Weekly MTG on %{Year}/%{month}/%{day}",
                "tags": [{"name": "MTG/%{Year}/%{month}/%{day}", "versions": []}],
                "expanded_title": "Weekly MTG on 2000/01/01",
                "expanded_tags": [{"name": "MTG/2000/01/01", "versions": []}],
            }
        )

        assert template.tags[0].name == "MTG/%{Year}/%{month}/%{day}"
        assert template.expanded_tags == [Tagging(name="MTG/2000/01/01")]
        assert template.body == ""


def test_tagging_to_dict():
    assert Tagging(name="Python", versions=["3.12"]).to_dict() == {"name": "Python", "versions": ["3.12"]}
    assert Tagging(name="Python").to_dict() == {"name": "Python", "versions": []}


def test_access_token_scopes_default():
    token = AccessToken.from_dict({"client_id": "a91f", "token": "ea5d", "scopes": None})

    assert token.scopes == []
