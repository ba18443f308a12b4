"""Application tests for account maintenance commands."""

import pytest
from canteen.identity.account import ChangeUserRole, RemoveAvatar, SetAvatar, UpdateProfile
from canteen.identity.queries import search_users
from canteen.identity.user import User
from protean import current_domain
from protean.exceptions import ValidationError


def _reload(user):
    return current_domain.repository_for(User).get(str(user.id))


class TestAccountCommands:
    def test_update_profile(self, make_user):
        user = make_user()
        current_domain.process(UpdateProfile(user_id=str(user.id), name="New Name"), asynchronous=False)
        assert _reload(user).name == "New Name"

    def test_promote_to_admin(self, make_user):
        user = make_user()
        current_domain.process(ChangeUserRole(user_id=str(user.id), role="admin"), asynchronous=False)
        assert _reload(user).is_admin

    def test_invalid_role_leaves_user_unchanged(self, make_user):
        user = make_user()
        with pytest.raises(ValidationError):
            current_domain.process(ChangeUserRole(user_id=str(user.id), role="chef"), asynchronous=False)
        assert _reload(user).role == "student"

    def test_avatar_set_then_removed(self, make_user):
        user = make_user()
        current_domain.process(
            SetAvatar(user_id=str(user.id), avatar_url="https://img/avatars/a1", avatar_public_id="avatars/a1"),
            asynchronous=False,
        )
        assert _reload(user).avatar_public_id == "avatars/a1"

        current_domain.process(RemoveAvatar(user_id=str(user.id)), asynchronous=False)
        assert _reload(user).avatar_url is None


class TestSearchUsers:
    def test_filters_by_role_and_text(self, make_user):
        make_user(email="asha@campus.edu", name="Asha Rao")
        make_user(email="ben@campus.edu", name="Ben Okafor")
        make_user(email="chef@campus.edu", name="Head Chef", role="admin")

        assert {u.email for u in search_users(role="student")} == {"asha@campus.edu", "ben@campus.edu"}
        assert [u.email for u in search_users(search="okaf")] == ["ben@campus.edu"]
        assert [u.email for u in search_users(role="admin")] == ["chef@campus.edu"]

    def test_lists_every_matching_user(self, make_user):
        for _ in range(103):
            make_user()

        assert len(search_users(role="student")) == 103
        assert len(search_users(search="campus.edu")) == 103
