"""Integration tests for the /users endpoints via TestClient."""

from canteen.identity.security import verify_password
from canteen.identity.user import User
from protean import current_domain


def _reload(user):
    return current_domain.repository_for(User).get(str(user.id))


class TestProfileEndpoints:
    def test_update_profile(self, client, make_user, auth_headers):
        user = make_user()
        response = client.put("/users/profile", json={"name": "Renamed"}, headers=auth_headers(user))
        assert response.status_code == 200
        assert response.json()["data"]["user"]["name"] == "Renamed"

    def test_change_password(self, client, make_user, auth_headers):
        user = make_user(password="Password123")
        response = client.put(
            "/users/change-password",
            json={"current_password": "Password123", "new_password": "Password456"},
            headers=auth_headers(user),
        )
        assert response.status_code == 200
        assert verify_password("Password456", _reload(user).password_hash)

    def test_change_password_with_wrong_current(self, client, make_user, auth_headers):
        user = make_user(password="Password123")
        response = client.put(
            "/users/change-password",
            json={"current_password": "nope-nope", "new_password": "Password456"},
            headers=auth_headers(user),
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Current password is incorrect"


class TestAvatarEndpoints:
    def test_upload_and_delete_avatar(self, client, make_user, auth_headers, image_store):
        user = make_user()
        response = client.post(
            "/users/avatar",
            files={"image": ("me.png", b"png-bytes", "image/png")},
            headers=auth_headers(user),
        )
        assert response.status_code == 200
        public_id = _reload(user).avatar_public_id
        assert public_id in image_store.objects

        response = client.delete("/users/avatar", headers=auth_headers(_reload(user)))
        assert response.status_code == 200
        assert _reload(user).avatar_url is None
        assert public_id not in image_store.objects

    def test_new_avatar_replaces_old(self, client, make_user, auth_headers, image_store):
        user = make_user()
        client.post("/users/avatar", files={"image": ("a.png", b"a", "image/png")}, headers=auth_headers(user))
        first = _reload(user).avatar_public_id
        client.post("/users/avatar", files={"image": ("b.png", b"b", "image/png")}, headers=auth_headers(user))

        assert first not in image_store.objects
        assert list(image_store.objects) == [_reload(user).avatar_public_id]

    def test_delete_without_avatar(self, client, make_user, auth_headers):
        user = make_user()
        response = client.delete("/users/avatar", headers=auth_headers(user))
        assert response.status_code == 400
        assert response.json()["message"] == "No avatar to delete"

    def test_upload_failure(self, client, make_user, auth_headers, image_store):
        image_store.configure(fail_uploads=True)
        user = make_user()
        response = client.post(
            "/users/avatar", files={"image": ("a.png", b"a", "image/png")}, headers=auth_headers(user)
        )
        assert response.status_code == 500
        assert response.json()["message"] == "Failed to upload image"


class TestAdminUserEndpoints:
    def test_students_cannot_list_users(self, client, make_user, auth_headers):
        student = make_user()
        response = client.get("/users/admin/all", headers=auth_headers(student))
        assert response.status_code == 403
        assert response.json()["message"] == "Role 'student' is not authorized to access this route"

    def test_admin_lists_and_searches(self, client, make_user, auth_headers):
        admin = make_user(email="admin@campus.edu", role="admin", name="Admin")
        make_user(email="asha@campus.edu", name="Asha Rao")
        make_user(email="ben@campus.edu", name="Ben Okafor")

        response = client.get("/users/admin/all", params={"role": "student"}, headers=auth_headers(admin))
        body = response.json()
        assert body["total"] == 2
        assert body["count"] == 2

        response = client.get("/users/admin/all", params={"search": "asha"}, headers=auth_headers(admin))
        assert [u["email"] for u in response.json()["data"]] == ["asha@campus.edu"]

    def test_admin_changes_role(self, client, make_user, auth_headers):
        admin = make_user(email="admin@campus.edu", role="admin")
        student = make_user(email="asha@campus.edu")

        response = client.put(
            f"/users/admin/{student.id}/role", json={"role": "admin"}, headers=auth_headers(admin)
        )
        assert response.status_code == 200
        assert _reload(student).role == "admin"

    def test_invalid_role(self, client, make_user, auth_headers):
        admin = make_user(email="admin@campus.edu", role="admin")
        student = make_user(email="asha@campus.edu")
        response = client.put(
            f"/users/admin/{student.id}/role", json={"role": "chef"}, headers=auth_headers(admin)
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid role"

    def test_unknown_user(self, client, make_user, auth_headers):
        admin = make_user(email="admin@campus.edu", role="admin")
        response = client.put("/users/admin/missing/role", json={"role": "admin"}, headers=auth_headers(admin))
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"
