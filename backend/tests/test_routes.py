"""
PostBoard Backend - Endpoint Tests
===================================

What:  The HTTP contract: status codes, camelCase bodies, error envelope.
How:   HTTPX AsyncClient over ASGITransport against a fresh app per test
       (see conftest.test_client); every request commits like production.

What we test:
    ✅ Error mapping: 400 validation/conflict, 403 forbidden, 404 not found
    ✅ Role is returned on signup and hidden on lookups
    ✅ Soft delete through DELETE /posts/{id}
    ✅ Comment endpoints end to end
    ✅ X-Request-ID propagation and /health
"""

import pytest


async def _signup(client, name="Ally", email="ally@mail.com", password="longenough"):
    response = await client.post(
        "/users/signup",
        json={"name": name, "email": email, "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()


async def _create_post(client, user_id, title="Hello", content="World"):
    response = await client.post(
        "/posts",
        json={"title": title, "content": content, "userId": user_id},
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestUserEndpoints:

    @pytest.mark.asyncio
    async def test_signup_returns_role_without_password(self, test_client):
        body = await _signup(test_client)

        assert body["role"] == "user"
        assert body["email"] == "ally@mail.com"
        assert "password" not in body
        assert "createdAt" in body

    @pytest.mark.asyncio
    async def test_duplicate_email_is_400(self, test_client):
        await _signup(test_client)

        response = await test_client.post(
            "/users/signup",
            json={"name": "Other", "email": "ally@mail.com", "password": "longenough"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "conflict"
        assert response.json()["message"] == "Email already exists"

    @pytest.mark.asyncio
    async def test_short_name_is_400(self, test_client):
        response = await test_client.post(
            "/users/signup",
            json={"name": "Al", "email": "al@mail.com", "password": "longenough"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "name"

    @pytest.mark.asyncio
    async def test_unknown_role_is_400(self, test_client):
        response = await test_client.post(
            "/users/signup",
            json={
                "name": "Ally",
                "email": "a@a.com",
                "password": "longenough",
                "role": "superuser",
            },
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "role"

    @pytest.mark.asyncio
    async def test_admin_role_accepted(self, test_client):
        response = await test_client.post(
            "/users/signup",
            json={"name": "Root", "email": "root@mail.com", "password": "longenough", "role": "admin"},
        )

        assert response.status_code == 200
        assert response.json()["role"] == "admin"

    @pytest.mark.asyncio
    async def test_missing_password_is_400(self, test_client):
        response = await test_client.post(
            "/users/signup",
            json={"name": "Ally", "email": "ally@mail.com"},
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_get_by_id_hides_role(self, test_client):
        user = await _signup(test_client)

        response = await test_client.get(f"/users/{user['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == user["id"]
        assert "role" not in response.json()

    @pytest.mark.asyncio
    async def test_get_unknown_user_is_404(self, test_client):
        response = await test_client.get("/users/999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_by_email_absent_is_null(self, test_client):
        response = await test_client.get("/users/by-email", params={"email": "nobody@mail.com"})

        assert response.status_code == 200
        assert response.json() is None

    @pytest.mark.asyncio
    async def test_by_email_found(self, test_client):
        user = await _signup(test_client)

        response = await test_client.get("/users/by-email", params={"email": "ally@mail.com"})
        assert response.json()["id"] == user["id"]

    @pytest.mark.asyncio
    async def test_upsert_insert_then_update(self, test_client):
        inserted = await test_client.put(
            "/users/50",
            json={"name": "Al", "email": "al@mail.com", "password": "x"},
        )
        assert inserted.status_code == 200
        assert inserted.json()["created"] is True
        assert inserted.json()["user"]["id"] == 50

        updated = await test_client.put("/users/50", json={"name": "Alfred"})
        assert updated.json()["created"] is False
        assert updated.json()["user"]["name"] == "Alfred"


class TestPostEndpoints:

    @pytest.mark.asyncio
    async def test_create_post_camel_case(self, test_client):
        user = await _signup(test_client)

        post = await _create_post(test_client, user["id"])

        assert post["userId"] == user["id"]
        assert post["deletedAt"] is None

    @pytest.mark.asyncio
    async def test_create_post_for_unknown_user_is_500(self, test_client):
        """The posts.user_id foreign key rejects the row; nothing is stored."""
        response = await test_client.post(
            "/posts",
            json={"title": "t", "content": "c", "userId": 999},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert (await test_client.get("/posts/details")).json() == []

    @pytest.mark.asyncio
    async def test_delete_by_stranger_is_403(self, test_client):
        owner = await _signup(test_client)
        stranger = await _signup(test_client, name="Bob", email="bob@mail.com")
        post = await _create_post(test_client, owner["id"])

        response = await test_client.request(
            "DELETE", f"/posts/{post['id']}", json={"userId": stranger["id"]}
        )

        assert response.status_code == 403
        assert response.json()["error"] == "forbidden"
        assert (await test_client.get(f"/posts/{post['id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_owner_delete_soft_deletes(self, test_client):
        owner = await _signup(test_client)
        post = await _create_post(test_client, owner["id"])

        response = await test_client.request(
            "DELETE", f"/posts/{post['id']}", json={"userId": owner["id"]}
        )
        assert response.status_code == 200

        assert (await test_client.get(f"/posts/{post['id']}")).status_code == 404
        assert (await test_client.get("/posts/details")).json() == []
        assert (await test_client.get("/posts/comment-count")).json() == []

        archived = await test_client.get(
            f"/posts/{post['id']}", params={"includeDeleted": "true"}
        )
        assert archived.status_code == 200
        assert archived.json()["deletedAt"] is not None

        again = await test_client.request(
            "DELETE", f"/posts/{post['id']}", json={"userId": owner["id"]}
        )
        assert again.status_code == 404

    @pytest.mark.asyncio
    async def test_comment_count_zero(self, test_client):
        owner = await _signup(test_client)
        post = await _create_post(test_client, owner["id"], title="quiet")

        response = await test_client.get("/posts/comment-count")

        assert response.json() == [{"id": post["id"], "title": "quiet", "commentCount": 0}]


class TestCommentEndpoints:

    @pytest.mark.asyncio
    async def test_bulk_create_and_details(self, test_client):
        user = await _signup(test_client)
        post = await _create_post(test_client, user["id"], title="Parent")

        created = await test_client.post(
            "/comments",
            json=[
                {"content": "first", "postId": post["id"], "userId": user["id"]},
                {"content": "second", "postId": post["id"], "userId": user["id"]},
            ],
        )
        assert created.status_code == 200
        assert [c["content"] for c in created.json()] == ["first", "second"]

        details = await test_client.get(f"/comments/details/{created.json()[0]['id']}")
        body = details.json()
        assert body["user"]["id"] == user["id"]
        assert "role" not in body["user"]
        assert body["post"]["title"] == "Parent"

        listing = (await test_client.get("/posts/details")).json()
        assert listing[0]["user"] == {"id": user["id"], "name": "Ally"}
        assert [c["content"] for c in listing[0]["comments"]] == ["first", "second"]

    @pytest.mark.asyncio
    async def test_bulk_with_unknown_post_is_400_and_atomic(self, test_client):
        user = await _signup(test_client)
        post = await _create_post(test_client, user["id"])

        response = await test_client.post(
            "/comments",
            json=[
                {"content": "ok", "postId": post["id"], "userId": user["id"]},
                {"content": "lost", "postId": 999, "userId": user["id"]},
            ],
        )

        assert response.status_code == 400
        assert response.json()["details"]["missing_post_ids"] == [999]
        assert (await test_client.get("/comments/search", params={"word": "ok"})).json()["count"] == 0

    @pytest.mark.asyncio
    async def test_update_comment_ownership(self, test_client):
        owner = await _signup(test_client)
        stranger = await _signup(test_client, name="Bob", email="bob@mail.com")
        post = await _create_post(test_client, owner["id"])
        comment = (
            await test_client.post(
                "/comments",
                json=[{"content": "before", "postId": post["id"], "userId": owner["id"]}],
            )
        ).json()[0]

        forbidden = await test_client.patch(
            f"/comments/{comment['id']}",
            json={"userId": stranger["id"], "content": "hijacked"},
        )
        assert forbidden.status_code == 403

        allowed = await test_client.patch(
            f"/comments/{comment['id']}",
            json={"userId": owner["id"], "content": "after"},
        )
        assert allowed.status_code == 200
        assert allowed.json()["content"] == "after"

        missing = await test_client.patch(
            "/comments/999", json={"userId": owner["id"], "content": "x"}
        )
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_find_or_create(self, test_client):
        user = await _signup(test_client)
        post = await _create_post(test_client, user["id"])
        payload = {"content": "hi", "postId": post["id"], "userId": user["id"]}

        first = await test_client.post("/comments/find-or-create", json=payload)
        second = await test_client.post("/comments/find-or-create", json=payload)

        assert first.json()["created"] is True
        assert second.json()["created"] is False
        assert first.json()["comment"]["id"] == second.json()["comment"]["id"]

    @pytest.mark.asyncio
    async def test_search_and_newest(self, test_client):
        user = await _signup(test_client)
        post = await _create_post(test_client, user["id"])
        await test_client.post(
            "/comments",
            json=[
                {"content": f"note {i}", "postId": post["id"], "userId": user["id"]}
                for i in range(4)
            ],
        )

        search = (await test_client.get("/comments/search", params={"word": "note"})).json()
        assert search["count"] == len(search["rows"]) == 4

        newest = (await test_client.get(f"/comments/newest/{post['id']}")).json()
        assert [c["content"] for c in newest] == ["note 3", "note 2", "note 1"]

    @pytest.mark.asyncio
    async def test_details_unknown_is_404(self, test_client):
        response = await test_client.get("/comments/details/404")
        assert response.status_code == 404


class TestPlumbing:

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/users/999", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"
        assert response.json()["request_id"] == "abc12345"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/posts/details")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
