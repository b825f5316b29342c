# =============================================================================
# tests/test_comments.py - Comment endpoints
# =============================================================================

import sqlite3

from blog_api.app.services.comment_service import CommentService


async def _boom(*args, **kwargs):
    raise sqlite3.OperationalError("database is locked")


class TestCreateComment:
    def test_create_returns_201_and_id(self, client, alice, bob, make_post):
        _, alice_headers = alice
        bob_id, bob_headers = bob
        post_id = make_post(alice_headers)

        response = client.post("/comments", json={"content": "Nice post!", "post_id": post_id}, headers=bob_headers)

        assert response.status_code == 201
        assert response.json()["message"] == "Comment created"
        comment_id = response.json()["commentId"]

        comments = client.get(f"/comments/post/{post_id}", headers=bob_headers).json()["comments"]
        assert comments[0]["id"] == comment_id
        assert comments[0]["content"] == "Nice post!"
        assert comments[0]["author_id"] == bob_id

    def test_invalid_content_is_400(self, client, alice, make_post):
        _, headers = alice
        post_id = make_post(headers)

        response = client.post("/comments", json={"content": "no", "post_id": post_id}, headers=headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid input"}

    def test_missing_post_id_is_400(self, client, alice):
        _, headers = alice

        response = client.post("/comments", json={"content": "Nice post!"}, headers=headers)

        assert response.status_code == 400
        assert response.json() == {"message": "post_id is required"}

    def test_unknown_post_is_store_failure(self, client, alice):
        _, headers = alice

        response = client.post("/comments", json={"content": "Nice post!", "post_id": "missing"}, headers=headers)

        assert response.status_code == 500
        assert response.json() == {"message": "Unable to create comment"}

    def test_store_failure_is_500(self, client, alice, make_post, monkeypatch):
        _, headers = alice
        post_id = make_post(headers)
        monkeypatch.setattr(CommentService, "create_comment", _boom)

        response = client.post("/comments", json={"content": "Nice post!", "post_id": post_id}, headers=headers)

        assert response.status_code == 500


class TestListComments:
    def test_all_comments_newest_first_with_author_summary(self, client, alice, bob, make_post, make_comment):
        alice_id, alice_headers = alice
        _, bob_headers = bob
        first_post = make_post(alice_headers, title="Post one")
        second_post = make_post(bob_headers, title="Post two")
        c1 = make_comment(bob_headers, first_post, content="comment one")
        c2 = make_comment(alice_headers, second_post, content="comment two")
        c3 = make_comment(alice_headers, first_post, content="comment three")

        response = client.get("/comments", headers=alice_headers)

        assert response.status_code == 200
        comments = response.json()["allComments"]
        assert [comment["id"] for comment in comments] == [c3, c2, c1]
        assert comments[0]["author"] == {"id": alice_id, "username": "alice"}

    def test_comments_for_post_include_author_email(self, client, alice, bob, make_post, make_comment):
        _, alice_headers = alice
        bob_id, bob_headers = bob
        post_id = make_post(alice_headers)
        other_post = make_post(alice_headers, title="Other")
        older = make_comment(bob_headers, post_id, content="older one")
        make_comment(bob_headers, other_post, content="elsewhere")
        newer = make_comment(alice_headers, post_id, content="newer one")

        response = client.get(f"/comments/post/{post_id}", headers=alice_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Got comments"
        assert [comment["id"] for comment in body["comments"]] == [newer, older]
        assert body["comments"][1]["author"] == {"id": bob_id, "username": "bob", "email": "bob@example.com"}

    def test_comments_for_unknown_post_is_empty(self, client, alice):
        _, headers = alice

        response = client.get("/comments/post/missing", headers=headers)

        assert response.status_code == 200
        assert response.json()["comments"] == []

    def test_store_failures_are_500(self, client, alice, monkeypatch):
        _, headers = alice
        monkeypatch.setattr(CommentService, "list_comments", _boom)
        monkeypatch.setattr(CommentService, "list_comments_for_post", _boom)

        assert client.get("/comments", headers=headers).status_code == 500
        assert client.get("/comments/post/anything", headers=headers).status_code == 500


class TestUpdateComment:
    def test_author_can_update(self, client, alice, make_post, make_comment):
        _, headers = alice
        comment_id = make_comment(headers, make_post(headers))

        response = client.put(f"/comments/{comment_id}", json={"content": "Edited comment"}, headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Comment updated"
        assert body["comment"]["id"] == comment_id
        assert body["comment"]["content"] == "Edited comment"

    def test_non_author_is_forbidden_and_comment_unchanged(self, client, alice, bob, make_post, make_comment):
        _, alice_headers = alice
        _, bob_headers = bob
        post_id = make_post(alice_headers)
        comment_id = make_comment(alice_headers, post_id, content="Original comment")

        response = client.put(f"/comments/{comment_id}", json={"content": "Hijacked"}, headers=bob_headers)

        assert response.status_code == 403
        comments = client.get(f"/comments/post/{post_id}", headers=alice_headers).json()["comments"]
        assert comments[0]["content"] == "Original comment"

    def test_invalid_content_is_400(self, client, alice, make_post, make_comment):
        _, headers = alice
        comment_id = make_comment(headers, make_post(headers))

        response = client.put(f"/comments/{comment_id}", json={"content": "x" * 501}, headers=headers)

        assert response.status_code == 400

    def test_unknown_comment_is_404(self, client, alice):
        _, headers = alice

        response = client.put("/comments/missing", json={"content": "Edited comment"}, headers=headers)

        assert response.status_code == 404
        assert response.json() == {"message": "Comment not found"}

    def test_comment_vanishing_after_check_is_404(self, client, alice, make_post, make_comment, monkeypatch):
        _, headers = alice
        comment_id = make_comment(headers, make_post(headers))

        original = CommentService.get_author_id

        async def check_then_delete(cid):
            author = await original(cid)
            await CommentService.delete_comment(cid)
            return author

        monkeypatch.setattr(CommentService, "get_author_id", check_then_delete)

        response = client.put(f"/comments/{comment_id}", json={"content": "Too late"}, headers=headers)

        assert response.status_code == 404
        assert response.json() == {"message": "Comment not found"}

    def test_store_failure_is_500(self, client, alice, make_post, make_comment, monkeypatch):
        _, headers = alice
        comment_id = make_comment(headers, make_post(headers))
        monkeypatch.setattr(CommentService, "update_comment", _boom)

        response = client.put(f"/comments/{comment_id}", json={"content": "Edited comment"}, headers=headers)

        assert response.status_code == 500
        assert response.json() == {"message": "Unable to update comment"}


class TestDeleteComment:
    def test_author_can_delete_once(self, client, alice, make_post, make_comment):
        _, headers = alice
        post_id = make_post(headers)
        comment_id = make_comment(headers, post_id)

        assert client.delete(f"/comments/{comment_id}", headers=headers).status_code == 204
        assert client.delete(f"/comments/{comment_id}", headers=headers).status_code == 404
        assert client.get(f"/comments/post/{post_id}", headers=headers).json()["comments"] == []

    def test_non_author_is_forbidden(self, client, alice, bob, make_post, make_comment):
        _, alice_headers = alice
        _, bob_headers = bob
        post_id = make_post(alice_headers)
        comment_id = make_comment(alice_headers, post_id)

        response = client.delete(f"/comments/{comment_id}", headers=bob_headers)

        assert response.status_code == 403
        assert len(client.get(f"/comments/post/{post_id}", headers=alice_headers).json()["comments"]) == 1

    def test_post_author_cannot_delete_others_comment(self, client, alice, bob, make_post, make_comment):
        _, alice_headers = alice
        _, bob_headers = bob
        comment_id = make_comment(bob_headers, make_post(alice_headers))

        assert client.delete(f"/comments/{comment_id}", headers=alice_headers).status_code == 403

    def test_comment_vanishing_after_check_is_404(self, client, alice, make_post, make_comment, monkeypatch):
        _, headers = alice
        comment_id = make_comment(headers, make_post(headers))

        original = CommentService.get_author_id

        async def check_then_delete(cid):
            author = await original(cid)
            await CommentService.delete_comment(cid)
            return author

        monkeypatch.setattr(CommentService, "get_author_id", check_then_delete)

        response = client.delete(f"/comments/{comment_id}", headers=headers)

        assert response.status_code == 404
        assert response.json() == {"message": "Comment not found"}

    def test_store_failure_is_500(self, client, alice, make_post, make_comment, monkeypatch):
        _, headers = alice
        comment_id = make_comment(headers, make_post(headers))
        monkeypatch.setattr(CommentService, "delete_comment", _boom)

        response = client.delete(f"/comments/{comment_id}", headers=headers)

        assert response.status_code == 500
