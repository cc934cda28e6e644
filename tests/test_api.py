from datetime import timedelta

from app.core.security import utcnow
from app.modules.auth.models.session import UserSession
from app.modules.posts.reactions.models.reaction import Reaction

from conftest import PASSWORD, api, login_client


def _register(client, email="u@test.com", username="alice", password=PASSWORD):
    return client.post(api("/auth/register"), json={"email": email, "username": username, "password": password})


def test_end_to_end_post_and_like(client):
    assert _register(client, "u@test.com", "alice", "secret1").status_code == 201
    login_client(client, "u@test.com", "secret1")

    created = client.post(api("/posts"), json={"title": "T", "content": "C", "categories": ["news"]})
    assert created.status_code == 201
    post_id = created.json()["id"]

    feed = client.get(api("/feed")).json()
    assert len(feed["posts"]) == 1
    post = feed["posts"][0]
    assert (post["likes"], post["dislikes"], post["categories"]) == (0, 0, ["news"])

    reacted = client.post(api("/reactions"), json={"target_type": "post", "target_id": post_id, "value": 1})
    assert reacted.status_code == 200

    feed = client.get(api("/feed")).json()
    assert feed["posts"][0]["likes"] == 1


def test_register_duplicate_email_reports_conflict(client):
    _register(client, "a@b.com", "first")

    response = _register(client, "A@B.com ", "second")

    assert response.status_code == 409
    assert response.json()["code"] == "email_taken"


def test_register_short_password_is_bad_request(client):
    response = _register(client, password="123")

    assert response.status_code == 400
    assert response.json()["code"] == "validation_error"


def test_login_sets_session_cookie(client):
    _register(client)

    response = login_client(client, "u@test.com")

    cookie = response.headers["set-cookie"].lower()
    assert cookie.startswith("session_id=")
    assert "httponly" in cookie
    assert "samesite=lax" in cookie
    assert "expires=" in cookie
    assert "path=/" in cookie
    assert response.json()["user_id"] > 0


def test_login_failures_are_indistinguishable(client):
    _register(client)

    wrong_password = client.post(api("/auth/login"), json={"email": "u@test.com", "password": "bad-pass"})
    unknown_email = client.post(api("/auth/login"), json={"email": "x@test.com", "password": PASSWORD})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert "session_id" not in client.cookies


def test_mutations_require_session(client):
    assert client.post(api("/posts"), json={"title": "T", "content": "C", "categories": ["x"]}).status_code == 401
    assert client.post(api("/posts/1/comments"), json={"content": "hi"}).status_code == 401
    assert client.post(api("/reactions"), json={"target_type": "post", "target_id": 1, "value": 1}).status_code == 401


def test_me_reports_viewer(client):
    assert client.get(api("/auth/me")).json() == {
        "authenticated": False, "user_id": None, "username": None, "initial": None,
    }
    _register(client)
    login_client(client, "u@test.com")

    me = client.get(api("/auth/me")).json()

    assert me["authenticated"] is True
    assert me["username"] == "alice"
    assert me["initial"] == "A"


def test_logout_drops_session(client, db):
    _register(client)
    login_client(client, "u@test.com")

    response = client.post(api("/auth/logout"))

    assert response.status_code == 200
    assert db.query(UserSession).count() == 0
    assert client.get(api("/auth/me")).json()["authenticated"] is False
    # Second logout without a session is still fine
    assert client.post(api("/auth/logout")).status_code == 200


def test_expired_session_is_anonymous(client, db):
    _register(client)
    login_client(client, "u@test.com")
    db.query(UserSession).update({UserSession.expires_at: utcnow() - timedelta(seconds=1)})
    db.commit()

    assert client.get(api("/auth/me")).json()["authenticated"] is False
    response = client.post(api("/posts"), json={"title": "T", "content": "C", "categories": ["x"]})
    assert response.status_code == 401
    # Expired rows are not swept on read
    assert db.query(UserSession).count() == 1


def test_unknown_cookie_is_anonymous(client):
    client.cookies.set("session_id", "forged-token")

    feed = client.get(api("/feed?mine&liked"))

    assert feed.status_code == 200
    assert feed.json()["viewer"]["authenticated"] is False


def test_feed_filters_over_http(client):
    _register(client, "a@test.com", "alice")
    _register(client, "b@test.com", "bob")
    login_client(client, "b@test.com")
    client.post(api("/posts"), json={"title": "B1", "content": "c", "categories": ["x"]})
    login_client(client, "a@test.com")
    client.post(api("/posts"), json={"title": "A1", "content": "c", "categories": ["x"]})
    client.post(api("/posts"), json={"title": "A2", "content": "c", "categories": ["y"], "new_category": "x"})
    client.post(api("/posts"), json={"title": "A3", "content": "c", "new_category": "z"})

    mine_x = client.get(api("/feed"), params={"cat": "x", "mine": ""}).json()
    everything = client.get(api("/feed")).json()

    assert [p["title"] for p in mine_x["posts"]] == ["A2", "A1"]
    assert mine_x["filters"] == {"category": "x", "mine": True, "liked": False}
    assert len(everything["posts"]) == 4
    assert [c["name"] for c in client.get(api("/categories")).json()] == ["x", "y", "z"]


def test_create_post_without_categories_is_bad_request(client):
    _register(client)
    login_client(client, "u@test.com")

    response = client.post(api("/posts"), json={"title": "T", "content": "C", "categories": []})

    assert response.status_code == 400


def test_comment_and_read_post(client):
    _register(client)
    login_client(client, "u@test.com")
    post_id = client.post(api("/posts"), json={"title": "T", "content": "C", "categories": ["x"]}).json()["id"]

    comment = client.post(api(f"/posts/{post_id}/comments"), json={"content": "hello"})
    missing = client.post(api("/posts/999/comments"), json={"content": "hello"})

    assert comment.status_code == 201
    assert missing.status_code == 404
    post = client.get(api(f"/posts/{post_id}")).json()
    assert [c["content"] for c in post["comments"]] == ["hello"]
    assert post["comments"][0]["author"] == "alice"
    assert client.get(api("/posts/999")).status_code == 404


def test_react_twice_over_http(client, db):
    _register(client)
    login_client(client, "u@test.com")
    post_id = client.post(api("/posts"), json={"title": "T", "content": "C", "categories": ["x"]}).json()["id"]

    client.post(api("/reactions"), json={"target_type": "post", "target_id": post_id, "value": 1})
    client.post(api("/reactions"), json={"target_type": "post", "target_id": post_id, "value": -1})

    assert [r.value for r in db.query(Reaction).all()] == [-1]
    post = client.get(api(f"/posts/{post_id}")).json()
    assert (post["likes"], post["dislikes"]) == (0, 1)


def test_react_with_bad_value_is_bad_request(client):
    _register(client)
    login_client(client, "u@test.com")

    response = client.post(api("/reactions"), json={"target_type": "post", "target_id": 1, "value": 5})

    assert response.status_code == 400


def test_forgot_password_stub(client):
    known = client.post(api("/auth/forgot"), json={"email": "u@test.com"})
    unknown = client.post(api("/auth/forgot"), json={"email": "nobody@test.com"})

    assert known.status_code == unknown.status_code == 202
    assert known.json() == unknown.json()
