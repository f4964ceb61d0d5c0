# tests/test_auth.py
from app.auth.models import User, UserRole


def test_health(anonymous):
    r = anonymous.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "success"


def test_login_returns_profile(make_user, anonymous):
    user = make_user("carol@example.com", role=UserRole.DESIGN, name="Carol")
    r = anonymous.post("/auth/login", json={"email": user.email, "password": "s3cret-pass"})
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "success"
    assert body["data"] == {"id": user.id, "name": "Carol", "role": "diseno"}


def test_login_bad_password_and_unknown_email_look_the_same(make_user, anonymous):
    make_user("dave@example.com")
    r1 = anonymous.post("/auth/login", json={"email": "dave@example.com", "password": "nope"})
    r2 = anonymous.post("/auth/login", json={"email": "ghost@example.com", "password": "nope"})
    assert r1.status_code == r2.status_code == 401
    assert r1.json() == r2.json()
    assert r1.json()["status"] == "error"
    assert "data" not in r1.json()


def test_login_missing_fields_is_400(anonymous):
    r = anonymous.post("/auth/login", json={"email": "x@example.com"})
    assert r.status_code == 400
    assert r.json()["status"] == "error"


def test_session_check_and_logout(alice):
    user, client = alice
    r = client.get("/auth/session")
    assert r.status_code == 200
    assert r.json()["data"]["email"] == user.email

    r = client.post("/auth/logout")
    assert r.status_code == 200
    assert r.json() == {"status": "success", "message": "Session closed."}

    r = client.get("/auth/session")
    assert r.status_code == 401


def test_session_without_login_is_401(anonymous):
    r = anonymous.get("/auth/session")
    assert r.status_code == 401
    assert r.json()["status"] == "error"


def test_session_for_deleted_user_is_cleared(alice, db):
    user, client = alice
    db.query(User).filter(User.id == user.id).delete()
    db.commit()

    assert client.get("/auth/session").status_code == 401
    # the cookie was dropped, ticket endpoints now see no session either
    assert client.get("/tickets").status_code == 401


def test_change_password(alice, login):
    user, client = alice
    r = client.post("/auth/password", json={"current_password": "wrong", "new_password": "n3w"})
    assert r.status_code == 401

    r = client.post("/auth/password", json={"current_password": "s3cret-pass", "new_password": "n3w"})
    assert r.status_code == 200

    login(user.email, "n3w")


def test_update_profile(alice):
    _, client = alice
    r = client.patch("/auth/profile", json={"name": "Alice Liddell", "photo_url": "/img/a.png"})
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Alice Liddell"
    assert client.get("/auth/session").json()["data"]["photo_url"] == "/img/a.png"


def test_unknown_route_and_method_use_envelope(alice):
    _, client = alice
    r = client.get("/nowhere")
    assert r.status_code == 404
    assert r.json()["status"] == "error"

    r = client.delete("/tickets/1")
    assert r.status_code == 405
    assert r.json() == {"status": "error", "message": "Unrecognized action or method."}


def test_store_failure_on_login_and_session_uses_envelope(alice, anonymous):
    from app.core.database import engine

    user, client = alice
    User.__table__.drop(bind=engine)

    for r in (
        client.get("/auth/session"),
        anonymous.post("/auth/login", json={"email": user.email, "password": "s3cret-pass"}),
    ):
        assert r.status_code == 500
        assert r.json()["status"] == "error"
        assert "data" not in r.json()
