from taskmate.models.user import User


def test_register_inserts_once(client, app):
    body = {"email": "ana@example.com", "name": "Ana", "photo": "https://example.com/ana.png"}

    r = client.post("/users", json=body)
    assert r.status_code == 200
    first = r.json()
    assert first["acknowledged"] is True
    assert len(first["insertedId"]) == 24

    r = client.post("/users", json=body)
    assert r.status_code == 200
    assert r.json() == {"message": "User already exists", "insertedId": None}

    db = app.state.session_factory()
    try:
        users = db.query(User).filter(User.email == "ana@example.com").all()
        assert len(users) == 1
        assert users[0].id == first["insertedId"]
        assert users[0].profile == {"name": "Ana", "photo": "https://example.com/ana.png"}
    finally:
        db.close()


def test_email_is_case_sensitive(client):
    assert client.post("/users", json={"email": "ana@example.com"}).json()["insertedId"]
    assert client.post("/users", json={"email": "Ana@example.com"}).json()["insertedId"]


def test_register_requires_email(client):
    r = client.post("/users", json={"name": "Ana"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request data"
