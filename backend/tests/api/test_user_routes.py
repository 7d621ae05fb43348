"""User routes - registration, uniqueness and listing over HTTP."""


async def test_create_user_returns_user_with_id(client):
    res = await client.post("/api/exercise/new-user", json={"username": "alice"})
    assert res.status_code == 200
    body = res.json()
    assert body["username"] == "alice"
    assert body["id"]


async def test_create_user_accepts_form_body(client):
    res = await client.post("/api/exercise/new-user", data={"username": "bob"})
    assert res.status_code == 200
    assert res.json()["username"] == "bob"


async def test_user_ids_are_unique_and_stable(client, create_user):
    alice = await create_user("alice")
    bob = await create_user("bob")
    assert alice["id"] != bob["id"]

    res = await client.get("/api/exercise/users")
    listed = {u["username"]: u["id"] for u in res.json()}
    assert listed == {"alice": alice["id"], "bob": bob["id"]}


async def test_duplicate_username_is_400_with_short_message(client, create_user):
    await create_user("alice")
    res = await client.post("/api/exercise/new-user", json={"username": "alice"})
    assert res.status_code == 400
    assert res.headers["content-type"].startswith("text/plain")
    assert "username" in res.text
    for internal in ("[SQL", "IntegrityError", "sqlite3", "Traceback", "{"):
        assert internal not in res.text


async def test_missing_username_is_400(client):
    res = await client.post("/api/exercise/new-user", json={})
    assert res.status_code == 400
    assert res.text == "username is required"


async def test_list_users_returns_id_and_username_only(client, create_user):
    await create_user("alice")
    res = await client.get("/api/exercise/users")
    assert res.status_code == 200
    assert [set(u) for u in res.json()] == [{"id", "username"}]


async def test_list_users_empty(client):
    res = await client.get("/api/exercise/users")
    assert res.json() == []
