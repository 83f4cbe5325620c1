from __future__ import annotations

import asyncio

CAT_FIELDS = "id cat_name weight birthdate filename location { type coordinates } owner { id user_name email }"


def _gql(client, query, variables=None, headers=None):
    resp = client.post("/graphql", json={"query": query, "variables": variables or {}}, headers=headers or {})
    return resp.json()


def _error_code(result) -> str:
    return result["errors"][0]["extensions"]["code"]


def test_register_login_and_check_token(client):
    registered = _gql(
        client,
        "mutation($user: UserInput!) { register(user: $user) { message user { id user_name email } } }",
        {"user": {"user_name": "alice", "email": "alice@example.com", "password": "pw-1"}},
    )
    assert registered["data"]["register"]["message"] == "User created"
    user_id = registered["data"]["register"]["user"]["id"]

    login = _gql(
        client,
        "mutation($c: Credentials!) { login(credentials: $c) { message token user { id } } }",
        {"c": {"email": "alice@example.com", "password": "pw-1"}},
    )["data"]["login"]
    assert login["user"]["id"] == user_id

    checked = _gql(
        client,
        "{ checkToken { message user { email } } }",
        headers={"Authorization": f"Bearer {login['token']}"},
    )
    assert checked["data"]["checkToken"]["user"]["email"] == "alice@example.com"


def test_check_token_without_header_is_not_authorized(client):
    result = _gql(client, "{ checkToken { message } }")

    assert result["data"]["checkToken"] is None
    assert _error_code(result) == "NOT_AUTHORIZED"


def test_wrong_password_is_not_authorized(client, make_user):
    make_user("alice")

    result = _gql(
        client,
        "mutation { login(credentials: {email: \"alice@example.com\", password: \"nope\"}) { token } }",
    )

    assert _error_code(result) == "NOT_AUTHORIZED"


def test_invalid_registration_is_bad_user_input(client):
    result = _gql(
        client,
        "mutation { register(user: {user_name: \"x\", email: \"nope\", password: \"pw\"}) { message } }",
    )

    assert _error_code(result) == "BAD_USER_INPUT"
    assert "email" in result["errors"][0]["message"]


def test_user_type_does_not_expose_password(client, make_user):
    make_user("alice")

    assert "errors" in _gql(client, "{ users { id password } }")
    assert "errors" in _gql(client, "{ users { id role } }")
    users = _gql(client, "{ users { id user_name email } }")["data"]["users"]
    assert [u["user_name"] for u in users] == ["alice"]


def test_user_by_id_not_found(client):
    result = _gql(client, "query($id: ID!) { userById(id: $id) { id } }", {"id": "a" * 24})

    assert result["data"]["userById"] is None
    assert _error_code(result) == "NOT_FOUND"


def test_create_cat_and_query_it(client, make_user, auth_header):
    alice = make_user("alice")

    created = _gql(
        client,
        f"""mutation($loc: LocationInput) {{
              createCat(cat_name: "Tom", weight: 3.5, birthdate: "2019-07-01", filename: "tom.jpg", location: $loc) {{
                {CAT_FIELDS}
              }}
            }}""",
        {"loc": {"type": "Point", "coordinates": [24.94, 60.17]}},
        headers=auth_header(alice),
    )["data"]["createCat"]

    assert created["owner"]["id"] == alice.id
    assert created["location"]["coordinates"] == [24.94, 60.17]

    by_id = _gql(client, f"query($id: ID!) {{ catById(id: $id) {{ {CAT_FIELDS} }} }}", {"id": created["id"]})
    assert by_id["data"]["catById"] == created

    by_owner = _gql(client, "query($o: ID!) { catsByOwner(ownerId: $o) { id } }", {"o": alice.id})
    assert by_owner["data"]["catsByOwner"] == [{"id": created["id"]}]

    in_area = _gql(
        client,
        "{ catsByArea(topRight: {lat: 60.5, lng: 25.5}, bottomLeft: {lat: 60.0, lng: 24.5}) { id } }",
    )
    assert in_area["data"]["catsByArea"] == [{"id": created["id"]}]

    elsewhere = _gql(
        client,
        "{ catsByArea(topRight: {lat: 10, lng: 10}, bottomLeft: {lat: 0, lng: 0}) { id } }",
    )
    assert elsewhere["data"]["catsByArea"] == []


def test_create_cat_requires_token(client):
    result = _gql(client, 'mutation { createCat(cat_name: "Tom", weight: 3, birthdate: "2019-07-01") { id } }')

    assert _error_code(result) == "NOT_AUTHORIZED"


def test_update_and_delete_cat_policy(client, make_user, make_cat, admin, auth_header):
    alice = make_user("alice")
    bob = make_user("bob")
    cat = make_cat(alice)
    update = "mutation($id: ID!, $name: String) { updateCat(id: $id, cat_name: $name) { id cat_name } }"
    delete = "mutation($id: ID!) { deleteCat(id: $id) { id } }"

    denied = _gql(client, update, {"id": cat.id, "name": "Stolen"}, headers=auth_header(bob))
    assert _error_code(denied) == "NOT_AUTHORIZED"
    assert _error_code(_gql(client, delete, {"id": cat.id}, headers=auth_header(bob))) == "NOT_AUTHORIZED"

    owned = _gql(client, update, {"id": cat.id, "name": "Tommy"}, headers=auth_header(alice))
    assert owned["data"]["updateCat"]["cat_name"] == "Tommy"

    by_admin = _gql(client, delete, {"id": cat.id}, headers=auth_header(admin))
    assert by_admin["data"]["deleteCat"]["id"] == cat.id

    gone = _gql(client, delete, {"id": cat.id}, headers=auth_header(admin))
    assert _error_code(gone) == "NOT_FOUND"


def test_admin_cat_mutations(client, make_user, make_cat, admin, auth_header):
    alice = make_user("alice")
    bob = make_user("bob")
    cat = make_cat(alice)
    move = "mutation($id: ID!, $owner: ID) { updateCatAsAdmin(id: $id, owner: $owner) { owner { id } } }"

    assert _error_code(_gql(client, move, {"id": cat.id, "owner": bob.id}, headers=auth_header(alice))) == "NOT_AUTHORIZED"

    moved = _gql(client, move, {"id": cat.id, "owner": bob.id}, headers=auth_header(admin))
    assert moved["data"]["updateCatAsAdmin"]["owner"]["id"] == bob.id

    removed = _gql(
        client,
        "mutation($id: ID!) { deleteCatAsAdmin(id: $id) { id } }",
        {"id": cat.id},
        headers=auth_header(admin),
    )
    assert removed["data"]["deleteCatAsAdmin"]["id"] == cat.id


def test_user_mutations(client, repo, make_user, admin, auth_header):
    alice = make_user("alice")
    bob = make_user("bob")

    updated = _gql(
        client,
        'mutation { updateUser(user: {user_name: "Alice"}) { message user { user_name } } }',
        headers=auth_header(alice),
    )
    assert updated["data"]["updateUser"]["user"]["user_name"] == "Alice"

    denied = _gql(
        client,
        "mutation($id: ID!) { deleteUserAsAdmin(id: $id) { message } }",
        {"id": alice.id},
        headers=auth_header(bob),
    )
    assert _error_code(denied) == "NOT_AUTHORIZED"

    renamed = _gql(
        client,
        'mutation($id: ID!) { updateUserAsAdmin(id: $id, user: {user_name: "Robert"}) { user { user_name } } }',
        {"id": bob.id},
        headers=auth_header(admin),
    )
    assert renamed["data"]["updateUserAsAdmin"]["user"]["user_name"] == "Robert"

    removed = _gql(
        client,
        "mutation($id: ID!) { deleteUserAsAdmin(id: $id) { message user { id } } }",
        {"id": bob.id},
        headers=auth_header(admin),
    )
    assert removed["data"]["deleteUserAsAdmin"] == {"message": "User deleted", "user": {"id": bob.id}}

    own = _gql(client, "mutation { deleteUser { message } }", headers=auth_header(alice))
    assert own["data"]["deleteUser"]["message"] == "User deleted"
    assert repo.get_user(alice.id) is None
    assert repo.get_user(admin.id) is not None


def test_resolvers_run_off_the_event_loop(client, make_user, monkeypatch):
    make_user("alice")
    service = client.app.state.user_service
    list_users = service.list_users
    seen = {}

    def recording_list_users():
        try:
            asyncio.get_running_loop()
            seen["on_loop"] = True
        except RuntimeError:
            seen["on_loop"] = False
        return list_users()

    monkeypatch.setattr(service, "list_users", recording_list_users)

    result = _gql(client, "{ users { id } }")

    assert len(result["data"]["users"]) == 1
    assert seen == {"on_loop": False}
