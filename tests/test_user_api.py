def test_get_profile(client, auth_headers):
    body = client.get("/api/user", headers=auth_headers).json()
    assert body["name"] == "Alice"
    assert body["starting_bankroll"] == 1000.0


def test_update_profile_moves_balance_baseline(client, auth_headers):
    resp = client.put(
        "/api/user", json={"name": "Alice B", "starting_bankroll": 500}, headers=auth_headers
    )

    assert resp.status_code == 200
    assert resp.json()["name"] == "Alice B"
    assert client.get("/api/bankroll", headers=auth_headers).json()["current_balance"] == 500.0


def test_negative_starting_bankroll_is_rejected(client, auth_headers):
    resp = client.put("/api/user", json={"starting_bankroll": -1}, headers=auth_headers)
    assert resp.status_code == 400


def test_delete_account_cascades(client, auth_headers, create_pick):
    a = create_pick()
    b = create_pick()
    client.post(
        "/api/parlays", json={"pick_ids": [a["id"], b["id"]], "stake": 5}, headers=auth_headers
    )

    resp = client.delete("/api/user", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Account deleted successfully"}
    # The token now points at a deleted user
    assert client.get("/api/user", headers=auth_headers).status_code == 401


def test_profile_mutations_require_a_session(client):
    assert client.put("/api/user", json={"name": "x"}).status_code == 401
    assert client.delete("/api/user").status_code == 401


def test_signed_out_profile_is_demo_user(client):
    body = client.get("/api/user").json()
    assert body["id"] == "demo-user"
    assert body["email"] == "demo@bettracker.com"
