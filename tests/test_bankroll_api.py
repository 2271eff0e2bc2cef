def test_deposit_and_withdraw(client, auth_headers):
    resp = client.post(
        "/api/bankroll",
        json={"amount": 250, "type": "DEPOSIT", "notes": "Reload"},
        headers=auth_headers,
    )
    assert resp.status_code == 201
    assert resp.json()["amount"] == 250.0
    assert resp.json()["notes"] == "Reload"

    resp = client.post(
        "/api/bankroll", json={"amount": 50, "type": "WITHDRAWAL"}, headers=auth_headers
    )
    assert resp.status_code == 201
    assert resp.json()["amount"] == -50.0

    body = client.get("/api/bankroll", headers=auth_headers).json()
    assert body["current_balance"] == 1200.0
    assert body["starting_bankroll"] == 1000.0
    assert body["pending_exposure"] == 0.0
    assert body["pagination"]["total"] == 2


def test_overdraw_is_rejected_with_details(client, auth_headers):
    resp = client.post(
        "/api/bankroll", json={"amount": 5000, "type": "WITHDRAWAL"}, headers=auth_headers
    )

    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "Insufficient balance for withdrawal"
    assert body["details"]["current_balance"] == 1000.0


def test_only_deposits_and_withdrawals_are_manual(client, auth_headers):
    resp = client.post("/api/bankroll", json={"amount": 10, "type": "WIN"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation error"


def test_amount_must_be_positive(client, auth_headers):
    resp = client.post(
        "/api/bankroll", json={"amount": 0, "type": "DEPOSIT"}, headers=auth_headers
    )
    assert resp.status_code == 400


def test_pending_exposure_counts_open_bets(client, auth_headers, create_pick):
    create_pick(stake=40)
    settled = create_pick(stake=60)
    client.put(f"/api/picks/{settled['id']}", json={"status": "PUSH"}, headers=auth_headers)

    body = client.get("/api/bankroll", headers=auth_headers).json()
    assert body["pending_exposure"] == 40.0
    assert body["current_balance"] == 960.0


def test_history_is_newest_first_and_paged(client, auth_headers):
    for amount in (10, 20, 30):
        client.post(
            "/api/bankroll", json={"amount": amount, "type": "DEPOSIT"}, headers=auth_headers
        )

    body = client.get("/api/bankroll", params={"limit": 2}, headers=auth_headers).json()
    assert [t["amount"] for t in body["transactions"]] == [30.0, 20.0]
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}


def test_deposit_requires_a_session(client):
    resp = client.post("/api/bankroll", json={"amount": 10, "type": "DEPOSIT"})
    assert resp.status_code == 401


def test_signed_out_bankroll_is_demo(client):
    body = client.get("/api/bankroll").json()
    assert body["starting_bankroll"] == 1000.0
    assert body["pagination"]["limit"] == 50
    assert body["pagination"]["total"] == 18
