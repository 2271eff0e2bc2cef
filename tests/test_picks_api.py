import pytest
from fastapi.testclient import TestClient

from api.main import create_app


def _balance(client, headers):
    return client.get("/api/bankroll", headers=headers).json()["current_balance"]


def test_create_pick_derives_potential_win(client, create_pick):
    pick = create_pick(odds=150, stake=100)

    assert pick["potential_win"] == 150.0
    assert pick["status"] == "PENDING"
    assert pick["settled_at"] is None
    assert pick["game_date"].startswith("2024-09-08T20:20:00")


def test_negative_odds_potential_win(create_pick):
    assert create_pick(odds=-110, stake=100)["potential_win"] == 90.91


def test_create_pick_deducts_stake(client, auth_headers, create_pick):
    create_pick(stake=100)
    assert _balance(client, auth_headers) == 900.0


@pytest.mark.parametrize("odds", [0, 50, -99, 1500])
def test_invalid_odds_are_rejected(client, auth_headers, odds):
    resp = client.post(
        "/api/picks",
        json={
            "sport": "NFL",
            "bet_type": "SPREAD",
            "description": "Bad line",
            "odds": odds,
            "stake": 10,
            "game_date": "2024-09-08T20:20:00Z",
        },
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation error"


def test_unknown_sport_is_rejected(client, auth_headers):
    resp = client.post(
        "/api/picks",
        json={
            "sport": "CRICKET",
            "bet_type": "SPREAD",
            "description": "x",
            "odds": -110,
            "stake": 10,
            "game_date": "2024-09-08T20:20:00Z",
        },
        headers=auth_headers,
    )
    assert resp.status_code == 400


def test_list_picks_filters_and_paginates(client, auth_headers, create_pick):
    for i in range(3):
        create_pick(description=f"NFL {i}")
    create_pick(sport="NBA", description="Lakers -4")

    resp = client.get("/api/picks", params={"sport": "NFL", "limit": 2}, headers=auth_headers)
    body = resp.json()

    assert resp.status_code == 200
    assert len(body["picks"]) == 2
    assert body["pagination"] == {"page": 1, "limit": 2, "total": 3, "pages": 2}
    assert body["picks"][0]["description"] == "NFL 2"


def test_picks_are_private_to_their_owner(client, create_pick, login):
    pick = create_pick()
    other = login("mallory@example.com")

    assert client.get(f"/api/picks/{pick['id']}", headers=other).status_code == 404
    resp = client.put(f"/api/picks/{pick['id']}", json={"status": "WON"}, headers=other)
    assert resp.status_code == 404
    assert client.get("/api/picks", headers=other).json()["pagination"]["total"] == 0


def test_settle_pick_won(client, auth_headers, create_pick):
    pick = create_pick(odds=-110, stake=100)

    resp = client.put(f"/api/picks/{pick['id']}", json={"status": "WON"}, headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json()["status"] == "WON"
    assert resp.json()["settled_at"] is not None
    assert _balance(client, auth_headers) == 1090.91

    entries = client.get("/api/bankroll", headers=auth_headers).json()["transactions"]
    assert len(entries) == 1
    assert entries[0]["type"] == "WIN"
    assert entries[0]["pick"]["description"] == "Chiefs -3.5"


def test_double_settlement_is_rejected(client, auth_headers, create_pick):
    pick = create_pick()
    url = f"/api/picks/{pick['id']}"
    client.put(url, json={"status": "LOST"}, headers=auth_headers)

    assert client.put(url, json={"status": "LOST"}, headers=auth_headers).status_code == 200
    resp = client.put(url, json={"status": "WON"}, headers=auth_headers)
    assert resp.status_code == 400
    assert _balance(client, auth_headers) == 900.0


def test_edit_pending_pick_recomputes_potential_win(client, auth_headers, create_pick):
    pick = create_pick(odds=-110, stake=100)

    resp = client.put(
        f"/api/picks/{pick['id']}",
        json={"odds": 200, "stake": 40, "description": "Chiefs ML"},
        headers=auth_headers,
    )

    body = resp.json()
    assert body["potential_win"] == 80.0
    assert body["description"] == "Chiefs ML"
    assert _balance(client, auth_headers) == 960.0


def test_delete_pick_removes_ledger_entry(client, auth_headers, create_pick):
    pick = create_pick()

    resp = client.delete(f"/api/picks/{pick['id']}", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == {"message": "Pick deleted successfully"}
    assert client.get(f"/api/picks/{pick['id']}", headers=auth_headers).status_code == 404
    assert _balance(client, auth_headers) == 1000.0


@pytest.mark.parametrize(
    "method,path",
    [
        ("post", "/api/picks"),
        ("put", "/api/picks/anything"),
        ("delete", "/api/picks/anything"),
    ],
)
def test_mutations_require_a_session(client, method, path):
    resp = client.request(method.upper(), path, json={})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Unauthorized"


def test_signed_out_reads_return_demo_picks(client):
    resp = client.get("/api/picks")
    assert resp.status_code == 200
    assert resp.json()["pagination"]["total"] == 15
    assert client.get("/api/picks/demo-pick-1").json()["description"] == "Chiefs -3.5"


def test_signed_out_reads_require_demo_mode(settings):
    settings.demo_mode = False
    with TestClient(create_app(settings)) as c:
        assert c.get("/api/picks").status_code == 401


def test_malformed_body_without_session_is_unauthorized(client):
    resp = client.post(
        "/api/picks", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 401
    assert resp.json()["error"] == "Unauthorized"


def test_malformed_body_with_session_is_a_validation_error(client, auth_headers):
    resp = client.post(
        "/api/picks",
        content="{not json",
        headers={**auth_headers, "Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation error"


def test_malformed_signup_stays_a_validation_error(client):
    resp = client.post(
        "/api/auth/signup", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
