"""
Tests for the HTTP endpoints, role checks and error payloads
"""

from sqlalchemy.exc import OperationalError

from pokernight.services.repositories import TableRepo
from pokernight.services.user_service import UserService


def _create_group(client, headers, name="Thursday Night"):
    r = client.post("/api/groups", json={"name": name, "description": "weekly"}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def _create_table(client, headers, group_id, name="Game #1"):
    r = client.post(
        "/api/tables",
        json={"name": name, "small_blind": 1, "big_blind": 2, "group_id": group_id},
        headers=headers,
    )
    assert r.status_code == 201, r.text
    return r.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_login_and_me(client, db_session):
    UserService.register(db_session, "doron", "pocket-aces", "editor")

    r = client.post("/api/auth/login", json={"username": "doron", "password": "pocket-aces"})
    assert r.status_code == 200
    token = r.json()["access_token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["role"] == "editor"


def test_login_wrong_password(client, db_session):
    UserService.register(db_session, "doron", "pocket-aces", "editor")
    r = client.post("/api/auth/login", json={"username": "doron", "password": "nope"})
    assert r.status_code == 401


def test_requires_token(client):
    assert client.get("/api/tables").status_code == 401


def test_only_admin_creates_tables(client, admin_headers, editor_headers):
    group = _create_group(client, admin_headers)
    r = client.post(
        "/api/tables",
        json={"name": "x", "small_blind": 1, "big_blind": 2, "group_id": group["id"]},
        headers=editor_headers,
    )
    assert r.status_code == 403


def test_viewer_cannot_mutate_ledger(client, admin_headers, viewer_headers):
    group = _create_group(client, admin_headers)
    table = _create_table(client, admin_headers, group["id"])

    r = client.post(f"/api/tables/{table['id']}/players", json={"name": "Ran", "chips": 100}, headers=viewer_headers)
    assert r.status_code == 403

    # Reads are fine
    assert client.get(f"/api/tables/{table['id']}/balance", headers=viewer_headers).status_code == 200


def test_session_flow_and_deactivation(client, admin_headers, editor_headers):
    group = _create_group(client, admin_headers)
    table = _create_table(client, admin_headers, group["id"])
    base = f"/api/tables/{table['id']}"

    r = client.post(f"{base}/players", json={"name": "Ran", "chips": 100}, headers=editor_headers)
    assert r.status_code == 201
    ran = r.json()
    assert ran["chips"] == 100 and ran["total_buy_in"] == 100
    assert [b["amount"] for b in ran["buy_ins"]] == [100]

    r = client.post(f"{base}/players/{ran['id']}/buyins", json={"amount": 50}, headers=editor_headers)
    assert r.json()["chips"] == 150

    r = client.put(f"{base}/status", headers=editor_headers)
    assert r.status_code == 409
    body = r.json()
    assert body["error"] == "conflict"
    assert body["details"]["failed_guards"] == ["players_active"]

    r = client.post(f"{base}/players/{ran['id']}/cashouts", json={"amount": 120}, headers=editor_headers)
    assert r.status_code == 200
    assert r.json()["active"] is False

    preview = client.get(f"{base}/deactivation-check", headers=editor_headers).json()
    assert preview["all_players_inactive"] is True
    assert preview["is_balance_matching"] is False
    assert preview["balance"] == {
        "total_buy_ins": 150,
        "accounted_for": 120,
        "difference": 30,
        "status": "missing",
    }

    r = client.put(f"{base}/status", headers=editor_headers)
    assert r.status_code == 409
    assert r.json()["details"]["difference"] == 30
    assert r.json()["details"]["direction"] == "missing"

    # Correct the recorded cash-out, it replaces the first one
    r = client.post(f"{base}/players/{ran['id']}/cashouts", json={"amount": 150}, headers=editor_headers)
    assert [c["amount"] for c in r.json()["cash_outs"]] == [150]

    bal = client.get(f"{base}/players/{ran['id']}/balance", headers=editor_headers).json()
    assert bal["balance"] == 0

    r = client.put(f"{base}/status", headers=editor_headers)
    assert r.status_code == 200
    assert r.json()["is_active"] is False


def test_validation_errors_are_structured(client, admin_headers, editor_headers):
    group = _create_group(client, admin_headers)
    table = _create_table(client, admin_headers, group["id"])
    base = f"/api/tables/{table['id']}"
    ran = client.post(f"{base}/players", json={"name": "Ran", "chips": 10}, headers=editor_headers).json()

    r = client.post(f"{base}/players/{ran['id']}/buyins", json={"amount": 0}, headers=editor_headers)
    assert r.status_code == 400
    assert r.json()["error"] == "validation_error"
    assert r.json()["details"] == {"amount": 0}

    r = client.post(f"{base}/players", json={"name": "RAN", "chips": 5}, headers=editor_headers)
    assert r.status_code == 400

    r = client.post(f"{base}/players/{ran['id']}/cashouts", json={"amount": -5}, headers=editor_headers)
    assert r.status_code == 400


def test_unknown_table_is_404(client, editor_headers):
    r = client.get("/api/tables/does-not-exist", headers=editor_headers)
    assert r.status_code == 404
    assert r.json()["error"] == "not_found"


def test_group_delete_conflict(client, admin_headers):
    group = _create_group(client, admin_headers)
    _create_table(client, admin_headers, group["id"])

    r = client.delete(f"/api/groups/{group['id']}", headers=admin_headers)
    assert r.status_code == 409


def test_food_candidates_and_assignment(client, admin_headers, editor_headers):
    group = _create_group(client, admin_headers)
    table = _create_table(client, admin_headers, group["id"])
    base = f"/api/tables/{table['id']}"
    for name in ("Bar", "Ran"):
        client.post(f"{base}/players", json={"name": name, "chips": 20}, headers=editor_headers)

    ranked = client.get(f"{base}/food-candidates", headers=editor_headers).json()
    assert [c["name"] for c in ranked] == ["Bar", "Ran"]
    assert not any(c["is_eligible"] for c in ranked)

    r = client.put(f"{base}/food", json={"player_id": ranked[1]["player_id"]}, headers=editor_headers)
    assert r.status_code == 200
    assert r.json()["food"] == ranked[1]["player_id"]

    r = client.put(f"{base}/food", json={"player_id": "someone-else"}, headers=editor_headers)
    assert r.status_code == 400


def test_public_share_and_statistics(client, admin_headers, editor_headers):
    group = _create_group(client, admin_headers)
    table = _create_table(client, admin_headers, group["id"])
    base = f"/api/tables/{table['id']}"
    p = client.post(f"{base}/players", json={"name": "Doron", "chips": 40}, headers=editor_headers).json()
    client.post(f"{base}/players/{p['id']}/cashouts", json={"amount": 40}, headers=editor_headers)
    client.put(f"{base}/status", headers=editor_headers)

    shared = client.get(f"/api/share/{table['id']}")
    assert shared.status_code == 200
    assert shared.json()["players"][0]["name"] == "Doron"

    assert client.get("/api/statistics/players").json() == ["Doron"]
    assert len(client.get("/api/public/tables").json()) == 1


def test_user_admin_endpoints(client, admin_headers, editor_headers):
    r = client.post("/api/users", json={"username": "bar", "password": "secret", "role": "viewer"}, headers=admin_headers)
    assert r.status_code == 201
    user_id = r.json()["id"]

    assert client.get("/api/users", headers=editor_headers).status_code == 403

    r = client.put(f"/api/users/{user_id}/role", json={"role": "editor"}, headers=admin_headers)
    assert r.json()["role"] == "editor"

    r = client.delete(f"/api/users/{user_id}", headers=admin_headers)
    assert r.status_code == 200
    usernames = [u["username"] for u in client.get("/api/users", headers=admin_headers).json()]
    assert "bar" not in usernames


def test_role_change_applies_to_existing_token(client, db_session, admin_headers, editor_headers):
    group = _create_group(client, admin_headers)
    table = _create_table(client, admin_headers, group["id"])
    editor = UserService.authenticate(db_session, "dealer", "secret-pass")

    UserService.update_role(db_session, editor.id, "viewer")

    r = client.post(f"/api/tables/{table['id']}/players", json={"name": "Ran"}, headers=editor_headers)
    assert r.status_code == 403


def test_database_failure_on_read_is_503(client, editor_headers, monkeypatch):
    def locked(db):
        raise OperationalError("SELECT poker_tables", {}, Exception("database is locked"))

    monkeypatch.setattr(TableRepo, "list_all", staticmethod(locked))

    r = client.get("/api/tables", headers=editor_headers)
    assert r.status_code == 503
    assert r.json()["error"] == "store_error"


def test_update_chips_endpoint(client, admin_headers, editor_headers, viewer_headers):
    group = _create_group(client, admin_headers)
    table = _create_table(client, admin_headers, group["id"])
    base = f"/api/tables/{table['id']}"
    p = client.post(f"{base}/players", json={"name": "Ran", "chips": 100}, headers=editor_headers).json()
    url = f"{base}/players/{p['id']}/chips"

    assert client.put(url, json={"chips": 80}, headers=viewer_headers).status_code == 403

    r = client.put(url, json={"chips": 80}, headers=editor_headers)
    assert r.status_code == 200
    assert (r.json()["chips"], r.json()["total_buy_in"]) == (80, 100)

    r = client.put(url, json={"chips": -1}, headers=editor_headers)
    assert r.status_code == 400
    assert r.json()["details"] == {"chips": -1}
