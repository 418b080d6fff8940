"""Tests for the /api blueprint.

Covers:
- Access control (Bearer token, login session, rejection)
- Each route's status code and JSON body
- Error mapping: NotFound -> 404, ValidationFailure -> 400,
  TransactionFailure -> 500
- Security headers
"""

from cardwall.extensions import db
from cardwall.models.card import Card


def _login(client, user_id):
    """Put a Flask-Login session on the test client."""
    with client.session_transaction() as sess:
        sess["_user_id"] = user_id
        sess["_fresh"] = True


# ─── Access control ───────────────────────────────────────────────

class TestApiAuth:

    def test_requires_auth(self, client, seed_data):
        resp = client.get(f"/api/cards/{seed_data['card_id']}")
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Unauthorized"}

    def test_rejects_wrong_token(self, client, seed_data):
        resp = client.get(
            f"/api/cards/{seed_data['card_id']}",
            headers={"Authorization": "Bearer nope"},
        )
        assert resp.status_code == 401
        assert resp.get_json() == {"error": "Invalid API key"}

    def test_accepts_token(self, client, auth_headers, seed_data):
        resp = client.get(f"/api/cards/{seed_data['card_id']}", headers=auth_headers)
        assert resp.status_code == 200

    def test_accepts_login_session(self, client, seed_data):
        _login(client, seed_data["user_id"])
        resp = client.get(f"/api/cards/{seed_data['card_id']}")
        assert resp.status_code == 200


# ─── Cards ────────────────────────────────────────────────────────

class TestCardRoutes:

    def test_create_card(self, client, auth_headers, seed_data):
        resp = client.post(
            f"/api/lists/{seed_data['list_id']}/cards",
            json={"text": "<b>new</b> card"},
            headers=auth_headers,
        )
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["text"] == "new card"
        assert body["link"] == f"/boards/{seed_data['board_id']}/cards/{body['id']}"

        listing = client.get(f"/api/lists/{seed_data['list_id']}/cards", headers=auth_headers)
        assert listing.get_json() == {
            "id": seed_data["list_id"],
            "cards": [seed_data["card_id"], seed_data["card2_id"], body["id"]],
        }

    def test_create_card_requires_text(self, client, auth_headers, seed_data):
        resp = client.post(
            f"/api/lists/{seed_data['list_id']}/cards", json={}, headers=auth_headers
        )
        assert resp.status_code == 400
        assert resp.get_json() == {
            "error": "Validation error",
            "fields": [{"field": "text", "message": "Text is required"}],
        }

    def test_create_card_unknown_list(self, client, auth_headers, seed_data):
        resp = client.post("/api/lists/missing/cards", json={"text": "x"}, headers=auth_headers)
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "List missing not found."}

    def test_get_card(self, client, auth_headers, seed_data):
        resp = client.get(f"/api/cards/{seed_data['card2_id']}", headers=auth_headers)
        body = resp.get_json()
        assert body["board_id"] == seed_data["board_id"]
        assert [c["id"] for c in body["comments"]] == [seed_data["comment2_id"]]

    def test_get_dropped_card(self, client, auth_headers, seed_data):
        resp = client.get(f"/api/cards/{seed_data['card3_id']}", headers=auth_headers)
        assert resp.status_code == 404

    def test_update_card(self, client, auth_headers, seed_data):
        resp = client.put(
            f"/api/cards/{seed_data['card_id']}",
            json={"text": "updated text", "ignored": True},
            headers=auth_headers,
        )
        assert resp.status_code == 200
        assert resp.get_json() == {"id": seed_data["card_id"], "text": "updated text"}

    def test_update_card_rejects_empty_text(self, client, auth_headers, seed_data):
        resp = client.put(
            f"/api/cards/{seed_data['card_id']}", json={"text": "  "}, headers=auth_headers
        )
        assert resp.status_code == 400
        assert db.session.get(Card, seed_data["card_id"]).text == "test card 1"

    def test_drop_card(self, client, auth_headers, seed_data):
        resp = client.delete(f"/api/cards/{seed_data['card_id']}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.get_json() == {"id": seed_data["card_id"]}

        resp = client.get(f"/api/cards/{seed_data['card_id']}", headers=auth_headers)
        assert resp.status_code == 404
        listing = client.get(f"/api/lists/{seed_data['list_id']}/cards", headers=auth_headers)
        assert listing.get_json()["cards"] == [seed_data["card2_id"]]


# ─── Move ─────────────────────────────────────────────────────────

class TestMoveRoute:

    def test_move_cards(self, client, auth_headers, move_data):
        payload = {
            "source_list": {"id": "1", "cards": ["1"]},
            "target_list": {"id": "2", "cards": ["3", "2"]},
        }
        resp = client.put("/api/cards/move", json=payload, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.get_json() == [
            {"id": "1", "cards": ["1"]},
            {"id": "2", "cards": ["3", "2"]},
        ]
        assert client.get("/api/lists/1/cards", headers=auth_headers).get_json()["cards"] == ["1"]
        assert client.get("/api/lists/2/cards", headers=auth_headers).get_json()["cards"] == ["3", "2"]

    def test_move_validation(self, client, auth_headers, move_data):
        resp = client.put(
            "/api/cards/move",
            json={
                "source_list": {"id": "1", "cards": ["1", "2"]},
                "target_list": {"id": "2", "cards": ["2", "3"]},
            },
            headers=auth_headers,
        )
        assert resp.status_code == 400
        assert resp.get_json()["fields"][0]["field"] == "target_list"

    def test_move_leaving_out_a_card(self, client, auth_headers, move_data):
        resp = client.put(
            "/api/cards/move",
            json={
                "source_list": {"id": "1", "cards": ["1"]},
                "target_list": {"id": "2", "cards": ["3"]},
            },
            headers=auth_headers,
        )
        assert resp.status_code == 400
        assert resp.get_json()["fields"] == [
            {"field": "cards", "message": "Orderings leave out cards: 2"},
        ]
        assert client.get("/api/lists/1/cards", headers=auth_headers).get_json()["cards"] == ["1", "2"]

    def test_move_unknown_card(self, client, auth_headers, move_data):
        resp = client.put(
            "/api/cards/move",
            json={
                "source_list": {"id": "1", "cards": ["1", "2"]},
                "target_list": {"id": "2", "cards": ["3", "ghost"]},
            },
            headers=auth_headers,
        )
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Cards not found: ghost."}

    def test_move_unknown_list(self, client, auth_headers, move_data):
        resp = client.put(
            "/api/cards/move",
            json={
                "source_list": {"id": "1", "cards": ["1", "2"]},
                "target_list": {"id": "9", "cards": ["3"]},
            },
            headers=auth_headers,
        )
        assert resp.status_code == 404

    def test_move_transaction_failure(self, client, auth_headers, move_data):
        # Card '3' stays in list '2', so placing it in '1' as well fails.
        resp = client.put(
            "/api/cards/move",
            json={
                "source_list": {"id": "1", "cards": ["1", "2", "3"]},
                "target_list": {"id": "1", "cards": ["1", "2", "3"]},
            },
            headers=auth_headers,
        )
        assert resp.status_code == 500
        assert "no changes were applied" in resp.get_json()["error"]
        assert client.get("/api/lists/1/cards", headers=auth_headers).get_json()["cards"] == ["1", "2"]


# ─── Colors ───────────────────────────────────────────────────────

class TestColorRoutes:

    def test_get_colors(self, client, auth_headers, seed_data):
        resp = client.get(f"/api/cards/{seed_data['card_id']}/colors", headers=auth_headers)
        assert resp.status_code == 200
        assert all(entry["active"] is False for entry in resp.get_json())

    def test_add_and_remove_color(self, client, auth_headers, seed_data):
        url = f"/api/cards/{seed_data['card_id']}/colors"
        resp = client.post(url, json={"color_id": 2}, headers=auth_headers)
        assert resp.status_code == 200
        assert [c["id"] for c in resp.get_json() if c["active"]] == [2]

        resp = client.delete(f"{url}/2", headers=auth_headers)
        assert [c["id"] for c in resp.get_json() if c["active"]] == []

    def test_add_unknown_color(self, client, auth_headers, seed_data):
        resp = client.post(
            f"/api/cards/{seed_data['card_id']}/colors",
            json={"color_id": 99},
            headers=auth_headers,
        )
        assert resp.status_code == 400
        assert resp.get_json()["fields"] == [{"field": "color_id", "message": "Unknown color"}]

    def test_colors_of_dropped_card(self, client, auth_headers, seed_data):
        resp = client.get(f"/api/cards/{seed_data['card3_id']}/colors", headers=auth_headers)
        assert resp.status_code == 404


# ─── Comments ─────────────────────────────────────────────────────

class TestCommentRoutes:

    def test_add_comment_with_token(self, client, auth_headers, seed_data):
        resp = client.post(
            f"/api/cards/{seed_data['card_id']}/comments",
            json={"text": "ship it", "user_id": seed_data["user_id"]},
            headers=auth_headers,
        )
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["text"] == "ship it"
        assert body["user"] == {"id": seed_data["user_id"], "username": "testuser"}

    def test_token_comment_needs_user(self, client, auth_headers, seed_data):
        resp = client.post(
            f"/api/cards/{seed_data['card_id']}/comments",
            json={"text": "ship it"},
            headers=auth_headers,
        )
        assert resp.status_code == 400
        assert resp.get_json()["fields"] == [{"field": "user_id", "message": "User id is required"}]

    def test_add_comment_as_logged_in_user(self, client, seed_data):
        _login(client, seed_data["user_id"])
        resp = client.post(
            f"/api/cards/{seed_data['card_id']}/comments", json={"text": "mine"}
        )
        assert resp.status_code == 201
        assert resp.get_json()["user"]["id"] == seed_data["user_id"]

    def test_drop_comment(self, client, auth_headers, seed_data):
        resp = client.delete(f"/api/comments/{seed_data['comment2_id']}", headers=auth_headers)
        assert resp.status_code == 200
        card = client.get(f"/api/cards/{seed_data['card2_id']}", headers=auth_headers).get_json()
        assert card["comments"] == []


# ─── Security headers ─────────────────────────────────────────────

class TestSecurityHeaders:

    def test_headers_on_api_responses(self, client, auth_headers, seed_data):
        resp = client.get(f"/api/cards/{seed_data['card_id']}", headers=auth_headers)
        assert resp.headers.get("X-Content-Type-Options") == "nosniff"
        assert resp.headers.get("X-Frame-Options") == "DENY"
        assert resp.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"

    def test_no_hsts_in_debug(self, client):
        resp = client.get("/nonexistent-page")
        assert resp.headers.get("Strict-Transport-Security") is None

    def test_unknown_route_is_json_404(self, client):
        resp = client.get("/nonexistent-page")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "Not found"}
