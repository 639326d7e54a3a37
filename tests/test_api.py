"""
Tests for the HTTP adapter.

Covers:
  - Issuer registration and summary
  - IssueTicket success and typed error bodies
  - ValidateTicket statuses
  - Listing, stats and lookup routes
  - Security headers
"""

import pytest


@pytest.fixture
def registered(client):
    response = client.post("/issuers", json={"name": "Ana", "credential": "ana-password"})
    assert response.status_code == 201
    return response.json()


def _issue(client, ticket_type: str, guest_name: str = None, **extra):
    payload = {"issuer_name": "Ana", "ticket_type": ticket_type, "guest_name": guest_name}
    payload.update(extra)
    return client.post("/tickets", json=payload)


class TestIssuerRoutes:

    def test_register(self, registered) -> None:
        assert registered == {
            "name": "Ana",
            "tickets_generated": 0,
            "max_tickets": 5,
            "created_at": registered["created_at"],
        }
        assert "credential" not in registered
        assert "credential_hash" not in registered

    def test_register_duplicate(self, client, registered) -> None:
        response = client.post("/issuers", json={"name": "Ana", "credential": "x"})
        assert response.status_code == 409
        assert response.json()["error_code"] == "issuer_already_exists"

    def test_register_blank_name(self, client) -> None:
        response = client.post("/issuers", json={"name": "   ", "credential": "x"})
        assert response.status_code == 422

    def test_summary(self, client, registered) -> None:
        _issue(client, "graduate")
        body = client.get("/issuers/Ana").json()
        assert body["counts"] == {"graduate": 1, "sponsor": 0, "family": 0}
        assert body["remaining"] == 4
        assert body["issuer"]["tickets_generated"] == 1

    def test_summary_unknown(self, client) -> None:
        response = client.get("/issuers/Nobody")
        assert response.status_code == 404
        assert response.json()["error_code"] == "issuer_not_found"


class TestIssueRoute:

    def test_issue(self, client, registered) -> None:
        response = _issue(client, "family", "Mom", special_notes="front row")
        assert response.status_code == 201
        body = response.json()
        assert body["ticket_type"] == "family"
        assert body["guest_name"] == "Mom"
        assert body["special_notes"] == "front row"
        assert body["used"] is False
        assert body["used_at"] is None
        assert len(body["code"]) == 12

    def test_type_quota(self, client, registered) -> None:
        _issue(client, "graduate")
        response = _issue(client, "graduate")
        assert response.status_code == 409
        assert response.json()["error_code"] == "quota_exceeded_by_type"

    def test_global_quota(self, client) -> None:
        client.post("/issuers", json={"name": "Ana", "credential": "pw", "max_tickets": 1})
        _issue(client, "graduate")
        response = _issue(client, "sponsor", "Dr. Perez")
        assert response.status_code == 409
        assert response.json()["error_code"] == "quota_exceeded_global"

    def test_missing_guest(self, client, registered) -> None:
        response = _issue(client, "sponsor")
        assert response.status_code == 422
        assert response.json()["error_code"] == "missing_guest_name"

    def test_unknown_type(self, client, registered) -> None:
        response = _issue(client, "vip", "X")
        assert response.status_code == 422
        assert response.json()["error_code"] == "unknown_ticket_type"

    def test_unknown_issuer(self, client) -> None:
        response = _issue(client, "graduate")
        assert response.status_code == 404
        assert response.json()["error_code"] == "issuer_not_found"


class TestValidationRoute:

    def test_accept_then_already_used(self, client, registered) -> None:
        code = _issue(client, "graduate").json()["code"]

        first = client.post("/validation", json={"code": code.lower(), "validator_id": "door-1"})
        assert first.status_code == 200
        assert first.json()["status"] == "accepted"
        assert first.json()["ticket"]["validated_by"] == "door-1"

        second = client.post("/validation", json={"code": code, "validator_id": "door-2"})
        assert second.status_code == 200
        body = second.json()
        assert body["status"] == "already_used"
        assert body["ticket"]["validated_by"] == "door-1"
        assert body["ticket"]["used_at"] == first.json()["ticket"]["used_at"]

    def test_not_found(self, client) -> None:
        response = client.post("/validation", json={"code": "ZZZZZZZZZZZZ", "validator_id": "door-1"})
        assert response.status_code == 200
        assert response.json() == {"status": "not_found", "ticket": None}

    def test_blank_validator(self, client) -> None:
        response = client.post("/validation", json={"code": "ZZZZZZZZZZZZ", "validator_id": "  "})
        assert response.status_code == 422


class TestQueryRoutes:

    def test_list_and_stats(self, client, registered) -> None:
        code = _issue(client, "graduate").json()["code"]
        _issue(client, "family", "Mom")
        client.post("/validation", json={"code": code, "validator_id": "door-1"})

        assert len(client.get("/tickets").json()) == 2
        used = client.get("/tickets", params={"status": "used"}).json()
        assert [t["code"] for t in used] == [code]
        family = client.get("/tickets", params={"ticket_type": "family", "issuer": "Ana"}).json()
        assert [t["guest_name"] for t in family] == ["Mom"]

        stats = client.get("/tickets/stats").json()
        assert stats == {
            "total": 2,
            "used": 1,
            "available": 1,
            "by_type": {"graduate": 1, "sponsor": 0, "family": 1},
        }

    def test_list_bad_status(self, client) -> None:
        assert client.get("/tickets", params={"status": "expired"}).status_code == 422

    def test_get_by_code(self, client, registered) -> None:
        code = _issue(client, "graduate").json()["code"]
        assert client.get(f"/tickets/{code}").json()["code"] == code
        missing = client.get("/tickets/ZZZZZZZZZZZZ")
        assert missing.status_code == 404
        assert missing.json()["error_code"] == "ticket_not_found"


class TestMiddleware:

    def test_security_headers(self, client) -> None:
        response = client.get("/health")
        assert response.json() == {"status": "ok"}
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["Cache-Control"] == "no-store"
