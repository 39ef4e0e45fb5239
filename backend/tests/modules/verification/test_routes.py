"""Tests for the verification endpoints and the SSE status stream."""

import json

import pytest

from modules.verification.routes import status_events
from tests.conftest import as_caller, run_sync

PHOTO = "data:image/jpeg;base64,/9j/4AAQSkZJRg=="


async def no_sleep(seconds: float) -> None:
    return None


async def collect(events) -> list[dict]:
    return [event async for event in events]


class TestStatusEvents:
    @pytest.mark.asyncio
    async def test_pending_until_cap(self, container, seeded):
        issued = await container.verification.issue_token(as_caller(seeded.op1))

        events = await collect(
            status_events(issued.token, container.verification, 0.0, 3, sleep=no_sleep)
        )

        assert [e["event"] for e in events] == ["pending", "pending", "pending", "done"]
        assert json.loads(events[0]["data"])["username"] == "op1"
        assert json.loads(events[-1]["data"]) == {"pending": True, "timedOut": True}

    @pytest.mark.asyncio
    async def test_done_after_completion(self, container, seeded):
        service = container.verification
        issued = await service.issue_token(as_caller(seeded.op1))
        calls = []

        async def complete_on_first_sleep(seconds: float) -> None:
            if not calls:
                await service.complete_verification(issued.token, PHOTO)
            calls.append(seconds)

        events = await collect(
            status_events(issued.token, service, 0.5, 10, sleep=complete_on_first_sleep)
        )

        assert [e["event"] for e in events] == ["pending", "done"]
        assert json.loads(events[-1]["data"]) == {"pending": False}
        assert calls == [0.5]

    @pytest.mark.asyncio
    async def test_unknown_token_ends_immediately(self, container, seeded):
        events = await collect(status_events("nope", container.verification, 0.0, 3, sleep=no_sleep))
        assert events == [{"event": "done", "data": '{"pending":false}'}]


class TestVerificationEndpoints:
    def test_generate_requires_session(self, client, seeded):
        response = client.post("/auth/generate-verification")
        assert response.status_code == 401
        assert response.json()["error"] == "MISSING_SESSION"

    def test_full_handoff(self, client, seeded, auth_headers):
        issued = client.post("/auth/generate-verification", headers=auth_headers(seeded.op1))
        assert issued.status_code == 200
        body = issued.json()
        assert body["verificationUrl"] == f"https://identity.barida.xyz/verify/{body['token']}"
        assert "expiresAt" in body

        status = client.get(f"/auth/verification-status/{body['token']}")
        assert status.status_code == 200
        assert status.json()["pending"] is True

        done = client.post(
            "/auth/verify-biometric", json={"token": body["token"], "photoData": PHOTO}
        )
        assert done.status_code == 200
        assert done.json() == {"success": True, "username": "op1"}

        again = client.post(
            "/auth/verify-biometric", json={"token": body["token"], "photoData": PHOTO}
        )
        assert again.status_code == 404

        me = client.get("/auth/me", headers=auth_headers(seeded.op1))
        assert me.json()["verificationState"] == "verified"

    def test_admin_gets_400(self, client, seeded, auth_headers):
        response = client.post("/auth/generate-verification", headers=auth_headers(seeded.admin))
        assert response.status_code == 400
        assert response.json()["error"] == "VERIFICATION_NOT_REQUIRED"

    def test_missing_photo(self, client, seeded, container):
        issued = run_sync(container.verification.issue_token(as_caller(seeded.op1)))
        response = client.post("/auth/verify-biometric", json={"token": issued.token})
        assert response.status_code == 400
        assert response.json()["error"] == "MISSING_BIOMETRIC_PAYLOAD"

    def test_token_errors_share_one_response(self, client, seeded, container):
        service = container.verification
        used = run_sync(service.issue_token(as_caller(seeded.op1)))
        run_sync(service.complete_verification(used.token, PHOTO))
        superseded = run_sync(service.issue_token(as_caller(seeded.op2)))
        run_sync(service.issue_token(as_caller(seeded.op2)))

        bodies = [
            client.get(f"/auth/verification-status/{token}")
            for token in ("never-issued", used.token, superseded.token)
        ]

        assert {r.status_code for r in bodies} == {404}
        assert all(
            r.json() == {
                "error": "TOKEN_NOT_FOUND",
                "message": "Token not found or already used",
                "details": {},
            }
            for r in bodies
        )

    def test_stream_unknown_token_is_404(self, client, seeded):
        response = client.get("/auth/verification-status/nope/stream")
        assert response.status_code == 404

    def test_stream_emits_events(self, client, seeded, container):
        issued = run_sync(container.verification.issue_token(as_caller(seeded.op1)))

        with client.stream("GET", f"/auth/verification-status/{issued.token}/stream") as response:
            assert response.status_code == 200
            assert "text/event-stream" in response.headers["content-type"]
            body = "".join(response.iter_text())

        assert body.count("event: pending") == 3
        assert "event: done" in body
        assert '"timedOut":true' in body
