"""Integration tests for the /api/v1/clients password endpoints."""

import re
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import status
from sqlalchemy import select

from taskdesk.api.deps import get_password_reset_service
from taskdesk.main import app
from taskdesk.models import Client
from taskdesk.services.password_reset_service import PasswordResetService
from taskdesk.utils.email import EmailDeliveryError

REMIND_URL = "/api/v1/clients/remind_password"
RESET_URL = "/api/v1/clients/reset_password"


async def _stored_client(session_factory, client_id: int = 7) -> Client:
    async with session_factory() as session:
        result = await session.execute(select(Client).where(Client.id == client_id))
        return result.scalar_one()


pytestmark = pytest.mark.integration


class TestRemindPasswordEndpoint:

    async def test_known_email_returns_client(self, api_client, email_sender, test_client_account):
        response = await api_client.post(REMIND_URL, json={"username": "user@example.com"})

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["id"] == 7
        assert body["email"] == "user@example.com"
        assert body["token_created_at"] is not None
        # Token only travels by email
        assert "token" not in body
        assert "password_hash" not in body

        email_sender.send_email.assert_called_once()

    async def test_email_link_carries_stored_token(
        self, api_client, email_sender, session_factory, test_client_account
    ):
        await api_client.post(REMIND_URL, json={"username": "user@example.com"})

        stored = await _stored_client(session_factory)
        assert re.fullmatch(r"[0-9a-f]{64}", stored.token)

        recipient, template, params = email_sender.send_email.call_args.args
        assert recipient.email == "user@example.com"
        assert template == "remind_password"
        assert params["url"].endswith(f"/token/login/{stored.token}")

    async def test_unknown_email_is_field_error(self, api_client, email_sender, test_client_account):
        response = await api_client.post(REMIND_URL, json={"username": "nobody@example.com"})

        assert response.status_code == 422
        assert response.json() == {
            "detail": [
                {"loc": ["body", "username"], "msg": "User not found", "type": "invalid"}
            ]
        }
        email_sender.send_email.assert_not_called()

    async def test_missing_username_is_field_error(self, api_client, email_sender, test_client_account):
        response = await api_client.post(REMIND_URL, json={})

        assert response.status_code == 422
        assert response.json()["detail"][0]["msg"] == "User not found"
        email_sender.send_email.assert_not_called()

    async def test_malformed_json_fails_before_lookup(self, api_client):
        service = MagicMock(spec=PasswordResetService)
        service.remind_password = AsyncMock()
        app.dependency_overrides[get_password_reset_service] = lambda: service

        response = await api_client.post(
            REMIND_URL,
            content='{"username": "user@example.com"',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"detail": "Malformed JSON body"}
        service.remind_password.assert_not_awaited()

    async def test_empty_body_is_malformed(self, api_client, email_sender):
        response = await api_client.post(
            REMIND_URL,
            content=b"",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"detail": "Malformed JSON body"}
        email_sender.send_email.assert_not_called()

    async def test_emails_differing_by_case_resolve_to_one_client(
        self, api_client, db_session, email_sender
    ):
        db_session.add_all([
            Client(id=1, name="Upper Ltd", email="User@example.com"),
            Client(id=2, name="Lower Ltd", email="user@example.com"),
        ])
        await db_session.commit()

        response = await api_client.post(REMIND_URL, json={"username": "user@example.com"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["id"] == 2
        email_sender.send_email.assert_called_once()

    async def test_non_string_username_is_rejected(self, api_client, email_sender):
        response = await api_client.post(REMIND_URL, json={"username": ["user@example.com"]})

        assert response.status_code == 422
        email_sender.send_email.assert_not_called()

    async def test_delivery_failure_is_generic_500(
        self, api_client, email_sender, session_factory, test_client_account
    ):
        email_sender.send_email.side_effect = EmailDeliveryError("connection refused")

        response = await api_client.post(REMIND_URL, json={"username": "user@example.com"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.json() == {"detail": "Internal server error"}

        stored = await _stored_client(session_factory)
        assert stored.token is not None


class TestResetPasswordEndpoint:

    async def test_reset_with_emailed_token(self, api_client, session_factory, test_client_account):
        await api_client.post(REMIND_URL, json={"username": "user@example.com"})
        token = (await _stored_client(session_factory)).token

        response = await api_client.post(RESET_URL, json={"token": token, "password": "NewSecret123"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["success"] is True

        stored = await _stored_client(session_factory)
        assert stored.token is None
        assert stored.token_created_at is None
        assert stored.password_hash is not None

    async def test_reused_token_is_rejected(self, api_client, session_factory, test_client_account):
        await api_client.post(REMIND_URL, json={"username": "user@example.com"})
        token = (await _stored_client(session_factory)).token
        await api_client.post(RESET_URL, json={"token": token, "password": "NewSecret123"})

        response = await api_client.post(RESET_URL, json={"token": token, "password": "Another456X"})

        assert response.status_code == 422
        assert response.json()["detail"][0] == {
            "loc": ["body", "token"],
            "msg": "Invalid or expired token",
            "type": "invalid",
        }

    async def test_expired_token_is_rejected(self, api_client, db_session, test_client_account):
        test_client_account.token = "b" * 64
        test_client_account.token_created_at = datetime.now(timezone.utc) - timedelta(days=2)
        await db_session.commit()

        response = await api_client.post(RESET_URL, json={"token": "b" * 64, "password": "NewSecret123"})

        assert response.status_code == 422
        assert response.json()["detail"][0]["loc"] == ["body", "token"]

    async def test_badly_formed_token_is_rejected(self, api_client):
        response = await api_client.post(RESET_URL, json={"token": "not-a-token", "password": "NewSecret123"})

        assert response.status_code == 422

    async def test_weak_password_is_rejected(self, api_client):
        response = await api_client.post(RESET_URL, json={"token": "c" * 64, "password": "weak"})

        assert response.status_code == 422
