"""Integration tests for guest registration, login, profile and logout."""

import pytest

from captiveportal.domain.services import SessionLedger

REGISTER_URL = "/api/auth/register"
LOGIN_URL = "/api/auth/login"
PROFILE_URL = "/api/auth/profile"
LOGOUT_URL = "/api/auth/logout"

LOGIN_BODY = {"email": "john@test.com", "phone_number": "08012345678"}


async def _register_and_login(client, guest_payload, headers=None) -> str:
    await client.post(REGISTER_URL, json=guest_payload())
    response = await client.post(LOGIN_URL, json=LOGIN_BODY, headers=headers or {})
    assert response.status_code == 200
    return response.json()["token"]


class TestRegistration:
    @pytest.mark.asyncio
    async def test_register_success(self, client, guest_payload):
        response = await client.post(REGISTER_URL, json=guest_payload())

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert data["message"] == (
            "Registration successful! You can now login with your email and phone number."
        )
        assert data["token"]
        assert data["user"]["email"] == "john@test.com"
        assert data["user"]["phone_number"] == "08012345678"
        assert data["user"]["company"] == "Acme"
        assert data["user"]["last_login"] is None

    @pytest.mark.asyncio
    async def test_register_does_not_open_a_session(self, client, db_session, guest_payload):
        await client.post(REGISTER_URL, json=guest_payload())

        sessions = await SessionLedger(db_session).list_sessions_for_user_raw("john@test.com")
        assert sessions == []

    @pytest.mark.asyncio
    async def test_register_normalizes_phone_and_email(self, client, guest_payload):
        response = await client.post(
            REGISTER_URL,
            json=guest_payload(email="John@Test.com", phone_number="080-1234-5678"),
        )

        assert response.status_code == 201
        assert response.json()["user"]["email"] == "john@test.com"
        assert response.json()["user"]["phone_number"] == "08012345678"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client, guest_payload):
        await client.post(REGISTER_URL, json=guest_payload())

        response = await client.post(
            REGISTER_URL, json=guest_payload(phone_number="08098765432")
        )

        assert response.status_code == 400
        assert response.json() == {"success": False, "message": "Email already registered"}

    @pytest.mark.asyncio
    async def test_register_duplicate_phone(self, client, guest_payload):
        await client.post(REGISTER_URL, json=guest_payload())

        response = await client.post(
            REGISTER_URL, json=guest_payload(email="jane@test.com", phone_number="0801 234 5678")
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Phone number already registered"

    @pytest.mark.asyncio
    async def test_register_invalid_phone(self, client, guest_payload):
        response = await client.post(REGISTER_URL, json=guest_payload(phone_number="07112345678"))

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Validation failed"
        assert data["errors"] == [
            {
                "field": "phone_number",
                "message": "Please provide a valid Nigerian phone number (e.g., 08012345678)",
                "code": "invalid_phone_number",
            }
        ]

    @pytest.mark.asyncio
    async def test_register_missing_and_short_fields(self, client, guest_payload):
        payload = guest_payload(first_name="J", email="not-an-email")
        del payload["company"]

        response = await client.post(REGISTER_URL, json=payload)

        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"first_name", "email", "company"}

    @pytest.mark.asyncio
    async def test_register_strips_whitespace_before_length_check(self, client, guest_payload):
        response = await client.post(REGISTER_URL, json=guest_payload(last_name="  D  "))

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "last_name"


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_opens_session(self, client, db_session, guest_payload):
        await client.post(REGISTER_URL, json=guest_payload())

        response = await client.post(
            LOGIN_URL,
            json={"email": "JOHN@test.com", "phone_number": "080 1234 5678"},
            headers={
                "X-Forwarded-For": "203.0.113.7, 10.0.0.1",
                "X-MAC-Address": "AA:BB:CC:DD:EE:FF",
                "X-Gateway-Session": "gw-42",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Login successful! You now have internet access."
        assert data["token"]
        assert data["user"]["last_login"] is not None

        sessions = await SessionLedger(db_session).list_sessions_for_user_raw("john@test.com")
        assert len(sessions) == 1
        assert sessions[0].session_end is None
        assert sessions[0].ip_address == "203.0.113.7"
        assert sessions[0].mac_address == "AA:BB:CC:DD:EE:FF"
        assert sessions[0].gateway_session_id == "gw-42"

    @pytest.mark.asyncio
    async def test_login_uses_peer_address_without_forwarding_header(
        self, client, db_session, guest_payload
    ):
        await _register_and_login(client, guest_payload, headers={"X-Mikrotik-Session": "mt-1"})

        sessions = await SessionLedger(db_session).list_sessions_for_user_raw("john@test.com")
        assert sessions[0].ip_address == "127.0.0.1"
        assert sessions[0].gateway_session_id == "mt-1"

    @pytest.mark.asyncio
    async def test_each_login_opens_another_session(self, client, db_session, guest_payload):
        await _register_and_login(client, guest_payload)
        await client.post(LOGIN_URL, json=LOGIN_BODY)

        sessions = await SessionLedger(db_session).list_sessions_for_user_raw("john@test.com")
        assert len(sessions) == 2

    @pytest.mark.asyncio
    async def test_wrong_phone_and_unknown_email_look_the_same(self, client, guest_payload):
        await client.post(REGISTER_URL, json=guest_payload())

        wrong_phone = await client.post(
            LOGIN_URL, json={"email": "john@test.com", "phone_number": "08099999999"}
        )
        unknown_email = await client.post(
            LOGIN_URL, json={"email": "nobody@test.com", "phone_number": "08012345678"}
        )

        assert wrong_phone.status_code == 401
        assert unknown_email.status_code == 401
        assert wrong_phone.json() == unknown_email.json()
        assert wrong_phone.json()["success"] is False

    @pytest.mark.asyncio
    async def test_login_invalid_phone_format(self, client):
        response = await client.post(
            LOGIN_URL, json={"email": "john@test.com", "phone_number": "12345"}
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "invalid_phone_number"


class TestProfileAndLogout:
    @pytest.mark.asyncio
    async def test_profile(self, client, guest_payload):
        token = await _register_and_login(client, guest_payload)

        response = await client.get(PROFILE_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["user"]["first_name"] == "John"

    @pytest.mark.asyncio
    async def test_profile_requires_token(self, client):
        response = await client.get(PROFILE_URL)

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "Access token required"}

    @pytest.mark.asyncio
    async def test_profile_rejects_bad_and_admin_tokens(self, client, admin_token):
        bad = await client.get(PROFILE_URL, headers={"Authorization": "Bearer garbage"})
        admin = await client.get(PROFILE_URL, headers={"Authorization": f"Bearer {admin_token}"})

        assert bad.status_code == 401
        assert bad.json()["message"] == "Invalid or expired token"
        assert admin.status_code == 401

    @pytest.mark.asyncio
    async def test_profile_after_account_deleted(self, client, admin_headers, guest_payload):
        token = await _register_and_login(client, guest_payload)
        deleted = await client.delete("/api/admin/users/john@test.com", headers=admin_headers)
        assert deleted.status_code == 200

        response = await client.get(PROFILE_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "User not found"}

    @pytest.mark.asyncio
    async def test_logout_closes_session_once(self, client, db_session, guest_payload):
        token = await _register_and_login(client, guest_payload)
        headers = {"Authorization": f"Bearer {token}"}
        ledger = SessionLedger(db_session)

        first = await client.post(LOGOUT_URL, headers=headers)

        assert first.status_code == 200
        assert first.json() == {"success": True, "message": "Logout successful"}
        sessions = await ledger.list_sessions_for_user_raw("john@test.com")
        first_end = sessions[0].session_end
        assert first_end is not None

        second = await client.post(LOGOUT_URL, headers=headers)

        assert second.status_code == 200
        sessions = await ledger.list_sessions_for_user_raw("john@test.com")
        assert sessions[0].session_end == first_end

    @pytest.mark.asyncio
    async def test_logout_requires_token(self, client):
        response = await client.post(LOGOUT_URL)
        assert response.status_code == 401
