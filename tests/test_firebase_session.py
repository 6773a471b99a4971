"""
Tests for the Identity Toolkit REST session facade.
"""

import json

import httpx
import pytest

from adapters.firebase_session import FirebaseSessionFacade, map_rest_error
from core.domain.errors import AuthProviderError


def _error(message, status=400):
    return httpx.Response(status, json={"error": {"code": status, "message": message, "errors": []}})


def _facade(settings, handler):
    return FirebaseSessionFacade(settings, transport=httpx.MockTransport(handler))


class TestMapRestError:

    @pytest.mark.parametrize(
        "message,code",
        [
            ("EMAIL_EXISTS", "auth/email-already-in-use"),
            ("EMAIL_NOT_FOUND", "auth/user-not-found"),
            ("INVALID_PASSWORD", "auth/wrong-password"),
            ("INVALID_LOGIN_CREDENTIALS", "auth/invalid-credential"),
            ("TOO_MANY_ATTEMPTS_TRY_LATER : Access disabled", "auth/too-many-requests"),
            ("SOMETHING_NEW", "auth/internal-error"),
        ],
    )
    def test_codes(self, message, code):
        assert map_rest_error({"error": {"message": message}}).code == code

    def test_detail_after_separator_becomes_message(self):
        error = map_rest_error(
            {"error": {"message": "WEAK_PASSWORD : Password should be at least 6 characters"}}
        )

        assert error.code == "auth/weak-password"
        assert error.message == "Password should be at least 6 characters"

    def test_garbage_payload(self):
        assert map_rest_error("nope").code == "auth/internal-error"


class TestOperations:

    @pytest.mark.asyncio
    async def test_sign_up_establishes_session(self, settings):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["key"] = request.url.params["key"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={"localId": "uid-1", "email": "a@x.com", "idToken": "tok", "refreshToken": "r"},
            )

        facade = _facade(settings, handler)
        states = []
        facade.on_auth_state_changed(states.append)

        identity = await facade.create_account("a@x.com", "secret1")

        assert identity.uid == "uid-1"
        assert identity.email == "a@x.com"
        assert facade.current_identity == identity
        assert seen["path"] == "/v1/accounts:signUp"
        assert seen["key"] == "test-api-key"
        assert seen["body"] == {"email": "a@x.com", "password": "secret1", "returnSecureToken": True}
        assert states == [None, identity]

    @pytest.mark.asyncio
    async def test_sign_in_error_is_translated(self, settings):
        facade = _facade(settings, lambda request: _error("INVALID_PASSWORD"))

        with pytest.raises(AuthProviderError) as exc_info:
            await facade.sign_in("a@x.com", "bad")

        assert exc_info.value.code == "auth/wrong-password"
        assert facade.current_identity is None

    @pytest.mark.asyncio
    async def test_password_reset_request(self, settings):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"email": "a@x.com"})

        await _facade(settings, handler).send_password_reset("a@x.com")

        assert seen["path"] == "/v1/accounts:sendOobCode"
        assert seen["body"] == {"requestType": "PASSWORD_RESET", "email": "a@x.com"}

    @pytest.mark.asyncio
    async def test_network_failure(self, settings):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        with pytest.raises(AuthProviderError) as exc_info:
            await _facade(settings, handler).sign_in("a@x.com", "secret1")

        assert exc_info.value.code == "auth/network-request-failed"

    @pytest.mark.asyncio
    async def test_sign_out_is_local(self, settings):
        calls = []

        def handler(request):
            calls.append(request.url.path)
            return httpx.Response(200, json={"localId": "uid-1", "email": "a@x.com"})

        facade = _facade(settings, handler)
        await facade.sign_in("a@x.com", "secret1")
        await facade.sign_out()

        assert facade.current_identity is None
        assert calls == ["/v1/accounts:signInWithPassword"]

    @pytest.mark.asyncio
    async def test_missing_api_key(self, settings):
        facade = _facade(settings.model_copy(update={"api_key": None}), lambda r: httpx.Response(200))

        with pytest.raises(AuthProviderError) as exc_info:
            await facade.sign_in("a@x.com", "secret1")

        assert exc_info.value.code == "auth/invalid-api-key"
