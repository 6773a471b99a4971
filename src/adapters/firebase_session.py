"""Facade de sesión: Firebase Auth vía Identity Toolkit REST.

Endpoints (`<base>/accounts:<op>?key=<API_KEY>`):
- `signUp`              -> crear cuenta
- `signInWithPassword`  -> iniciar sesión
- `sendOobCode`         -> email de reset (`requestType=PASSWORD_RESET`)

Los errores REST llegan como `{"error": {"message": "EMAIL_EXISTS", ...}}`;
se traducen a los códigos del SDK (`auth/email-already-in-use`, ...) para que
el controlador no dependa del transporte.

La sesión vive solo en memoria: sin persistencia de tokens.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.auth_state import AuthStateBroadcaster
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import AuthProviderError
from core.domain.models import Identity
from core.interfaces.session import AuthStateCallback, SessionFacade, Unsubscribe

logger = logging.getLogger(__name__)

ERROR_CODES: dict[str, str] = {
    "EMAIL_EXISTS": "auth/email-already-in-use",
    "EMAIL_NOT_FOUND": "auth/user-not-found",
    "INVALID_PASSWORD": "auth/wrong-password",
    "INVALID_LOGIN_CREDENTIALS": "auth/invalid-credential",
    "USER_DISABLED": "auth/user-disabled",
    "WEAK_PASSWORD": "auth/weak-password",
    "INVALID_EMAIL": "auth/invalid-email",
    "MISSING_PASSWORD": "auth/missing-password",
    "OPERATION_NOT_ALLOWED": "auth/operation-not-allowed",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "auth/too-many-requests",
}

_FALLBACK_CODE = "auth/internal-error"
_NETWORK_CODE = "auth/network-request-failed"


def map_rest_error(payload: Any) -> AuthProviderError:
    """Convierte el cuerpo de error REST en un `AuthProviderError`.

    El mensaje REST puede traer detalle tras " : " (p.ej.
    "WEAK_PASSWORD : Password should be at least 6 characters").
    """

    raw = ""
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            raw = error["message"]

    symbol, _, detail = raw.partition(" : ")
    symbol = symbol.strip()
    code = ERROR_CODES.get(symbol, _FALLBACK_CODE)
    message = detail.strip() or symbol or "An internal error has occurred."
    return AuthProviderError(code, message)


class FirebaseSessionFacade(SessionFacade):
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport
        self._state = AuthStateBroadcaster()
        self._id_token: str | None = None

    @property
    def current_identity(self) -> Identity | None:
        return self._state.current_identity

    async def _call(self, operation: str, body: dict[str, Any]) -> dict[str, Any]:
        api_key = self._settings.api_key
        if not api_key:
            raise AuthProviderError("auth/invalid-api-key", "API_KEY is not configured.")

        url = f"{self._settings.identity_toolkit_url.rstrip('/')}/accounts:{operation}"
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.post(url, params={"key": api_key}, json=body)
            payload = response.json()
        except httpx.HTTPError as exc:
            raise AuthProviderError(_NETWORK_CODE, str(exc)) from exc
        except ValueError as exc:
            raise AuthProviderError(_FALLBACK_CODE, "Malformed response from identity provider.") from exc

        if response.status_code != 200:
            error = map_rest_error(payload)
            logger.debug("Identity provider %s failed: %s", operation, error.code)
            raise error
        if not isinstance(payload, dict):
            raise AuthProviderError(_FALLBACK_CODE, "Malformed response from identity provider.")
        return payload

    def _establish(self, payload: dict[str, Any], email: str) -> Identity:
        identity = Identity(
            uid=str(payload.get("localId") or email),
            email=str(payload.get("email") or email),
        )
        self._id_token = payload.get("idToken")
        self._state.set_identity(identity)
        return identity

    async def create_account(self, email: str, password: str) -> Identity:
        payload = await self._call(
            "signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return self._establish(payload, email)

    async def sign_in(self, email: str, password: str) -> Identity:
        payload = await self._call(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return self._establish(payload, email)

    async def sign_out(self) -> None:
        # El SDK cierra sesión localmente; no hay llamada remota.
        self._id_token = None
        self._state.set_identity(None)

    async def send_password_reset(self, email: str) -> None:
        await self._call("sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Unsubscribe:
        return self._state.subscribe(callback)
