"""Facade de sesión en memoria.

Para ejecuciones locales (`authflow --memory`) y tests: mismo contrato y
mismos códigos de error que el proveedor real, sin red.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field

from adapters.auth_state import AuthStateBroadcaster
from core.domain.errors import AuthProviderError
from core.domain.models import Identity
from core.interfaces.session import AuthStateCallback, SessionFacade, Unsubscribe

MIN_PASSWORD_LENGTH = 6


@dataclass
class _Account:
    identity: Identity
    password: str


@dataclass
class InMemorySessionFacade(SessionFacade):
    accounts: dict[str, _Account] = field(default_factory=dict)
    sent_resets: list[str] = field(default_factory=list)
    _state: AuthStateBroadcaster = field(default_factory=AuthStateBroadcaster, repr=False)

    @property
    def current_identity(self) -> Identity | None:
        return self._state.current_identity

    def add_account(self, email: str, password: str) -> Identity:
        """Registra una cuenta sin iniciar sesión (seed para tests/demos)."""

        key = email.strip().lower()
        identity = Identity(uid=uuid.uuid4().hex, email=email.strip())
        self.accounts[key] = _Account(identity=identity, password=password)
        return identity

    async def create_account(self, email: str, password: str) -> Identity:
        if email.strip().lower() in self.accounts:
            raise AuthProviderError(
                "auth/email-already-in-use",
                "The email address is already in use by another account.",
            )
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthProviderError(
                "auth/weak-password",
                "Password should be at least 6 characters.",
            )
        identity = self.add_account(email, password)
        self._state.set_identity(identity)
        return identity

    async def sign_in(self, email: str, password: str) -> Identity:
        account = self.accounts.get(email.strip().lower())
        if account is None:
            raise AuthProviderError(
                "auth/user-not-found",
                "There is no user record corresponding to this identifier.",
            )
        if account.password != password:
            raise AuthProviderError(
                "auth/wrong-password",
                "The password is invalid or the user does not have a password.",
            )
        self._state.set_identity(account.identity)
        return account.identity

    async def sign_out(self) -> None:
        self._state.set_identity(None)

    async def send_password_reset(self, email: str) -> None:
        if email.strip().lower() not in self.accounts:
            raise AuthProviderError(
                "auth/user-not-found",
                "There is no user record corresponding to this identifier.",
            )
        self.sent_resets.append(email.strip())

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Unsubscribe:
        return self._state.subscribe(callback)
