"""Contratos de los colaboradores del workflow.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el proveedor de identidad (Firebase REST, memoria, mocks) y la
  capa de presentación (CLI, tests) sean intercambiables sin acoplar el Core.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol, runtime_checkable

from core.domain.models import Identity, Screen, ValidationResult

AuthStateCallback = Callable[[Optional[Identity]], None]
Unsubscribe = Callable[[], None]


@runtime_checkable
class SessionFacade(Protocol):
    """Handle del proveedor de identidad.

    Reglas de diseño:
    - Las operaciones remotas son asíncronas.
    - Los errores se lanzan como `AuthProviderError(code, message)`.
    - `current_identity` es estado de solo lectura para el Core.
    """

    @property
    def current_identity(self) -> Identity | None: ...

    async def create_account(self, email: str, password: str) -> Identity: ...

    async def sign_in(self, email: str, password: str) -> Identity: ...

    async def sign_out(self) -> None: ...

    async def send_password_reset(self, email: str) -> None: ...

    def on_auth_state_changed(self, callback: AuthStateCallback) -> Unsubscribe: ...


@runtime_checkable
class EmailValidator(Protocol):
    async def validate(self, email: str) -> ValidationResult:
        """Nunca lanza: cualquier falla se convierte en `is_valid=False`."""

        ...


class Navigator(Protocol):
    def replace(self, screen: Screen) -> None:
        """Transición de una sola vía (sin back-stack)."""

        ...


class Alert(Protocol):
    def show(self, message: str) -> None: ...
