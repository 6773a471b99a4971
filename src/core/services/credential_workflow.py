"""Controlador del workflow de credenciales.

Secuencia por envío (sign-up, sign-in, reset):

1. Campos requeridos vacíos -> `EmptyFieldError` (sin red).
2. Validación remota del email -> `InvalidEmailError` si no es válido.
3. Solo entonces se llama al proveedor de identidad y se traduce su error.

La validación se espera completa antes de tocar el proveedor. El
controlador mantiene un flag `pending` y rechaza un segundo envío mientras
otro sigue en vuelo. `handle()` es el borde hacia la UI: convierte cualquier
`WorkflowError` en un `WorkflowOutcome` con un único mensaje.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, TypeVar

from core.domain.errors import (
    AuthProviderError,
    EmailInUseError,
    EmptyFieldError,
    FacadeError,
    InvalidCredentialsError,
    InvalidEmailError,
    UserNotFoundError,
    WorkflowError,
    WorkflowPendingError,
    WrongPasswordError,
)
from core.domain.models import (
    Credential,
    Identity,
    ResetEmailSent,
    WorkflowKind,
    WorkflowOutcome,
    WorkflowRequest,
)
from core.interfaces.session import EmailValidator, SessionFacade

logger = logging.getLogger(__name__)

T = TypeVar("T")

RESET_EMAIL_SENT_MESSAGE = "Password reset email sent!"
EMPTY_EMAIL_MESSAGE = "Please enter your email."

_SIGN_IN_ERRORS: dict[str, type[WorkflowError]] = {
    "auth/user-not-found": UserNotFoundError,
    "auth/wrong-password": WrongPasswordError,
}


class CredentialWorkflow:
    def __init__(self, *, facade: SessionFacade, validator: EmailValidator) -> None:
        self._facade = facade
        self._validator = validator
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    async def _guarded(self, operation: Callable[[], Awaitable[T]]) -> T:
        if self._pending:
            raise WorkflowPendingError()
        self._pending = True
        try:
            return await operation()
        finally:
            self._pending = False

    async def _preamble(self, credential: Credential, *, require_password: bool) -> None:
        if not credential.email:
            raise EmptyFieldError(None if require_password else EMPTY_EMAIL_MESSAGE)
        if require_password and not credential.password:
            raise EmptyFieldError()

        result = await self._validator.validate(credential.email)
        if not result.is_valid:
            logger.info(
                "Email rejected before submission (%s)",
                result.failure.value if result.failure else "unknown",
            )
            raise InvalidEmailError()

    async def submit_sign_up(self, email: str, password: str) -> Identity:
        credential = Credential(email=email, password=password)

        async def run() -> Identity:
            await self._preamble(credential, require_password=True)
            try:
                identity = await self._facade.create_account(email, password)
            except AuthProviderError as exc:
                logger.debug("Sign-up failed: %s", exc.code)
                if exc.code == "auth/email-already-in-use":
                    raise EmailInUseError() from exc
                raise FacadeError(exc.message) from exc
            logger.info("Registered with: %s", identity.email)
            return identity

        return await self._guarded(run)

    async def submit_sign_in(self, email: str, password: str) -> Identity:
        credential = Credential(email=email, password=password)

        async def run() -> Identity:
            await self._preamble(credential, require_password=True)
            try:
                identity = await self._facade.sign_in(email, password)
            except AuthProviderError as exc:
                logger.debug("Sign-in failed: %s", exc.code)
                # El mensaje del proveedor no se expone en sign-in.
                raise _SIGN_IN_ERRORS.get(exc.code, InvalidCredentialsError)() from exc
            logger.info("Logged in with: %s", identity.email)
            return identity

        return await self._guarded(run)

    async def submit_password_reset(self, email: str) -> ResetEmailSent:
        credential = Credential(email=email)

        async def run() -> ResetEmailSent:
            await self._preamble(credential, require_password=False)
            try:
                await self._facade.send_password_reset(email)
            except AuthProviderError as exc:
                logger.debug("Password reset failed: %s", exc.code)
                raise FacadeError(exc.message) from exc
            logger.info("Password reset email sent to: %s", email)
            return ResetEmailSent(email=email)

        return await self._guarded(run)

    async def sign_out(self) -> None:
        async def run() -> None:
            try:
                await self._facade.sign_out()
            except AuthProviderError as exc:
                raise FacadeError(exc.message) from exc

        await self._guarded(run)

    async def submit(self, request: WorkflowRequest) -> Identity | ResetEmailSent:
        if request.kind is WorkflowKind.PASSWORD_RESET:
            return await self.submit_password_reset(request.email)
        credential = request.credential
        password = credential.password or ""
        if request.kind is WorkflowKind.SIGN_UP:
            return await self.submit_sign_up(credential.email, password)
        if request.kind is WorkflowKind.SIGN_IN:
            return await self.submit_sign_in(credential.email, password)
        raise TypeError(f"Unsupported workflow request: {request!r}")

    async def handle(self, request: WorkflowRequest) -> WorkflowOutcome:
        """Ejecuta `request` y resuelve cualquier falla en un mensaje para la UI."""

        try:
            result = await self.submit(request)
        except WorkflowError as exc:
            return WorkflowOutcome(
                kind=request.kind,
                ok=False,
                message=exc.message,
                error=exc.__class__.__name__,
            )

        if isinstance(result, ResetEmailSent):
            return WorkflowOutcome(
                kind=WorkflowKind.PASSWORD_RESET,
                ok=True,
                message=RESET_EMAIL_SENT_MESSAGE,
                reset_email_sent=result,
            )
        return WorkflowOutcome(kind=request.kind, ok=True, identity=result)

    async def handle_sign_out(self) -> WorkflowOutcome:
        try:
            await self.sign_out()
        except WorkflowError as exc:
            return WorkflowOutcome(
                kind=WorkflowKind.SIGN_OUT,
                ok=False,
                message=exc.message,
                error=exc.__class__.__name__,
            )
        return WorkflowOutcome(kind=WorkflowKind.SIGN_OUT, ok=True)
