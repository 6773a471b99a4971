"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Las peticiones de workflow son una unión discriminada por `kind`, así que
  un único `submit` puede despachar sin `isinstance` encadenados.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
- Ninguno se persiste: viven lo que dura una petición.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

MAX_DETAIL_LENGTH = 2_000


class Screen(str, Enum):
    """Pantallas navegables de la app."""

    LOGIN = "Login"
    HOME = "Home"


class WorkflowKind(str, Enum):
    SIGN_IN = "sign_in"
    SIGN_UP = "sign_up"
    PASSWORD_RESET = "password_reset"
    SIGN_OUT = "sign_out"


class ValidationFailure(str, Enum):
    """Canal de diagnóstico del validador: por qué un email no es válido."""

    INVALID_FORMAT = "invalid_format"
    UNDELIVERABLE = "undeliverable"
    SERVICE_ERROR = "service_error"


class AuthTransition(str, Enum):
    """Transición observada en el estado de sesión."""

    ENTERED = "entered"
    LEFT = "left"
    UNKNOWN = "unknown"


class Credential(BaseModel):
    """Email + password opcional enviados por el usuario."""

    model_config = ConfigDict(frozen=True)

    email: str = Field(default="", description="Email tal como lo escribió el usuario.")
    password: str | None = Field(
        default=None,
        repr=False,
        description="Password (solo sign-in/sign-up).",
    )


class Identity(BaseModel):
    """Usuario autenticado según el proveedor de identidad."""

    model_config = ConfigDict(frozen=True)

    uid: str = Field(..., min_length=1, description="Identificador estable del proveedor.")
    email: str = Field(..., description="Email asociado a la cuenta.")


class ValidationResult(BaseModel):
    """Resultado de validar un email contra el servicio remoto.

    `is_valid` es el contrato público. `failure`/`detail` solo sirven para
    diagnóstico: distinguen "servicio caído" de "email inválido".
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool = Field(default=False)
    failure: ValidationFailure | None = Field(default=None)
    detail: str | None = Field(default=None, max_length=MAX_DETAIL_LENGTH)

    @classmethod
    def valid(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def invalid(cls, failure: ValidationFailure, detail: str | None = None) -> "ValidationResult":
        if detail is not None:
            detail = detail[:MAX_DETAIL_LENGTH]
        return cls(is_valid=False, failure=failure, detail=detail)


class ResetEmailSent(BaseModel):
    """Confirmación de que el proveedor despachó el email de reset."""

    model_config = ConfigDict(frozen=True)

    email: str


class SignInRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[WorkflowKind.SIGN_IN] = WorkflowKind.SIGN_IN
    credential: Credential


class SignUpRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[WorkflowKind.SIGN_UP] = WorkflowKind.SIGN_UP
    credential: Credential


class PasswordResetRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal[WorkflowKind.PASSWORD_RESET] = WorkflowKind.PASSWORD_RESET
    email: str = ""


WorkflowRequest = Annotated[
    Union[SignInRequest, SignUpRequest, PasswordResetRequest],
    Field(discriminator="kind"),
]


class WorkflowOutcome(BaseModel):
    """Resultado visible para la UI de un envío.

    Por qué un modelo y no excepciones:
    - La UI solo necesita un mensaje y, si aplica, la identidad resultante.
    - Todas las fallas se resuelven en el borde del controlador.
    """

    kind: WorkflowKind
    ok: bool
    message: str | None = Field(
        default=None,
        description="Mensaje para el usuario (error o confirmación).",
    )
    identity: Identity | None = None
    reset_email_sent: ResetEmailSent | None = None
    error: str | None = Field(
        default=None,
        description="Nombre de la clase de error (para logs/tests).",
    )
