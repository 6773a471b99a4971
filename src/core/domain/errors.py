"""Taxonomía de errores del workflow de credenciales.

Cada `WorkflowError` lleva el mensaje que verá el usuario, así el borde del
controlador puede convertir cualquier falla en una notificación sin tablas
de traducción adicionales.
"""

from __future__ import annotations


class WorkflowError(Exception):
    """Base de todas las fallas terminales de un envío."""

    user_message: str = "Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.user_message
        super().__init__(self.message)


class EmptyFieldError(WorkflowError):
    user_message = "Please enter both email and password."


class InvalidEmailError(WorkflowError):
    user_message = "Please enter a valid email address."


class EmailInUseError(WorkflowError):
    user_message = "This email is already in use."


class UserNotFoundError(WorkflowError):
    user_message = "No user found with this email."


class WrongPasswordError(WorkflowError):
    user_message = "Incorrect password."


class InvalidCredentialsError(WorkflowError):
    user_message = "Invalid credentials. Please check your email and password."


class FacadeError(WorkflowError):
    """Falla genérica del proveedor; conserva su mensaje crudo."""


class WorkflowPendingError(WorkflowError):
    user_message = "A request is already in progress. Please wait."


class AuthProviderError(Exception):
    """Error tal como lo reporta el proveedor de identidad (`code` + `message`)."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"{message} ({code})")


class ValidationServiceError(Exception):
    """Falla interna del servicio de validación; nunca sale del validador."""
