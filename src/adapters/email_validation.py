"""Validador de emails: Abstract API (formato + deliverability).

Implementación:
- `GET <endpoint>?api_key=...&email=...`
- Válido solo si `is_valid_format.value` es true y `deliverability` es
  exactamente "DELIVERABLE".

Notas:
- Nunca lanza. Red caída, HTTP != 200, JSON roto o esquema inesperado se
  degradan a `is_valid=False` con `failure=SERVICE_ERROR`, y se loguean.
- Un único intento por llamada; el timeout es el de `AppSettings`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import ValidationServiceError
from core.domain.models import ValidationFailure, ValidationResult
from core.interfaces.session import EmailValidator

logger = logging.getLogger(__name__)

DELIVERABLE = "DELIVERABLE"


def _parse_payload(payload: Any) -> tuple[bool, str]:
    if not isinstance(payload, dict):
        raise ValidationServiceError("response body is not a JSON object")

    fmt = payload.get("is_valid_format")
    if not isinstance(fmt, dict) or not isinstance(fmt.get("value"), bool):
        raise ValidationServiceError("missing is_valid_format.value")

    deliverability = payload.get("deliverability")
    if not isinstance(deliverability, str):
        raise ValidationServiceError("missing deliverability")

    return fmt["value"], deliverability


def _classify(is_valid_format: bool, deliverability: str) -> ValidationResult:
    if not is_valid_format:
        logger.debug("Email rejected: invalid format")
        return ValidationResult.invalid(ValidationFailure.INVALID_FORMAT)
    if deliverability != DELIVERABLE:
        logger.debug("Email rejected: deliverability=%.80s", deliverability)
        return ValidationResult.invalid(ValidationFailure.UNDELIVERABLE, deliverability)
    return ValidationResult.valid()


class AbstractEmailValidator(EmailValidator):
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def _fetch(self, email: str) -> Any:
        api_key = self._settings.abstract_api_key
        if not api_key:
            raise ValidationServiceError("ABSTRACT_API_KEY is not configured")

        params = {"api_key": api_key, "email": email}
        async with build_async_client(self._settings, transport=self._transport) as client:
            response = await client.get(self._settings.email_validation_url, params=params)

        if response.status_code != 200:
            raise ValidationServiceError(f"validation service returned HTTP {response.status_code}")
        return response.json()

    async def validate(self, email: str) -> ValidationResult:
        try:
            payload = await self._fetch(email)
            return _classify(*_parse_payload(payload))
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, ValidationServiceError) as exc:
            # ValueError cubre JSON inválido (json.JSONDecodeError).
            logger.warning(
                "Email validation error (%s): %s",
                exc.__class__.__name__,
                exc,
            )
            return ValidationResult.invalid(ValidationFailure.SERVICE_ERROR, str(exc))
