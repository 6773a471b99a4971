"""Pytest configuration to make the `src/` layout importable.

This ensures that ``import core`` and similar absolute imports work when tests
are run from the repository root without an editable install.
"""

import os
import sys

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")

if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from core.config import AppSettings  # noqa: E402
from core.domain.models import ValidationFailure, ValidationResult  # noqa: E402


@pytest.fixture
def settings():
    """Settings isolated from the developer's environment and .env files."""
    return AppSettings(
        _env_file=None,
        api_key="test-api-key",
        abstract_api_key="test-abstract-key",
        email_validation_url="https://validation.test/v1/",
        identity_toolkit_url="https://identity.test/v1",
    )


class StubValidator:
    """Validator double that records calls and answers from a fixed set."""

    def __init__(self, invalid=()):
        self.invalid = set(invalid)
        self.calls = []

    async def validate(self, email):
        self.calls.append(email)
        if email in self.invalid:
            return ValidationResult.invalid(ValidationFailure.UNDELIVERABLE, "UNDELIVERABLE")
        return ValidationResult.valid()


@pytest.fixture
def validator():
    return StubValidator()
