"""
Shared test fixtures for the rop test suite.

Keeps settings and structlog configuration from leaking between tests.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from rop import ValidationError, get_settings


@pytest.fixture(autouse=True)
def _isolate_settings_and_logging() -> Iterator[None]:
    """Reload settings per test and restore structlog defaults afterwards."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture()
def email_error() -> ValidationError:
    return ValidationError("Email", "invalid")


@pytest.fixture()
def password_error() -> ValidationError:
    return ValidationError("Password", "too short")
