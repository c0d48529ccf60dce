"""Shared test fixtures for the Registrar test suite."""

from collections.abc import Generator
from datetime import UTC, datetime, timedelta

import pytest

from registrar.conversation import InMemoryContextStore
from registrar.services import (
    MockAcademicRecordService,
    MockCertificateService,
    MockKnowledgeService,
    MockProfileService,
)


class FakeClock:
    """Manually advanced clock for expiry and timestamp tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 3, 4, 10, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at 2024-03-04 10:00 UTC."""
    return FakeClock()


@pytest.fixture
def context_store(clock: FakeClock) -> InMemoryContextStore:
    """Fresh store on the fake clock with the default 30 minute timeout."""
    return InMemoryContextStore(clock=clock)


@pytest.fixture
def profile_service() -> MockProfileService:
    return MockProfileService()


@pytest.fixture
def record_service() -> MockAcademicRecordService:
    return MockAcademicRecordService()


@pytest.fixture
def certificate_service() -> MockCertificateService:
    return MockCertificateService()


@pytest.fixture
def knowledge_service() -> MockKnowledgeService:
    return MockKnowledgeService()


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache and TOML source around each test."""
    from registrar.config import get_settings
    from registrar.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})
