"""
Shared pytest fixtures and configuration for the BandVault test suite.

This module provides:
- Hypothesis profiles for property-based testing
- A fixed clock and in-memory repositories
- Pre-wired domain services
"""

import pytest
from hypothesis import HealthCheck, Phase, settings

from bandvault.domain.file_access.entities import Identity
from bandvault.domain.file_access.path_guard import PathGuard
from bandvault.domain.file_access.session_guard import SessionGuard
from bandvault.domain.file_access.token_issuer import TokenIssuer
from tests.fixtures.mock_repositories import (
    FixedClock,
    MockAuthGateway,
    MockFileAccessTokenRepository,
    MockFileStorageRepository,
    make_session,
)

settings.register_profile(
    "default",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.target, Phase.shrink],
)
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.register_profile(
    "dev",
    max_examples=10,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile("default")


BAND_ID = "band-a"
OTHER_BAND_ID = "band-b"
BASE_URL = "https://project.supabase.co"


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def token_repository():
    return MockFileAccessTokenRepository()


@pytest.fixture
def storage_repository():
    return MockFileStorageRepository()


@pytest.fixture
def auth_gateway(clock):
    return MockAuthGateway(session=make_session(now=clock.now))


@pytest.fixture
def session_guard(auth_gateway, clock):
    return SessionGuard(auth_gateway, clock=clock)


@pytest.fixture
def token_issuer(token_repository, clock):
    return TokenIssuer(token_repository, clock=clock)


@pytest.fixture
def path_guard():
    return PathGuard()


@pytest.fixture
def identity():
    return Identity(user_id="user-1")


@pytest.fixture
def band_id():
    return BAND_ID


@pytest.fixture
def base_url():
    return BASE_URL
