"""
Test configuration and fixtures for authentication tests.

Usage:
    def test_example(caregiver, client_user):
        assert caregiver.role == Role.CAREGIVER
"""

import pytest

from authentication.models import User
from authentication.tests.factories import (
    CaregiverFactory,
    ClientFactory,
    UserFactory,
)


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a basic active client user."""
    return UserFactory()


@pytest.fixture
def caregiver(db):
    """Create an active caregiver with an avatar."""
    return CaregiverFactory(name="Dana Reyes")


@pytest.fixture
def client_user(db):
    """Create an active client without an avatar."""
    return ClientFactory(name="Sam Ortiz")


@pytest.fixture
def deactivated_user(db):
    """Create a deactivated user (is_active=False)."""
    return UserFactory(is_active=False)


@pytest.fixture
def superuser(db):
    """Create a superuser with admin privileges."""
    return User.objects.create_superuser(
        email="admin@example.com", password="AdminPass123!"
    )
