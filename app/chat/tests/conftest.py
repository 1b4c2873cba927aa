"""
Test configuration and fixtures for chat tests.

This module provides:
- User fixtures (caregiver, client, outsider)
- Thread fixtures (empty, with messages)
- API client helpers for authenticated requests

Usage:
    def test_example(thread, caregiver_client):
        response = caregiver_client.get(f'/api/v1/chat/threads/{thread.id}/messages/')
        assert response.status_code == 200
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tests.factories import CaregiverFactory, ClientFactory
from chat.tests.factories import MessageFactory, ThreadFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def caregiver(db):
    """Create a caregiver with a name and avatar."""
    return CaregiverFactory(name="Dana Reyes")


@pytest.fixture
def client_user(db):
    """Create a client (the other side of most test threads)."""
    return ClientFactory(name="Sam Ortiz")


@pytest.fixture
def outsider(db):
    """Create a user who is not a participant in any test thread."""
    return ClientFactory(name="Alex Outsider")


# =============================================================================
# Thread Fixtures
# =============================================================================


@pytest.fixture
def thread(db, caregiver, client_user):
    """Create an empty thread between caregiver and client."""
    return ThreadFactory(user1=caregiver, user2=client_user)


@pytest.fixture
def thread_with_messages(db, thread, caregiver, client_user):
    """
    Thread with a short exchange.

    Returns (thread, [m1, m2, m3]) where m1 and m3 are from the caregiver
    and m2 is from the client. Nothing has been read yet.
    """
    m1 = MessageFactory(thread=thread, sender=caregiver, content="Good morning")
    m2 = MessageFactory(thread=thread, sender=client_user, content="Hi Dana")
    m3 = MessageFactory(thread=thread, sender=caregiver, content="See you at 10")
    thread.refresh_from_db()
    return thread, [m1, m2, m3]


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Unauthenticated API client."""
    return APIClient()


@pytest.fixture
def authenticated_client_factory(db):
    """
    Factory to create authenticated clients for any user.

    Usage:
        def test_example(authenticated_client_factory, some_user):
            client = authenticated_client_factory(some_user)
            response = client.get('/api/v1/chat/threads/')
    """

    def _make_client(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
        return client

    return _make_client


@pytest.fixture
def caregiver_client(authenticated_client_factory, caregiver):
    """API client authenticated as the caregiver."""
    return authenticated_client_factory(caregiver)


@pytest.fixture
def client_client(authenticated_client_factory, client_user):
    """API client authenticated as the client user."""
    return authenticated_client_factory(client_user)


@pytest.fixture
def outsider_client(authenticated_client_factory, outsider):
    """API client authenticated as the outsider."""
    return authenticated_client_factory(outsider)
