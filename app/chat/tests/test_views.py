"""
Comprehensive tests for chat API views.

This module tests the chat endpoints:
- ThreadViewSet: list, find-or-create
- MessageViewSet: list, send, edit, delete

Test Organization:
    - Each endpoint has its own test class
    - Tests follow pattern: test_<method>_<scenario>_<expected_outcome>

Testing Philosophy:
    Tests focus on observable HTTP behavior:
    - Response status codes
    - Response body structure ({"error", "error_code"} on failure)
    - Database state changes
    - Authentication enforcement
"""

from unittest.mock import patch

from django.db import DatabaseError
from rest_framework import status

from chat.models import Message, Thread
from chat.repositories import ThreadStore
from chat.tests.factories import MessageFactory


# =============================================================================
# URL Constants
# =============================================================================


THREADS_URL = "/api/v1/chat/threads/"


def messages_url(thread_id):
    """Generate URL for the message collection of a thread."""
    return f"{THREADS_URL}{thread_id}/messages/"


def message_detail_url(thread_id, message_id):
    """Generate URL for a single message."""
    return f"{messages_url(thread_id)}{message_id}/"


# =============================================================================
# Threads
# =============================================================================


class TestThreadList:
    """Tests for GET /threads/."""

    def test_returns_summaries(self, thread_with_messages, client_client, caregiver):
        thread, _ = thread_with_messages

        response = client_client.get(THREADS_URL)

        assert response.status_code == status.HTTP_200_OK
        (entry,) = response.data
        assert entry["id"] == thread.pk
        assert entry["participant_id"] == caregiver.id
        assert entry["participant_name"] == "Dana Reyes"
        assert entry["participant_role"] == "caregiver"
        assert entry["last_message"] == "See you at 10"
        assert entry["unread_count"] == 2
        assert entry["avatar"] == caregiver.avatar

    def test_excludes_threads_user_is_not_in(self, thread, outsider_client):
        response = outsider_client.get(THREADS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_requires_authentication(self, db, api_client):
        response = api_client.get(THREADS_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestThreadCreate:
    """Tests for POST /threads/."""

    def test_creates_thread(self, caregiver_client, client_user):
        response = caregiver_client.post(
            THREADS_URL, {"participant_id": client_user.id}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["message"] == "Thread created successfully"
        assert Thread.objects.filter(pk=response.data["thread_id"]).exists()

    def test_returns_existing_thread(self, thread, client_client, caregiver):
        response = client_client.post(
            THREADS_URL, {"participant_id": caregiver.id}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"message": "Thread already exists", "thread_id": thread.pk}

    def test_unknown_participant_is_404(self, caregiver_client):
        response = caregiver_client.post(
            THREADS_URL, {"participant_id": 999999}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "PARTICIPANT_NOT_FOUND"

    def test_self_is_400(self, caregiver_client, caregiver):
        response = caregiver_client.post(
            THREADS_URL, {"participant_id": caregiver.id}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "SAME_PARTICIPANT"

    def test_missing_participant_id_is_400(self, caregiver_client):
        response = caregiver_client.post(THREADS_URL, {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "participant_id" in response.data

    def test_store_failure_is_500(self, caregiver_client, client_user):
        with patch.object(ThreadStore, "find_by_pair", side_effect=DatabaseError("down")):
            response = caregiver_client.post(
                THREADS_URL, {"participant_id": client_user.id}, format="json"
            )

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data == {
            "error": "An internal error occurred",
            "error_code": "INTERNAL_ERROR",
        }


# =============================================================================
# Messages
# =============================================================================


class TestMessageList:
    """Tests for GET /threads/{id}/messages/."""

    def test_returns_messages_and_marks_read(self, thread_with_messages, client_client):
        thread, (m1, m2, m3) = thread_with_messages

        response = client_client.get(messages_url(thread.pk))

        assert response.status_code == status.HTTP_200_OK
        assert [item["id"] for item in response.data] == [m1.pk, m2.pk, m3.pk]
        assert [item["is_read"] for item in response.data] == [True, False, True]
        first = response.data[0]
        assert first["sender_name"] == "Dana Reyes"
        assert first["sender_role"] == "caregiver"
        assert first["content"] == "Good morning"
        assert first["attachment_type"] is None
        assert "timestamp" in first

    def test_non_participant_is_404(self, thread_with_messages, outsider_client):
        thread, _ = thread_with_messages

        response = outsider_client.get(messages_url(thread.pk))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "THREAD_NOT_FOUND"

    def test_missing_thread_is_404(self, caregiver_client):
        response = caregiver_client.get(messages_url(123456))

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestMessageSend:
    """Tests for POST /threads/{id}/messages/."""

    def test_sends_text(self, thread, caregiver_client, caregiver):
        response = caregiver_client.post(
            messages_url(thread.pk), {"content": "  Running late  "}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["content"] == "Running late"
        assert response.data["sender"] == caregiver.id
        assert response.data["is_edited"] is False
        thread.refresh_from_db()
        assert thread.last_message_id == response.data["id"]

    def test_sends_location(self, thread, client_client):
        response = client_client.post(
            messages_url(thread.pk),
            {
                "content": "I'm here",
                "attachment_type": "location",
                "attachment_data": {"latitude": 40.7128, "longitude": -74.006},
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["attachment_type"] == "location"
        assert response.data["location"] == {"latitude": 40.7128, "longitude": -74.006}
        assert response.data["image_url"] is None

    def test_sends_image(self, thread, client_client):
        response = client_client.post(
            messages_url(thread.pk),
            {
                "content": "Rash photo",
                "attachment_type": "image",
                "attachment_data": "https://cdn.example.com/p.jpg",
            },
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["image_url"] == "https://cdn.example.com/p.jpg"

    def test_empty_content_is_400(self, thread, caregiver_client):
        response = caregiver_client.post(
            messages_url(thread.pk), {"content": "   "}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "EMPTY_CONTENT"
        assert Message.objects.count() == 0

    def test_null_content_is_empty_content(self, thread, caregiver_client):
        response = caregiver_client.post(
            messages_url(thread.pk), {"content": None}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "EMPTY_CONTENT"

    def test_non_string_attachment_type_is_dropped(self, thread, caregiver_client):
        response = caregiver_client.post(
            messages_url(thread.pk),
            {"content": "Look", "attachment_type": ["image"], "attachment_data": "a.png"},
            format="json",
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["attachment_type"] is None
        assert response.data["image_url"] is None

    def test_location_without_coordinates_is_400(self, thread, caregiver_client):
        response = caregiver_client.post(
            messages_url(thread.pk),
            {"content": "Here", "attachment_type": "location", "attachment_data": {"latitude": 1}},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "MISSING_COORDINATES"

    def test_non_participant_is_404(self, thread, outsider_client):
        response = outsider_client.post(
            messages_url(thread.pk), {"content": "hi"}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert Message.objects.count() == 0

    def test_requires_authentication(self, thread, api_client):
        response = api_client.post(messages_url(thread.pk), {"content": "hi"}, format="json")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestMessageEdit:
    """Tests for PUT /threads/{id}/messages/{mid}/."""

    def test_edits_own_message(self, thread, caregiver_client, caregiver):
        message = MessageFactory(thread=thread, sender=caregiver, content="Old")

        response = caregiver_client.put(
            message_detail_url(thread.pk, message.pk), {"content": "New"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"message": "Message updated successfully"}
        message.refresh_from_db()
        assert message.content == "New"
        assert message.is_edited is True

    def test_foreign_message_is_404(self, thread, client_client, caregiver):
        message = MessageFactory(thread=thread, sender=caregiver, content="Old")

        response = client_client.put(
            message_detail_url(thread.pk, message.pk), {"content": "New"}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "MESSAGE_NOT_FOUND"
        message.refresh_from_db()
        assert message.content == "Old"

    def test_empty_content_is_400(self, thread, caregiver_client, caregiver):
        message = MessageFactory(thread=thread, sender=caregiver, content="Old")

        response = caregiver_client.put(
            message_detail_url(thread.pk, message.pk), {"content": ""}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "EMPTY_CONTENT"


class TestMessageDelete:
    """Tests for DELETE /threads/{id}/messages/{mid}/."""

    def test_deletes_own_message(self, thread_with_messages, caregiver_client):
        thread, (m1, m2, m3) = thread_with_messages

        response = caregiver_client.delete(message_detail_url(thread.pk, m3.pk))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"message": "Message deleted successfully"}
        assert not Message.objects.filter(pk=m3.pk).exists()
        thread.refresh_from_db()
        assert thread.last_message_id == m2.pk

    def test_foreign_message_is_404(self, thread_with_messages, client_client):
        thread, (m1, _, _) = thread_with_messages

        response = client_client.delete(message_detail_url(thread.pk, m1.pk))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert Message.objects.filter(pk=m1.pk).exists()

    def test_missing_message_is_404(self, thread, caregiver_client):
        response = caregiver_client.delete(message_detail_url(thread.pk, 555555))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "MESSAGE_NOT_FOUND"
