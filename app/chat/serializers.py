"""
Serializers for chat API.

Read serializers render the service result types (ThreadSummary,
MessageView); write serializers only check request shape. Content rules
(trimming, emptiness) and attachment rules live in the service layer so
that they return chat error codes instead of generic field errors.

Serializer Hierarchy:
    ThreadSummarySerializer: One entry of the thread list
    ThreadCreateSerializer: Find-or-create request body
    ThreadResolutionSerializer: Find-or-create response body

    MessageViewSerializer: Message with sender identity and attachment
    MessageCreateSerializer: Send message request body
    MessageEditSerializer: Edit message request body
    DetailSerializer: Plain {"message": ...} acknowledgement
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema_field
from rest_framework import serializers

if TYPE_CHECKING:
    from chat.services import MessageView


# =============================================================================
# Thread Serializers
# =============================================================================


class ThreadSummarySerializer(serializers.Serializer):
    """Thread list entry from the caller's point of view."""

    id = serializers.IntegerField(read_only=True)
    participant_id = serializers.IntegerField(read_only=True)
    participant_name = serializers.CharField(read_only=True)
    participant_role = serializers.CharField(read_only=True)
    avatar = serializers.CharField(read_only=True)
    last_message = serializers.CharField(
        read_only=True,
        allow_null=True,
        help_text="Text of the newest message (null for an empty thread)",
    )
    last_message_time = serializers.DateTimeField(read_only=True)
    unread_count = serializers.IntegerField(
        read_only=True,
        help_text="Messages from the other participant not yet viewed",
    )


class ThreadCreateSerializer(serializers.Serializer):
    """Request body for opening a thread with another principal."""

    participant_id = serializers.IntegerField(
        min_value=1,
        help_text="User ID of the other participant",
    )


class ThreadResolutionSerializer(serializers.Serializer):
    """Response body for find-or-create."""

    message = serializers.CharField(read_only=True)
    thread_id = serializers.IntegerField(read_only=True)


# =============================================================================
# Message Serializers
# =============================================================================


class LocationSerializer(serializers.Serializer):
    latitude = serializers.FloatField()
    longitude = serializers.FloatField()


class MessageViewSerializer(serializers.Serializer):
    """
    Message with sender identity.

    Exactly one of image_url, location and document_url is set when the
    message has an attachment; the others are null.
    """

    id = serializers.IntegerField(read_only=True)
    sender = serializers.IntegerField(read_only=True, help_text="Sender user ID")
    sender_name = serializers.CharField(read_only=True)
    sender_role = serializers.CharField(read_only=True)
    content = serializers.CharField(read_only=True)
    timestamp = serializers.DateTimeField(read_only=True)
    is_edited = serializers.BooleanField(read_only=True)
    is_read = serializers.BooleanField(read_only=True)
    attachment_type = serializers.SerializerMethodField()
    image_url = serializers.SerializerMethodField()
    location = serializers.SerializerMethodField()
    document_url = serializers.SerializerMethodField()

    @extend_schema_field(OpenApiTypes.STR)
    def get_attachment_type(self, obj: MessageView) -> str | None:
        return obj.attachment.to_representation()["attachment_type"]

    @extend_schema_field(OpenApiTypes.STR)
    def get_image_url(self, obj: MessageView) -> str | None:
        return obj.attachment.to_representation()["image_url"]

    @extend_schema_field(LocationSerializer(allow_null=True))
    def get_location(self, obj: MessageView) -> dict | None:
        return obj.attachment.to_representation()["location"]

    @extend_schema_field(OpenApiTypes.STR)
    def get_document_url(self, obj: MessageView) -> str | None:
        return obj.attachment.to_representation()["document_url"]


class MessageCreateSerializer(serializers.Serializer):
    """
    Request body for sending a message.

    attachment_type accepts any JSON value so that unknown kinds are
    ignored by the service rather than rejected here. A null content
    reaches the service and is reported as EMPTY_CONTENT.
    """

    content = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        default="",
        trim_whitespace=False,
        help_text="Message text (required, max 10,000 characters after trimming)",
    )
    attachment_type = serializers.JSONField(
        required=False,
        allow_null=True,
        default=None,
        help_text="image, location or document",
    )
    attachment_data = serializers.JSONField(
        required=False,
        allow_null=True,
        default=None,
        help_text=(
            "URL/storage key for image and document; "
            '{"latitude": ..., "longitude": ...} for location'
        ),
    )


class MessageEditSerializer(serializers.Serializer):
    """Request body for editing a message."""

    content = serializers.CharField(
        required=False,
        allow_null=True,
        allow_blank=True,
        default="",
        trim_whitespace=False,
        help_text="Replacement text (required, trimmed)",
    )


class DetailSerializer(serializers.Serializer):
    """Plain acknowledgement body."""

    message = serializers.CharField(read_only=True)
