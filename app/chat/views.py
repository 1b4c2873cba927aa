"""
ViewSets for chat API.

This module provides REST API endpoints for two-party messaging:
- ThreadViewSet: Thread list and find-or-create
- MessageViewSet: Message operations (nested under thread)

URL Structure:
    /api/v1/chat/threads/                         GET, POST
    /api/v1/chat/threads/{id}/messages/           GET, POST
    /api/v1/chat/threads/{id}/messages/{pk}/      PUT, DELETE

Design Decisions:
    - Views only parse requests and render results; every rule lives in
      chat.services
    - Participation is checked by the services, which report a foreign
      thread exactly like a missing one (404)
    - Failures render as {"error": ..., "error_code": ...}; the status code
      comes from the error code
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.services import INTERNAL_ERROR

from chat.constants import ErrorCode
from chat.serializers import (
    DetailSerializer,
    MessageCreateSerializer,
    MessageEditSerializer,
    MessageViewSerializer,
    ThreadCreateSerializer,
    ThreadResolutionSerializer,
    ThreadSummarySerializer,
)
from chat.services import MessageService, ThreadService

if TYPE_CHECKING:
    from core.services import ServiceResult


def error_status(error_code: str | None) -> int:
    """Map a service error code to an HTTP status."""
    if error_code in ErrorCode.NOT_FOUND:
        return status.HTTP_404_NOT_FOUND
    if error_code in ErrorCode.INVALID_ARGUMENT:
        return status.HTTP_400_BAD_REQUEST
    if error_code == INTERNAL_ERROR:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def error_response(result: ServiceResult) -> Response:
    return Response(
        {"error": result.error, "error_code": result.error_code},
        status=error_status(result.error_code),
    )


@extend_schema_view(
    list=extend_schema(
        operation_id="list_threads",
        summary="List threads",
        description=(
            "Threads of the current user, most recently active first, with the "
            "other participant's identity, a last-message preview and the "
            "unread count."
        ),
        responses={200: ThreadSummarySerializer(many=True)},
        tags=["Chat - Threads"],
    ),
    create=extend_schema(
        operation_id="find_or_create_thread",
        summary="Find or create thread",
        description=(
            "Return the thread shared with the given participant, creating it "
            "if none exists. At most one thread exists per pair of users."
        ),
        request=ThreadCreateSerializer,
        responses={
            201: OpenApiResponse(
                response=ThreadResolutionSerializer,
                description="Thread created",
            ),
            200: OpenApiResponse(
                response=ThreadResolutionSerializer,
                description="Thread already exists",
            ),
            400: OpenApiResponse(description="Cannot open a thread with yourself"),
            404: OpenApiResponse(description="Participant not found"),
        },
        tags=["Chat - Threads"],
    ),
)
class ThreadViewSet(viewsets.ViewSet):
    """
    ViewSet for thread operations.

    list:
        Get all threads of the current user.

    create:
        Find the thread with another user, or create it.
    """

    permission_classes = [IsAuthenticated]

    def list(self, request):
        result = ThreadService.list_threads(request.user)
        if not result.success:
            return error_response(result)

        return Response(ThreadSummarySerializer(result.data, many=True).data)

    def create(self, request):
        serializer = ThreadCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = ThreadService.find_or_create_thread(
            request.user,
            serializer.validated_data["participant_id"],
        )
        if not result.success:
            return error_response(result)

        resolution = result.data
        if resolution.created:
            body = {"message": "Thread created successfully", "thread_id": resolution.thread.pk}
            return Response(body, status=status.HTTP_201_CREATED)

        body = {"message": "Thread already exists", "thread_id": resolution.thread.pk}
        return Response(body, status=status.HTTP_200_OK)


@extend_schema_view(
    list=extend_schema(
        operation_id="list_messages",
        summary="List messages",
        description=(
            "All messages of the thread, oldest first. Viewing marks the other "
            "participant's messages as read."
        ),
        responses={
            200: MessageViewSerializer(many=True),
            404: OpenApiResponse(description="Thread not found"),
        },
        tags=["Chat - Messages"],
    ),
    create=extend_schema(
        operation_id="send_message",
        summary="Send message",
        request=MessageCreateSerializer,
        responses={
            201: MessageViewSerializer,
            400: OpenApiResponse(description="Empty content or malformed attachment"),
            404: OpenApiResponse(description="Thread not found"),
        },
        tags=["Chat - Messages"],
    ),
    update=extend_schema(
        operation_id="edit_message",
        summary="Edit message",
        description="Replace the text of a message you sent. Marks it as edited.",
        request=MessageEditSerializer,
        responses={
            200: DetailSerializer,
            400: OpenApiResponse(description="Empty content"),
            404: OpenApiResponse(
                description="Message not found or you are not authorized to edit it"
            ),
        },
        tags=["Chat - Messages"],
    ),
    destroy=extend_schema(
        operation_id="delete_message",
        summary="Delete message",
        description="Permanently delete a message you sent.",
        responses={
            200: DetailSerializer,
            404: OpenApiResponse(
                description="Message not found or you are not authorized to delete it"
            ),
        },
        tags=["Chat - Messages"],
    ),
)
class MessageViewSet(viewsets.ViewSet):
    """
    ViewSet for message operations within a thread.

    list:
        Get all messages in the thread and mark them read.

    create:
        Send a message, optionally with an image, location or document.

    update:
        Edit one of your own messages.

    destroy:
        Delete one of your own messages.
    """

    permission_classes = [IsAuthenticated]

    def list(self, request, thread_pk=None):
        result = MessageService.get_messages(thread_pk, request.user)
        if not result.success:
            return error_response(result)

        return Response(MessageViewSerializer(result.data, many=True).data)

    def create(self, request, thread_pk=None):
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.send_message(
            thread_pk,
            request.user,
            serializer.validated_data["content"],
            attachment_type=serializer.validated_data["attachment_type"],
            attachment_data=serializer.validated_data["attachment_data"],
        )
        if not result.success:
            return error_response(result)

        return Response(
            MessageViewSerializer(result.data).data,
            status=status.HTTP_201_CREATED,
        )

    def update(self, request, thread_pk=None, pk=None):
        serializer = MessageEditSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = MessageService.edit_message(
            thread_pk,
            pk,
            request.user,
            serializer.validated_data["content"],
        )
        if not result.success:
            return error_response(result)

        return Response({"message": "Message updated successfully"})

    def destroy(self, request, thread_pk=None, pk=None):
        result = MessageService.delete_message(thread_pk, pk, request.user)
        if not result.success:
            return error_response(result)

        return Response({"message": "Message deleted successfully"})
