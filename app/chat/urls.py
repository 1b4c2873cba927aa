"""
URL configuration for chat API.

URL Structure:
    Threads:
        /threads/                            GET, POST

    Messages:
        /threads/{id}/messages/              GET, POST
        /threads/{id}/messages/{pk}/         PUT, DELETE

All URLs are prefixed with /api/v1/chat/ in the main URL configuration.
"""

from django.urls import path

from chat.views import MessageViewSet, ThreadViewSet

app_name = "chat"

urlpatterns = [
    path(
        "threads/",
        ThreadViewSet.as_view({"get": "list", "post": "create"}),
        name="thread-list",
    ),
    # Nested routes for messages
    path(
        "threads/<int:thread_pk>/messages/",
        MessageViewSet.as_view({"get": "list", "post": "create"}),
        name="thread-message-list",
    ),
    path(
        "threads/<int:thread_pk>/messages/<int:pk>/",
        MessageViewSet.as_view({"put": "update", "delete": "destroy"}),
        name="thread-message-detail",
    ),
]
