"""
Chat application configuration.

This app provides two-party messaging between caregivers and clients:
- One thread per pair of users
- Ordered, editable, deletable messages
- Image, location and document attachments
- Per-message read state and unread counts
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"
