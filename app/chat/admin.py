"""
Django admin configuration for chat models.

Provides admin interfaces for:
- Thread browsing with the participant pair inline
- Message moderation
"""

from django.contrib import admin

from chat.models import Message, Thread, ThreadParticipantPair


class ThreadParticipantPairInline(admin.StackedInline):
    """Inline display of the participant pair in thread admin."""

    model = ThreadParticipantPair
    extra = 0
    can_delete = False
    raw_id_fields = ["user_lower", "user_higher"]


@admin.register(Thread)
class ThreadAdmin(admin.ModelAdmin):
    """Admin interface for Thread model."""

    list_display = ["id", "pair", "last_message", "created_at", "updated_at"]
    list_filter = ["created_at"]
    search_fields = ["id", "pair__user_lower__email", "pair__user_higher__email"]
    readonly_fields = ["created_at", "updated_at", "last_message"]
    inlines = [ThreadParticipantPairInline]
    ordering = ["-updated_at"]


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    """Admin interface for Message model."""

    list_display = [
        "id",
        "thread",
        "sender",
        "content_preview",
        "attachment_type",
        "is_read",
        "is_edited",
        "created_at",
    ]
    list_filter = ["attachment_type", "is_read", "is_edited", "created_at"]
    search_fields = ["content", "sender__email"]
    readonly_fields = ["created_at", "updated_at"]
    raw_id_fields = ["thread", "sender"]
    ordering = ["-created_at"]

    @admin.display(description="Content")
    def content_preview(self, obj):
        """Show truncated content."""
        if len(obj.content) > 50:
            return obj.content[:50] + "..."
        return obj.content
