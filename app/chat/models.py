"""
Chat system models.

This module defines the data models for two-party caregiver/client messaging:

Models:
    Thread: Conversation container between exactly two principals
    ThreadParticipantPair: Sorted-pair index enforcing one thread per pair
    Message: Individual message within a thread, with optional attachment

Design Decisions:
    - Messages are their own table keyed by thread, never embedded in the
      thread row, so one message can be edited or removed without rewriting
      the rest of the conversation.
    - Thread.last_message is a weak reference: SET_NULL, no reverse accessor.
    - Deletion is hard; there is no soft-delete state for messages.
    - Threads are never deleted by the application.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q

from core.models import BaseModel

from chat.constants import MESSAGE_CONFIG, AttachmentType


class Thread(BaseModel):
    """
    A conversation between exactly two distinct principals.

    Participants live in ThreadParticipantPair; the thread row itself only
    carries the weak pointer to the newest message and the timestamps.

    Fields:
        last_message: Most recent message, null for an empty thread
        updated_at: Bumped by every send, edit and delete (list ordering)

    Relationships:
        pair: ThreadParticipantPair (participants, uniqueness)
        messages: All Message records for this thread
    """

    last_message = models.ForeignKey(
        "Message",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",  # Weak reference, no reverse accessor
        help_text="Most recent message in this thread (null if empty)",
    )

    class Meta:
        db_table = "chat_thread"
        ordering = ["-updated_at", "-id"]
        indexes = [
            # Sort by last activity
            models.Index(
                fields=["-updated_at"],
                name="chat_thread_updated_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"Thread {self.pk}"

    @property
    def participant_ids(self) -> tuple[int, int]:
        """Return (lower_id, higher_id) of the two participants."""
        return (self.pair.user_lower_id, self.pair.user_higher_id)

    def has_participant(self, user_id: int) -> bool:
        """Check whether ``user_id`` is one of the two participants."""
        return user_id in self.participant_ids

    def other_participant_id(self, user_id: int) -> int:
        """
        Return the id of the participant that is not ``user_id``.

        Raises:
            ValueError: If user_id is not a participant
        """
        lower, higher = self.participant_ids
        if user_id == lower:
            return higher
        if user_id == higher:
            return lower
        raise ValueError(f"User {user_id} is not a participant of thread {self.pk}")


class ThreadParticipantPair(models.Model):
    """
    Enforces uniqueness of threads between two users.

    This helper table stores user pairs in canonical order (lower user_id
    first), so whichever participant opens the thread the same row is hit.

    Fields:
        thread: The thread (OneToOne, serves as PK)
        user_lower: User with lower ID
        user_higher: User with higher ID

    Constraints:
        - UniqueConstraint(user_lower, user_higher): One thread per pair
        - CheckConstraint(user_lower_id < user_higher_id): Canonical order,
          which also rules out a thread with oneself
    """

    thread = models.OneToOneField(
        Thread,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="pair",
        help_text="The thread this pair represents",
    )

    user_lower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="User with lower ID in this thread pair",
    )

    user_higher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="User with higher ID in this thread pair",
    )

    class Meta:
        db_table = "chat_thread_participant_pair"
        constraints = [
            models.UniqueConstraint(
                fields=["user_lower", "user_higher"],
                name="unique_thread_participant_pair",
            ),
            models.CheckConstraint(
                condition=Q(user_lower_id__lt=F("user_higher_id")),
                name="thread_pair_lower_less_than_higher",
            ),
        ]
        indexes = [
            # Threads listing for the higher-id participant
            models.Index(
                fields=["user_higher"],
                name="chat_thread_pair_higher_idx",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        return f"ThreadPair({self.user_lower_id}, {self.user_higher_id})"

    @staticmethod
    def canonical(user_a_id: int, user_b_id: int) -> tuple[int, int]:
        """Return the two ids as (lower, higher)."""
        return (user_a_id, user_b_id) if user_a_id < user_b_id else (user_b_id, user_a_id)


class Message(BaseModel):
    """
    A message within a thread.

    Attachment variants (stored flat, shape enforced by a check constraint):
        NONE: no url, no coordinates
        IMAGE / DOCUMENT: attachment_url set, no coordinates
        LOCATION: latitude and longitude set, no url

    Fields:
        thread: Thread this message belongs to
        sender: Principal who sent the message (immutable)
        content: Trimmed, non-empty text
        attachment_type: Attachment kind tag
        attachment_url: Image/document reference
        latitude, longitude: Location coordinates
        is_read: Set once the other participant viewed the thread
        is_edited: Set on the first edit, never cleared
    """

    thread = models.ForeignKey(
        Thread,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Thread this message belongs to",
    )

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
        help_text="User who sent this message",
    )

    content = models.TextField(
        max_length=MESSAGE_CONFIG.MAX_CONTENT_LENGTH,
        help_text="Message text (trimmed, never empty)",
    )

    attachment_type = models.CharField(
        max_length=10,
        choices=AttachmentType.choices,
        default=AttachmentType.NONE,
        blank=True,
        help_text="Attachment kind (empty for plain text)",
    )

    attachment_url = models.CharField(
        max_length=MESSAGE_CONFIG.MAX_ATTACHMENT_URL_LENGTH,
        blank=True,
        default="",
        help_text="Image or document reference (URL or storage key)",
    )

    latitude = models.FloatField(
        null=True,
        blank=True,
        help_text="Latitude for location attachments",
    )

    longitude = models.FloatField(
        null=True,
        blank=True,
        help_text="Longitude for location attachments",
    )

    is_read = models.BooleanField(
        default=False,
        help_text="Whether the recipient has viewed this message",
    )

    is_edited = models.BooleanField(
        default=False,
        help_text="Whether the sender edited this message",
    )

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            # Messages in a thread, in conversation order
            models.Index(
                fields=["thread", "created_at", "id"],
                name="chat_msg_thread_order_idx",
            ),
            # Unread counts per thread
            models.Index(
                fields=["thread", "is_read"],
                name="chat_msg_thread_unread_idx",
                condition=Q(is_read=False),
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(
                        attachment_type=AttachmentType.NONE,
                        attachment_url="",
                        latitude__isnull=True,
                        longitude__isnull=True,
                    )
                    | Q(
                        attachment_type__in=[
                            AttachmentType.IMAGE,
                            AttachmentType.DOCUMENT,
                        ],
                        latitude__isnull=True,
                        longitude__isnull=True,
                    )
                    & ~Q(attachment_url="")
                    | Q(
                        attachment_type=AttachmentType.LOCATION,
                        attachment_url="",
                        latitude__isnull=False,
                        longitude__isnull=False,
                    )
                ),
                name="chat_message_attachment_shape",
            ),
        ]

    def __str__(self) -> str:
        """Return human-readable representation."""
        limit = MESSAGE_CONFIG.PREVIEW_LENGTH
        preview = self.content[:limit] + "..." if len(self.content) > limit else self.content
        return f"User {self.sender_id}: {preview}"

    @property
    def has_attachment(self) -> bool:
        """Check if the message carries an attachment."""
        return self.attachment_type != AttachmentType.NONE
