"""
Persistence access for threads and messages.

Services never build chat querysets themselves; they go through these two
classes so that every lookup applies the same participant filter and every
mutation goes through the same write path.

Classes:
    ThreadStore: Thread records, pair index, row lock, last-message pointer
    MessageLog: Ordered message collection of a single thread

Locking:
    ThreadStore.lock() must be called inside transaction.atomic(). The
    lock is held until the transaction ends and serializes every mutation
    of that thread's log and last_message pointer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db.models import Count, Q

from chat.models import Message, Thread, ThreadParticipantPair

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from chat.attachments import Attachment

_UNSET = object()


def _participant_filter(user_id: int) -> Q:
    return Q(pair__user_lower_id=user_id) | Q(pair__user_higher_id=user_id)


class ThreadStore:
    """Thread records keyed by id and by sorted participant pair."""

    @classmethod
    def _base(cls) -> QuerySet[Thread]:
        return Thread.objects.select_related("pair", "last_message")

    @classmethod
    def get_for_participant(cls, thread_id: int, user_id: int) -> Thread | None:
        """
        Return the thread if it exists and ``user_id`` is a participant.

        Both misses return None so callers cannot tell them apart.
        """
        return (
            cls._base()
            .filter(_participant_filter(user_id), pk=thread_id)
            .first()
        )

    @classmethod
    def lock(cls, thread_id: int, user_id: int) -> Thread | None:
        """
        Lock and return the thread row, or None (same rule as above).

        Must run inside transaction.atomic().
        """
        return (
            Thread.objects.select_for_update(of=("self",))
            .select_related("pair")
            .filter(_participant_filter(user_id), pk=thread_id)
            .first()
        )

    @classmethod
    def find_by_pair(cls, user_a_id: int, user_b_id: int) -> Thread | None:
        lower, higher = ThreadParticipantPair.canonical(user_a_id, user_b_id)
        return (
            cls._base()
            .filter(pair__user_lower_id=lower, pair__user_higher_id=higher)
            .first()
        )

    @classmethod
    def create_for_pair(cls, user_a_id: int, user_b_id: int) -> Thread:
        """
        Create a thread and its pair row.

        Raises:
            IntegrityError: If the pair already has a thread. Callers wrap
                this in a savepoint.
        """
        lower, higher = ThreadParticipantPair.canonical(user_a_id, user_b_id)
        thread = Thread.objects.create()
        ThreadParticipantPair.objects.create(
            thread=thread,
            user_lower_id=lower,
            user_higher_id=higher,
        )
        return thread

    @classmethod
    def list_for_participant(cls, user_id: int) -> QuerySet[Thread]:
        """
        Threads of ``user_id``, most recently mutated first.

        Each row is annotated with ``unread_count``: messages the other
        participant sent that ``user_id`` has not read yet.
        """
        return (
            cls._base()
            .filter(_participant_filter(user_id))
            .annotate(
                unread_count=Count(
                    "messages",
                    filter=Q(messages__is_read=False) & ~Q(messages__sender_id=user_id),
                )
            )
            .order_by("-updated_at", "-id")
        )

    @classmethod
    def touch(cls, thread: Thread, last_message=_UNSET) -> None:
        """
        Bump updated_at, optionally repointing last_message.

        Pass ``last_message=None`` to clear the pointer.
        """
        update_fields = ["updated_at"]
        if last_message is not _UNSET:
            thread.last_message = last_message
            update_fields.append("last_message")
        thread.save(update_fields=update_fields)


class MessageLog:
    """
    Ordered message collection of one thread.

    Order is (created_at, id); messages are only ever appended or removed,
    never reordered.
    """

    def __init__(self, thread: Thread):
        self.thread = thread

    def _messages(self) -> QuerySet[Message]:
        return Message.objects.filter(thread_id=self.thread.pk)

    def append(self, sender_id: int, content: str, attachment: Attachment) -> Message:
        return Message.objects.create(
            thread_id=self.thread.pk,
            sender_id=sender_id,
            content=content,
            **attachment.model_fields(),
        )

    def find(self, message_id: int, sender_id: int | None = None) -> Message | None:
        """
        Return the message if it belongs to this thread.

        With ``sender_id`` the message must also have been sent by that
        principal; a foreign message is reported exactly like a missing one.
        """
        queryset = self._messages().filter(pk=message_id)
        if sender_id is not None:
            queryset = queryset.filter(sender_id=sender_id)
        return queryset.first()

    def remove(self, message: Message) -> None:
        message.delete()

    def list_in_order(self) -> QuerySet[Message]:
        return self._messages().order_by("created_at", "id")

    def tail(self) -> Message | None:
        return self._messages().order_by("created_at", "id").last()

    def mark_read_for(self, reader_id: int) -> int:
        """
        Mark every unread message not sent by ``reader_id`` as read.

        Uses a bulk UPDATE, so updated_at and is_edited are left alone.

        Returns:
            Number of messages that changed state
        """
        return (
            self._messages()
            .filter(is_read=False)
            .exclude(sender_id=reader_id)
            .update(is_read=True)
        )
