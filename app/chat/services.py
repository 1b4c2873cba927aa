"""
Chat system service layer.

This module provides the business logic for two-party messaging,
encapsulating all operations on threads and messages.

Services:
    ThreadService: Thread listing, find-or-create, read-marking
    MessageService: Message listing, send, edit, delete

Result types:
    ThreadSummary: One row of a principal's thread list
    ThreadResolution: Outcome of find_or_create_thread
    MessageView: A message with its sender's display identity

Design Principles:
    - Services are stateless (use class methods)
    - Expected failures return ServiceResult.failure() with a chat ErrorCode
    - Store failures are logged and returned as INTERNAL_ERROR
    - Every mutation runs in one transaction; send, edit and delete hold
      the thread row lock for its duration
    - "Not found" and "not yours" are the same outcome, so a caller cannot
      probe for threads or messages of other principals

Usage:
    from chat.services import MessageService, ThreadService

    result = ThreadService.find_or_create_thread(user, other_user_id)
    if result.success:
        thread = result.data.thread

    result = MessageService.send_message(thread.id, user, "Running late")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from django.db import DatabaseError, IntegrityError

from core.exceptions import NotFoundError, ValidationError
from core.services import BaseService, ServiceResult

from authentication.directory import ParticipantDirectory
from chat.attachments import Attachment
from chat.constants import MESSAGE_CONFIG, ErrorCode
from chat.repositories import MessageLog, ThreadStore

if TYPE_CHECKING:
    from datetime import datetime
    from typing import Any

    from authentication.directory import Identity, IdentityDirectory
    from authentication.models import User
    from chat.models import Message, Thread


# =============================================================================
# Result Types
# =============================================================================


@dataclass(frozen=True)
class ThreadSummary:
    """A thread as seen from one participant's thread list."""

    id: int
    participant_id: int
    participant_name: str
    participant_role: str
    avatar: str
    last_message: str | None
    last_message_time: datetime
    unread_count: int


@dataclass(frozen=True)
class ThreadResolution:
    """Thread returned by find_or_create_thread; created=False if it existed."""

    thread: Thread
    created: bool


@dataclass(frozen=True)
class MessageView:
    """A message joined with its sender's display identity."""

    id: int
    sender: int
    sender_name: str
    sender_role: str
    content: str
    timestamp: datetime
    is_edited: bool
    is_read: bool
    attachment: Attachment

    @classmethod
    def build(cls, message: Message, identity: Identity) -> MessageView:
        return cls(
            id=message.pk,
            sender=message.sender_id,
            sender_name=identity.name,
            sender_role=identity.role,
            content=message.content,
            timestamp=message.created_at,
            is_edited=message.is_edited,
            is_read=message.is_read,
            attachment=Attachment.from_message(message),
        )


def _clean_content(content: Any) -> str:
    if not isinstance(content, str):
        return ""
    return content.strip()


def _validate_content(content: str) -> ServiceResult | None:
    """Return a failure for unusable content, None if it is acceptable."""
    if len(content) < MESSAGE_CONFIG.MIN_CONTENT_LENGTH:
        return ServiceResult.failure(
            "Message content is required",
            error_code=ErrorCode.EMPTY_CONTENT,
        )
    if len(content) > MESSAGE_CONFIG.MAX_CONTENT_LENGTH:
        return ServiceResult.failure(
            f"Message content exceeds {MESSAGE_CONFIG.MAX_CONTENT_LENGTH} characters",
            error_code=ErrorCode.CONTENT_TOO_LONG,
        )
    return None


def _thread_not_found() -> ServiceResult:
    return ServiceResult.failure(
        "Thread not found",
        error_code=ErrorCode.THREAD_NOT_FOUND,
    )


def _message_not_found(action: str) -> ServiceResult:
    return ServiceResult.failure(
        f"Message not found or you are not authorized to {action} it",
        error_code=ErrorCode.MESSAGE_NOT_FOUND,
    )


# =============================================================================
# Thread Service
# =============================================================================


class ThreadService(BaseService):
    """
    Service for thread operations.

    Methods:
        list_threads: A principal's threads with preview and unread count
        find_or_create_thread: The unique thread of a principal pair
        mark_all_read_on_access: Mark the other participant's messages read
    """

    directory: ClassVar[IdentityDirectory] = ParticipantDirectory

    @classmethod
    def list_threads(cls, user: User) -> ServiceResult[list[ThreadSummary]]:
        """
        List every thread ``user`` participates in.

        Threads are ordered by last mutation (send, edit or delete), newest
        first. Threads without messages preview nothing and report the
        thread's own updated_at as last_message_time.

        Returns:
            ServiceResult with a list of ThreadSummary

        Error codes:
            PARTICIPANT_NOT_FOUND: The other participant no longer resolves
        """
        try:
            threads = list(ThreadStore.list_for_participant(user.id))
            other_ids = {thread.other_participant_id(user.id) for thread in threads}
            identities = cls.directory.resolve_many(other_ids)
        except NotFoundError as exc:
            return ServiceResult.from_exception(exc)
        except DatabaseError as exc:
            return cls.handle_exception(exc, f"Failed to list threads for user {user.id}")

        summaries = []
        for thread in threads:
            other = identities[thread.other_participant_id(user.id)]
            last_message = thread.last_message
            summaries.append(
                ThreadSummary(
                    id=thread.pk,
                    participant_id=other.principal_id,
                    participant_name=other.name,
                    participant_role=other.role,
                    avatar=other.avatar,
                    last_message=last_message.content if last_message else None,
                    last_message_time=(
                        last_message.created_at if last_message else thread.updated_at
                    ),
                    unread_count=thread.unread_count,
                )
            )

        cls.get_logger().debug(f"Listed {len(summaries)} threads for user {user.id}")
        return ServiceResult.success(summaries)

    @classmethod
    def find_or_create_thread(
        cls,
        user: User,
        other_user_id: int,
    ) -> ServiceResult[ThreadResolution]:
        """
        Return the thread between ``user`` and ``other_user_id``, creating it
        if the pair has none.

        Implementation:
            1. Reject a thread with oneself
            2. Resolve the other principal through the directory
            3. Look up the sorted pair; return it if present
            4. Create thread + pair inside a savepoint
            5. On IntegrityError (a concurrent caller won), re-read the pair

        Returns:
            ServiceResult with ThreadResolution

        Error codes:
            SAME_PARTICIPANT: Both ids are the same principal
            PARTICIPANT_NOT_FOUND: Other principal unknown or inactive
        """
        if other_user_id == user.id:
            return ServiceResult.failure(
                "Cannot create a thread with yourself",
                error_code=ErrorCode.SAME_PARTICIPANT,
            )

        try:
            cls.directory.resolve_identity(other_user_id)

            thread = ThreadStore.find_by_pair(user.id, other_user_id)
            if thread is not None:
                cls.get_logger().debug(
                    f"Found existing thread {thread.pk} "
                    f"between users {user.id} and {other_user_id}"
                )
                return ServiceResult.success(ThreadResolution(thread, created=False))

            try:
                with cls.atomic():
                    thread = ThreadStore.create_for_pair(user.id, other_user_id)
            except IntegrityError:
                thread = ThreadStore.find_by_pair(user.id, other_user_id)
                if thread is None:
                    raise
                cls.get_logger().info(
                    f"Concurrent creation resolved to thread {thread.pk} "
                    f"between users {user.id} and {other_user_id}"
                )
                return ServiceResult.success(ThreadResolution(thread, created=False))

        except NotFoundError as exc:
            return ServiceResult.from_exception(exc)
        except DatabaseError as exc:
            return cls.handle_exception(
                exc, f"Failed to open thread between {user.id} and {other_user_id}"
            )

        cls.get_logger().info(
            f"Created thread {thread.pk} between users {user.id} and {other_user_id}"
        )
        return ServiceResult.success(ThreadResolution(thread, created=True))

    @classmethod
    def mark_all_read_on_access(cls, thread: Thread, user: User) -> int:
        """
        Mark every unread message of the other participant as read.

        One bulk UPDATE: message updated_at, is_edited and the thread row are
        left untouched. Idempotent.

        Returns:
            Number of messages that went from unread to read
        """
        marked = MessageLog(thread).mark_read_for(user.id)
        if marked:
            cls.get_logger().debug(
                f"User {user.id} read {marked} messages in thread {thread.pk}"
            )
        return marked


# =============================================================================
# Message Service
# =============================================================================


class MessageService(BaseService):
    """
    Service for message operations.

    Methods:
        get_messages: Full conversation, marking it read for the caller
        send_message: Append a message, optionally with an attachment
        edit_message: Replace the caller's own message text
        delete_message: Hard-delete the caller's own message
    """

    directory: ClassVar[IdentityDirectory] = ParticipantDirectory

    @classmethod
    def get_messages(cls, thread_id: int, user: User) -> ServiceResult[list[MessageView]]:
        """
        Return every message of the thread in conversation order.

        Viewing marks the other participant's messages read first, so the
        returned views already carry the new is_read values.

        Error codes:
            THREAD_NOT_FOUND: Thread absent or ``user`` not a participant
            PARTICIPANT_NOT_FOUND: A sender no longer resolves
        """
        try:
            with cls.atomic():
                thread = ThreadStore.get_for_participant(thread_id, user.id)
                if thread is None:
                    return _thread_not_found()

                ThreadService.mark_all_read_on_access(thread, user)
                messages = list(MessageLog(thread).list_in_order())
                # Unresolvable sender rolls back the read-marking
                identities = cls.directory.resolve_many(
                    {message.sender_id for message in messages}
                )
        except NotFoundError as exc:
            return ServiceResult.from_exception(exc)
        except DatabaseError as exc:
            return cls.handle_exception(exc, f"Failed to load thread {thread_id}")

        views = [MessageView.build(message, identities[message.sender_id]) for message in messages]
        cls.get_logger().debug(
            f"User {user.id} loaded {len(views)} messages from thread {thread_id}"
        )
        return ServiceResult.success(views)

    @classmethod
    def send_message(
        cls,
        thread_id: int,
        user: User,
        content: str,
        attachment_type: str | None = None,
        attachment_data: Any = None,
    ) -> ServiceResult[MessageView]:
        """
        Append a message to the thread.

        Content is trimmed and required even when an attachment is present.
        Unknown attachment kinds and empty attachment data are ignored.

        Error codes:
            EMPTY_CONTENT: Content trims to nothing
            CONTENT_TOO_LONG: Content above MESSAGE_CONFIG.MAX_CONTENT_LENGTH
            MISSING_COORDINATES: Location without latitude/longitude
            INVALID_COORDINATES: Location coordinates not numeric or out of range
            INVALID_ATTACHMENT: Image/document data not a reference string
            THREAD_NOT_FOUND: Thread absent or ``user`` not a participant
        """
        content = _clean_content(content)
        failure = _validate_content(content)
        if failure is not None:
            return failure

        try:
            attachment = Attachment.parse(attachment_type, attachment_data)
        except ValidationError as exc:
            return ServiceResult.from_exception(exc)

        try:
            with cls.atomic():
                thread = ThreadStore.lock(thread_id, user.id)
                if thread is None:
                    return _thread_not_found()

                message = MessageLog(thread).append(user.id, content, attachment)
                ThreadStore.touch(thread, last_message=message)
                identity = cls.directory.resolve_identity(user.id)
        except NotFoundError as exc:
            return ServiceResult.from_exception(exc)
        except DatabaseError as exc:
            return cls.handle_exception(exc, f"Failed to send message to thread {thread_id}")

        cls.get_logger().info(
            f"User {user.id} sent message {message.pk} to thread {thread_id}"
            + (f" with {attachment.kind} attachment" if not attachment.is_empty else "")
        )
        return ServiceResult.success(MessageView.build(message, identity))

    @classmethod
    def edit_message(
        cls,
        thread_id: int,
        message_id: int,
        user: User,
        content: str,
    ) -> ServiceResult[None]:
        """
        Replace the text of one of the caller's messages.

        Sets is_edited and leaves is_read as it was. The thread's updated_at
        is bumped; last_message is not repointed.

        Error codes:
            EMPTY_CONTENT: Content trims to nothing
            CONTENT_TOO_LONG: Content above MESSAGE_CONFIG.MAX_CONTENT_LENGTH
            THREAD_NOT_FOUND: Thread absent or ``user`` not a participant
            MESSAGE_NOT_FOUND: Message absent from the thread or not the caller's
        """
        content = _clean_content(content)
        failure = _validate_content(content)
        if failure is not None:
            return failure

        try:
            with cls.atomic():
                thread = ThreadStore.lock(thread_id, user.id)
                if thread is None:
                    return _thread_not_found()

                message = MessageLog(thread).find(message_id, sender_id=user.id)
                if message is None:
                    return _message_not_found("edit")

                message.content = content
                message.is_edited = True
                message.save(update_fields=["content", "is_edited", "updated_at"])
                ThreadStore.touch(thread)
        except DatabaseError as exc:
            return cls.handle_exception(exc, f"Failed to edit message {message_id}")

        cls.get_logger().info(f"User {user.id} edited message {message_id} in thread {thread_id}")
        return ServiceResult.success(None)

    @classmethod
    def delete_message(
        cls,
        thread_id: int,
        message_id: int,
        user: User,
    ) -> ServiceResult[None]:
        """
        Hard-delete one of the caller's messages.

        If it was the thread's last message, last_message moves to the new
        tail (or None when the thread is now empty); otherwise it is left
        alone. The thread's updated_at is bumped either way.

        Error codes:
            THREAD_NOT_FOUND: Thread absent or ``user`` not a participant
            MESSAGE_NOT_FOUND: Message absent from the thread or not the caller's
        """
        try:
            with cls.atomic():
                thread = ThreadStore.lock(thread_id, user.id)
                if thread is None:
                    return _thread_not_found()

                log = MessageLog(thread)
                message = log.find(message_id, sender_id=user.id)
                if message is None:
                    return _message_not_found("delete")

                was_last = thread.last_message_id == message.pk
                log.remove(message)
                if was_last:
                    ThreadStore.touch(thread, last_message=log.tail())
                else:
                    ThreadStore.touch(thread)
        except DatabaseError as exc:
            return cls.handle_exception(exc, f"Failed to delete message {message_id}")

        cls.get_logger().info(
            f"User {user.id} deleted message {message_id} from thread {thread_id}"
        )
        return ServiceResult.success(None)
