"""
Chat app for caregiver/client messaging.

This app handles:
- Threads between exactly two users
- Message sending, history, editing and deletion
- Attachments (image, location, document)
- Read state and unread counts

Related apps:
    - authentication: User model and the participant directory

Usage:
    from chat.services import MessageService, ThreadService

    result = ThreadService.find_or_create_thread(user, other_user.id)
    thread = result.data.thread

    result = MessageService.send_message(thread.id, user, "Hello!")
"""
