"""
Tests for chat app.

This package contains test modules for:
- test_models.py: Thread, ThreadParticipantPair, Message model tests
- test_attachments.py: Attachment parsing tests
- test_repositories.py: ThreadStore and MessageLog tests
- test_services.py: ThreadService and MessageService tests
- test_serializers.py: Request/response serializer tests
- test_views.py: REST API endpoint tests

Usage:
    pytest chat/tests/
    pytest chat/tests/test_services.py
"""
