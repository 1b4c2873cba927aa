"""
Authentication application.

Owns the principal model and the identity lookup the chat app depends on.

Key components:
    - User model: Email-based principal with name, role and avatar
    - ParticipantDirectory: principal id -> display identity

Usage:
    from authentication.models import User, Role
    from authentication.directory import ParticipantDirectory
"""
