"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User model tests
- test_managers.py: UserManager tests
- test_directory.py: ParticipantDirectory tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_directory.py
"""
