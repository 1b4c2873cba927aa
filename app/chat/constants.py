"""
Constants and configuration for the chat module.

This module centralizes:
- Message limits (content length, attachment URL length)
- Attachment kinds
- Error codes returned by the chat services

Import example:
    from chat.constants import MESSAGE_CONFIG, ErrorCode
"""

from typing import Final

from django.db import models


# =============================================================================
# Message Configuration
# =============================================================================


class MESSAGE_CONFIG:
    """Configuration for message operations."""

    # Content limits
    MAX_CONTENT_LENGTH: Final[int] = 10000  # Characters
    MIN_CONTENT_LENGTH: Final[int] = 1

    # Attachment references are URLs or storage keys, never payloads
    MAX_ATTACHMENT_URL_LENGTH: Final[int] = 2048

    # Preview length used by admin and __str__
    PREVIEW_LENGTH: Final[int] = 50


class COORDINATE_BOUNDS:
    """Valid WGS84 ranges for location attachments."""

    MIN_LATITUDE: Final[float] = -90.0
    MAX_LATITUDE: Final[float] = 90.0
    MIN_LONGITUDE: Final[float] = -180.0
    MAX_LONGITUDE: Final[float] = 180.0


# =============================================================================
# Attachment Kinds
# =============================================================================


class AttachmentType(models.TextChoices):
    """
    Kind of structured payload carried by a message.

    NONE: Plain text message
    IMAGE: Reference to an image (URL or storage key)
    LOCATION: Latitude/longitude pair
    DOCUMENT: Reference to a document (URL or storage key)
    """

    NONE = "", "None"
    IMAGE = "image", "Image"
    LOCATION = "location", "Location"
    DOCUMENT = "document", "Document"


# =============================================================================
# Error Codes
# =============================================================================


class ErrorCode:
    """Machine-readable codes carried by chat ServiceResult failures."""

    # Invalid argument (HTTP 400)
    EMPTY_CONTENT: Final[str] = "EMPTY_CONTENT"
    CONTENT_TOO_LONG: Final[str] = "CONTENT_TOO_LONG"
    MISSING_COORDINATES: Final[str] = "MISSING_COORDINATES"
    INVALID_COORDINATES: Final[str] = "INVALID_COORDINATES"
    INVALID_ATTACHMENT: Final[str] = "INVALID_ATTACHMENT"
    SAME_PARTICIPANT: Final[str] = "SAME_PARTICIPANT"

    # Not found, or not visible to the caller (HTTP 404)
    THREAD_NOT_FOUND: Final[str] = "THREAD_NOT_FOUND"
    MESSAGE_NOT_FOUND: Final[str] = "MESSAGE_NOT_FOUND"
    PARTICIPANT_NOT_FOUND: Final[str] = "PARTICIPANT_NOT_FOUND"

    INVALID_ARGUMENT: Final[frozenset] = frozenset(
        {
            EMPTY_CONTENT,
            CONTENT_TOO_LONG,
            MISSING_COORDINATES,
            INVALID_COORDINATES,
            INVALID_ATTACHMENT,
            SAME_PARTICIPANT,
        }
    )
    NOT_FOUND: Final[frozenset] = frozenset(
        {THREAD_NOT_FOUND, MESSAGE_NOT_FOUND, PARTICIPANT_NOT_FOUND}
    )
