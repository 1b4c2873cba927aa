"""
Attachment parsing for outgoing messages.

Clients send an ``attachment_type`` tag and a loosely-typed
``attachment_data`` payload. This module turns that pair into a validated
Attachment value or rejects it.

Rules:
    - Unknown kinds and empty payloads are dropped (plain text message).
    - image/document: payload is the reference string.
    - location: payload is a mapping with latitude and longitude; both are
      required and must lie within WGS84 bounds.

Usage:
    from chat.attachments import Attachment

    attachment = Attachment.parse("location", {"latitude": 1.5, "longitude": 2})
    attachment.model_fields()
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core.exceptions import ValidationError

from chat.constants import COORDINATE_BOUNDS, MESSAGE_CONFIG, AttachmentType, ErrorCode

if TYPE_CHECKING:
    from typing import Any

    from chat.models import Message


@dataclass(frozen=True)
class Attachment:
    """Validated attachment; ``kind`` is AttachmentType.NONE for none."""

    kind: str = AttachmentType.NONE
    url: str = ""
    latitude: float | None = None
    longitude: float | None = None

    @classmethod
    def none(cls) -> Attachment:
        return cls()

    @classmethod
    def parse(cls, kind: Any, data: Any) -> Attachment:
        """
        Build an Attachment from request values.

        Args:
            kind: Attachment tag as sent by the client (may be None)
            data: Payload for that tag (may be None)

        Returns:
            Attachment; Attachment.none() when the kind is unknown or the
            payload is empty

        Raises:
            ValidationError: MISSING_COORDINATES, INVALID_COORDINATES or
                INVALID_ATTACHMENT for a recognised kind with bad data
        """
        if kind not in (AttachmentType.IMAGE, AttachmentType.LOCATION, AttachmentType.DOCUMENT):
            return cls.none()
        if not data:
            return cls.none()

        if kind == AttachmentType.LOCATION:
            return cls._parse_location(data)
        return cls._parse_reference(kind, data)

    @classmethod
    def _parse_reference(cls, kind: str, data: Any) -> Attachment:
        if not isinstance(data, str):
            raise ValidationError(
                f"{kind.capitalize()} attachment must be a URL or storage key",
                error_code=ErrorCode.INVALID_ATTACHMENT,
            )
        url = data.strip()
        if not url:
            return cls.none()
        if len(url) > MESSAGE_CONFIG.MAX_ATTACHMENT_URL_LENGTH:
            raise ValidationError(
                f"{kind.capitalize()} reference is too long",
                error_code=ErrorCode.INVALID_ATTACHMENT,
            )
        return cls(kind=kind, url=url)

    @classmethod
    def _parse_location(cls, data: Any) -> Attachment:
        if not isinstance(data, Mapping):
            raise ValidationError(
                "Location attachment must be an object with latitude and longitude",
                error_code=ErrorCode.INVALID_ATTACHMENT,
            )

        latitude = data.get("latitude")
        longitude = data.get("longitude")
        if latitude is None or longitude is None or latitude == "" or longitude == "":
            raise ValidationError(
                "Location attachments require latitude and longitude",
                error_code=ErrorCode.MISSING_COORDINATES,
            )

        latitude = cls._coerce_coordinate(latitude)
        longitude = cls._coerce_coordinate(longitude)
        if not (
            COORDINATE_BOUNDS.MIN_LATITUDE <= latitude <= COORDINATE_BOUNDS.MAX_LATITUDE
            and COORDINATE_BOUNDS.MIN_LONGITUDE <= longitude <= COORDINATE_BOUNDS.MAX_LONGITUDE
        ):
            raise ValidationError(
                "Coordinates are out of range",
                error_code=ErrorCode.INVALID_COORDINATES,
            )
        return cls(kind=AttachmentType.LOCATION, latitude=latitude, longitude=longitude)

    @staticmethod
    def _coerce_coordinate(value: Any) -> float:
        # bool is an int subclass; True is not a coordinate
        if isinstance(value, bool):
            raise ValidationError(
                "Coordinates must be numbers",
                error_code=ErrorCode.INVALID_COORDINATES,
            )
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValidationError(
                "Coordinates must be numbers",
                error_code=ErrorCode.INVALID_COORDINATES,
            )
        if not math.isfinite(number):
            raise ValidationError(
                "Coordinates must be finite",
                error_code=ErrorCode.INVALID_COORDINATES,
            )
        return number

    @classmethod
    def from_message(cls, message: Message) -> Attachment:
        """Rebuild the attachment stored on a message row."""
        return cls(
            kind=message.attachment_type,
            url=message.attachment_url,
            latitude=message.latitude,
            longitude=message.longitude,
        )

    @property
    def is_empty(self) -> bool:
        return self.kind == AttachmentType.NONE

    def model_fields(self) -> dict[str, Any]:
        """Column values for Message."""
        return {
            "attachment_type": self.kind,
            "attachment_url": self.url,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    def to_representation(self) -> dict[str, Any]:
        """
        Variant keys for the message view.

        Exactly one of image_url / location / document_url is non-null for
        a message with an attachment; all three are null otherwise.
        """
        return {
            "attachment_type": self.kind or None,
            "image_url": self.url if self.kind == AttachmentType.IMAGE else None,
            "location": (
                {"latitude": self.latitude, "longitude": self.longitude}
                if self.kind == AttachmentType.LOCATION
                else None
            ),
            "document_url": self.url if self.kind == AttachmentType.DOCUMENT else None,
        }
