"""
Participant directory: principal id -> display identity.

The chat app never reads User rows directly. It asks the directory for the
name, role and avatar of a principal, which keeps identity storage
replaceable (another service, a cache) without touching messaging code.

Protocols:
    IdentityDirectory: Interface the chat services depend on

Implementations:
    ParticipantDirectory: Backed by authentication.User

Usage:
    from authentication.directory import ParticipantDirectory

    identity = ParticipantDirectory.resolve_identity(user_id)
    identity.name, identity.role, identity.avatar
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from core.exceptions import NotFoundError

from authentication.models import User

if TYPE_CHECKING:
    from collections.abc import Iterable

PARTICIPANT_NOT_FOUND = "PARTICIPANT_NOT_FOUND"


@dataclass(frozen=True)
class Identity:
    """Display identity of a principal."""

    principal_id: int
    name: str
    role: str
    avatar: str

    @classmethod
    def from_user(cls, user: User) -> Identity:
        return cls(
            principal_id=user.pk,
            name=user.get_full_name(),
            role=user.role,
            avatar=user.avatar or "",
        )


@runtime_checkable
class IdentityDirectory(Protocol):
    """
    Protocol for identity lookups.

    Both methods raise NotFoundError (error_code PARTICIPANT_NOT_FOUND) for
    principals that do not exist or are deactivated.
    """

    def resolve_identity(self, principal_id: int) -> Identity:
        ...

    def resolve_many(self, principal_ids: Iterable[int]) -> dict[int, Identity]:
        ...


class ParticipantDirectory:
    """Directory backed by the local User table."""

    @classmethod
    def _active_users(cls):
        return User.objects.filter(is_active=True)

    @classmethod
    def resolve_identity(cls, principal_id: int) -> Identity:
        """
        Resolve a single principal.

        Raises:
            NotFoundError: If the principal is unknown or inactive
        """
        try:
            user = cls._active_users().get(pk=principal_id)
        except (User.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(
                "Participant not found",
                error_code=PARTICIPANT_NOT_FOUND,
                details={"principal_id": principal_id},
            )
        return Identity.from_user(user)

    @classmethod
    def resolve_many(cls, principal_ids: Iterable[int]) -> dict[int, Identity]:
        """
        Resolve several principals with one query.

        Raises:
            NotFoundError: If any requested principal is unknown or inactive
        """
        wanted = set(principal_ids)
        found = {
            user.pk: Identity.from_user(user)
            for user in cls._active_users().filter(pk__in=wanted)
        }
        missing = wanted - found.keys()
        if missing:
            raise NotFoundError(
                "Participant not found",
                error_code=PARTICIPANT_NOT_FOUND,
                details={"principal_ids": sorted(missing)},
            )
        return found
