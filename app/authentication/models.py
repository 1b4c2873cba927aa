"""
Authentication models.

This module defines the principal model for the messaging platform:
- User: An authenticated principal (caregiver or client) with display identity

Related files:
    - managers.py: Email-based user creation
    - directory.py: Read-only identity lookup consumed by the chat app

Note:
    Credential issuance (passwords, access codes, tokens) is handled outside
    this project; the model only carries what other apps need to display a
    participant.
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from authentication.managers import UserManager


class Role(models.TextChoices):
    """
    Platform role of a principal.

    CAREGIVER: Staff member providing care
    CLIENT: Person receiving care (default for new accounts)
    """

    CAREGIVER = "caregiver", "Caregiver"
    CLIENT = "client", "Client"


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom user model using email as the login identifier.

    Fields:
        email: Unique login identifier
        name: Display name shown to the other participant
        role: Caregiver or client
        avatar: Optional avatar image URL
        is_active: Whether the account may authenticate
        is_staff: Whether the account may use the admin site
        date_joined: When the account was created
        updated_at: When the record was last modified
    """

    email = models.EmailField(
        unique=True,
        max_length=254,
        help_text="User's email address (login identifier)",
    )

    name = models.CharField(
        max_length=150,
        blank=True,
        default="",
        help_text="Display name",
    )

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CLIENT,
        db_index=True,
        help_text="Platform role (caregiver or client)",
    )

    avatar = models.URLField(
        max_length=2048,
        blank=True,
        default="",
        help_text="Avatar image URL",
    )

    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    def get_full_name(self):
        """Return the display name, falling back to the email address."""
        return self.name or self.email

    def get_short_name(self):
        """Return the first word of the name, or the email local part."""
        if self.name:
            return self.name.split()[0]
        return self.email.split("@")[0]
