"""
Initial chat schema: threads, participant pairs and messages.

Thread.last_message is added after Message exists because the two tables
reference each other.
"""

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Thread",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
            ],
            options={
                "db_table": "chat_thread",
                "ordering": ["-updated_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["-updated_at"],
                        name="chat_thread_updated_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "content",
                    models.TextField(
                        help_text="Message text (trimmed, never empty)",
                        max_length=10000,
                    ),
                ),
                (
                    "attachment_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("", "None"),
                            ("image", "Image"),
                            ("location", "Location"),
                            ("document", "Document"),
                        ],
                        default="",
                        help_text="Attachment kind (empty for plain text)",
                        max_length=10,
                    ),
                ),
                (
                    "attachment_url",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Image or document reference (URL or storage key)",
                        max_length=2048,
                    ),
                ),
                (
                    "latitude",
                    models.FloatField(
                        blank=True,
                        help_text="Latitude for location attachments",
                        null=True,
                    ),
                ),
                (
                    "longitude",
                    models.FloatField(
                        blank=True,
                        help_text="Longitude for location attachments",
                        null=True,
                    ),
                ),
                (
                    "is_read",
                    models.BooleanField(
                        default=False,
                        help_text="Whether the recipient has viewed this message",
                    ),
                ),
                (
                    "is_edited",
                    models.BooleanField(
                        default=False,
                        help_text="Whether the sender edited this message",
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        help_text="User who sent this message",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "thread",
                    models.ForeignKey(
                        help_text="Thread this message belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messages",
                        to="chat.thread",
                    ),
                ),
            ],
            options={
                "db_table": "chat_message",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["thread", "created_at", "id"],
                        name="chat_msg_thread_order_idx",
                    ),
                    models.Index(
                        condition=models.Q(("is_read", False)),
                        fields=["thread", "is_read"],
                        name="chat_msg_thread_unread_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(
                                attachment_type="",
                                attachment_url="",
                                latitude__isnull=True,
                                longitude__isnull=True,
                            )
                            | models.Q(
                                attachment_type__in=["image", "document"],
                                latitude__isnull=True,
                                longitude__isnull=True,
                            )
                            & ~models.Q(attachment_url="")
                            | models.Q(
                                attachment_type="location",
                                attachment_url="",
                                latitude__isnull=False,
                                longitude__isnull=False,
                            )
                        ),
                        name="chat_message_attachment_shape",
                    ),
                ],
            },
        ),
        migrations.AddField(
            model_name="thread",
            name="last_message",
            field=models.ForeignKey(
                blank=True,
                help_text="Most recent message in this thread (null if empty)",
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="chat.message",
            ),
        ),
        migrations.CreateModel(
            name="ThreadParticipantPair",
            fields=[
                (
                    "thread",
                    models.OneToOneField(
                        help_text="The thread this pair represents",
                        on_delete=django.db.models.deletion.CASCADE,
                        primary_key=True,
                        related_name="pair",
                        serialize=False,
                        to="chat.thread",
                    ),
                ),
                (
                    "user_higher",
                    models.ForeignKey(
                        help_text="User with higher ID in this thread pair",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "user_lower",
                    models.ForeignKey(
                        help_text="User with lower ID in this thread pair",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_thread_participant_pair",
                "indexes": [
                    models.Index(
                        fields=["user_higher"],
                        name="chat_thread_pair_higher_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user_lower", "user_higher"),
                        name="unique_thread_participant_pair",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("user_lower_id__lt", models.F("user_higher_id"))
                        ),
                        name="thread_pair_lower_less_than_higher",
                    ),
                ],
            },
        ),
    ]
