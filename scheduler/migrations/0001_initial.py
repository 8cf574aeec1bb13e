import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Deck",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("category", models.CharField(blank=True, default="", max_length=100)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("last_studied", models.DateTimeField(blank=True, null=True)),
                ("study_count", models.PositiveIntegerField(default=0)),
            ],
        ),
        migrations.CreateModel(
            name="Card",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("front", models.TextField()),
                ("back", models.TextField()),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("interval", models.PositiveIntegerField(default=0)),
                ("ease_factor", models.FloatField(default=2.5)),
                ("review_count", models.PositiveIntegerField(default=0)),
                ("last_reviewed", models.DateTimeField(blank=True, null=True)),
                ("next_review", models.DateTimeField(blank=True, null=True)),
                (
                    "deck",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="cards",
                        to="scheduler.deck",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["deck", "next_review"], name="card_deck_next_review_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ReviewLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quality", models.SmallIntegerField()),
                ("idempotency_key", models.CharField(max_length=64)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("interval", models.PositiveIntegerField()),
                ("ease_factor", models.FloatField()),
                ("next_review_at", models.DateTimeField()),
                (
                    "card",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reviews",
                        to="scheduler.card",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["card", "created_at"], name="reviewlog_card_created_idx"),
                ],
                "unique_together": {("card", "idempotency_key")},
            },
        ),
        migrations.CreateModel(
            name="StudySession",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("date", models.DateTimeField(default=django.utils.timezone.now)),
                ("cards_studied", models.PositiveIntegerField()),
                ("correct_answers", models.PositiveIntegerField()),
                ("study_time_seconds", models.PositiveIntegerField()),
                (
                    "deck",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sessions",
                        to="scheduler.deck",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(fields=["deck", "date"], name="session_deck_date_idx"),
                ],
            },
        ),
    ]
