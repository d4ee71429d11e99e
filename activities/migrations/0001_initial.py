import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("businesses", "0001_initial"),
        ("categories", "0001_initial"),
        ("reviews", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Activity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("business_submitted", "business_submitted"),
                            ("business_created", "business_created"),
                            ("business_approved", "business_approved"),
                            ("business_rejected", "business_rejected"),
                            ("business_resubmitted", "business_resubmitted"),
                            ("business_updated", "business_updated"),
                            ("business_deleted", "business_deleted"),
                            ("business_featured", "business_featured"),
                            ("business_unfeatured", "business_unfeatured"),
                            ("business_claim_requested", "business_claim_requested"),
                            ("business_claimed", "business_claimed"),
                            ("review_submitted", "review_submitted"),
                            ("review_approved", "review_approved"),
                            ("review_deleted", "review_deleted"),
                            ("category_created", "category_created"),
                            ("category_updated", "category_updated"),
                            ("category_deleted", "category_deleted"),
                            ("user_registered", "user_registered"),
                            ("user_updated", "user_updated"),
                            ("user_deleted", "user_deleted"),
                            ("contact_submitted", "contact_submitted"),
                        ],
                        max_length=50,
                    ),
                ),
                ("description", models.TextField()),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "business",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="activities",
                        to="businesses.business",
                    ),
                ),
                (
                    "category",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="activities",
                        to="categories.category",
                    ),
                ),
                (
                    "review",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="activities",
                        to="reviews.review",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="activities",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "activities",
                "ordering": ("-created_at", "-id"),
            },
        ),
    ]
