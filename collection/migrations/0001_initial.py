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
            name="UserArtwork",
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
                ("artwork_id", models.CharField(max_length=64, verbose_name="artwork id")),
                (
                    "title",
                    models.CharField(
                        blank=True, max_length=255, null=True, verbose_name="title"
                    ),
                ),
                (
                    "artist",
                    models.CharField(
                        blank=True, max_length=255, null=True, verbose_name="artist"
                    ),
                ),
                (
                    "period",
                    models.CharField(
                        blank=True, max_length=100, null=True, verbose_name="period"
                    ),
                ),
                (
                    "image_url",
                    models.CharField(
                        blank=True, max_length=500, null=True, verbose_name="image url"
                    ),
                ),
                (
                    "description",
                    models.TextField(blank=True, null=True, verbose_name="description"),
                ),
                ("notes", models.TextField(blank=True, null=True, verbose_name="notes")),
                (
                    "created_at",
                    models.DateTimeField(auto_now_add=True, verbose_name="created_at"),
                ),
                (
                    "updated_at",
                    models.DateTimeField(auto_now=True, verbose_name="updated_at"),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="artworks",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="user",
                    ),
                ),
            ],
            options={
                "verbose_name": "Saved artwork",
                "verbose_name_plural": "Saved artworks",
                "db_table": "user_artworks",
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "artwork_id"), name="unique_user_artwork"
                    )
                ],
            },
        ),
    ]
