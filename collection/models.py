"""
Art Collection Models
=====================

This module defines the database model behind a member's personal art
collection: artworks from the Metropolitan Museum of Art open access API
that the member has saved, together with a private note.

Overview
--------

- **UserArtwork**:
  One saved artwork. The museum's object id is stored as `artwork_id`
  along with a snapshot of the display fields (title, artist, period,
  image, description) so the collection renders without calling the
  museum API again.

Features
--------

- An artwork can be saved at most once per member.
- Items are deleted together with their owner.
- Timestamps (`created_at`, `updated_at`) support newest-first listing.

Example::

    >>> from collection.models import UserArtwork
    >>> item = UserArtwork.objects.create(
    ...     user=user,
    ...     artwork_id="436535",
    ...     title="Wheat Field with Cypresses",
    ...     artist="Vincent van Gogh",
    ... )
    >>> str(item)
    'Wheat Field with Cypresses'
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from .managers import UserArtworkQuerySet


class UserArtwork(models.Model):
    """
    Represents an artwork saved to a member's collection.

    Fields
    ------
    artwork_id : str
        The museum's object id.
    title, artist, period : str
        Display snapshot taken when the artwork was saved.
    image_url : str
        URL of the primary image.
    description : str
        Free-text description.
    notes : str
        The member's private note (at most 1000 characters).
    created_at : datetime
        When the artwork was saved.
    updated_at : datetime
        When the item (usually its note) was last changed.

    Relationships
    -------------
    user : settings.AUTH_USER_MODEL
        The owner of the collection.

    Constraints
    -----------
    - An artwork can only appear once in a member's collection.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="artworks",
        verbose_name=_("user"),
    )
    artwork_id = models.CharField(max_length=64, verbose_name=_("artwork id"))
    title = models.CharField(max_length=255, blank=True, null=True, verbose_name=_("title"))
    artist = models.CharField(
        max_length=255, blank=True, null=True, verbose_name=_("artist")
    )
    period = models.CharField(max_length=100, blank=True, null=True, verbose_name=_("period"))
    image_url = models.CharField(
        max_length=500, blank=True, null=True, verbose_name=_("image url")
    )
    description = models.TextField(blank=True, null=True, verbose_name=_("description"))
    notes = models.TextField(blank=True, null=True, verbose_name=_("notes"))
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created_at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated_at"))

    objects = UserArtworkQuerySet.as_manager()

    class Meta:
        db_table = "user_artworks"
        verbose_name = _("Saved artwork")
        verbose_name_plural = _("Saved artworks")
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "artwork_id"], name="unique_user_artwork"
            )
        ]

    def __str__(self):
        return self.title or self.artwork_id
