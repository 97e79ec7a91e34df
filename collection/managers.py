"""
Custom queryset for saved artworks.

Classes
-------
UserArtworkQuerySet
    Scopes queries to one member's collection and looks items up by the
    museum's object id.
"""

from django.db.models import QuerySet


class UserArtworkQuerySet(QuerySet):
    """
    Custom queryset for the `UserArtwork` model.

    Example
    -------
    >>> UserArtwork.objects.owned_by(user).saved("436535")
    True
    """

    def owned_by(self, user):
        """
        Restrict the queryset to `user`'s collection.

        Returns
        -------
        django.db.models.QuerySet
            The member's items.
        """
        return self.filter(user_id=user.pk)

    def saved(self, artwork_id):
        """Whether `artwork_id` is in the (already scoped) collection."""
        return self.filter(artwork_id=artwork_id).exists()
