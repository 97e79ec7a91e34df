"""
Custom filters for saved artworks.

This module defines a `django-filter` filter set that lets API consumers
narrow a collection by artist or period, e.g.
``?artist=van%20gogh&period=19th%20century``. It integrates with Django REST
Framework through `django_filters.rest_framework.DjangoFilterBackend`.

Classes
-------
ArtworkFilter
    Provides filtering options for `UserArtwork` objects.
"""

from django_filters.rest_framework import FilterSet, filters

from .models import UserArtwork


class ArtworkFilter(FilterSet):
    """
    FilterSet for the `UserArtwork` model.

    Filters
    -------
    artist : CharFilter
        Case-insensitive substring match on the artist name.
    period : CharFilter
        Case-insensitive substring match on the period.
    saved_after : DateTimeFilter
        Items saved at or after the given time.

    Example
    -------
    >>> from collection.filter import ArtworkFilter
    >>> f = ArtworkFilter({"artist": "gogh"}, queryset=UserArtwork.objects.all())
    >>> qs = f.qs
    """

    artist = filters.CharFilter(field_name="artist", lookup_expr="icontains")
    period = filters.CharFilter(field_name="period", lookup_expr="icontains")
    saved_after = filters.DateTimeFilter(field_name="created_at", lookup_expr="gte")

    class Meta:
        model = UserArtwork
        fields = ["artist", "period", "saved_after"]
