"""
Art Collection API Views
========================

This module exposes a member's saved artworks through Django REST
Framework. Items are addressed by the museum's object id (`artwork_id`),
not by their database id, so clients can save, annotate and remove an
artwork straight from a museum search result.

Endpoints
---------
- GET    /api/collection/                       List saved artworks, newest first.
- POST   /api/collection/                       Save an artwork (409 if already saved).
- DELETE /api/collection/{artwork_id}/          Remove an artwork.
- POST   /api/collection/{artwork_id}/note/     Set or clear the private note.
- GET    /api/collection/{artwork_id}/check/    Whether the artwork is saved.

Listing supports search (title, artist, description), filtering through
`ArtworkFilter` and ordering by `created_at`, `title` or `artist`.

All endpoints require a logged-in, verified account (`IsVerifiedAccount`).
"""

import logging

from django.db import IntegrityError, transaction
from django.utils.translation import gettext_lazy as _
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import serializers, status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter, SearchFilter
from rest_framework.mixins import CreateModelMixin, ListModelMixin
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from accounts.permissions import IsVerifiedAccount

from .filter import ArtworkFilter
from .models import UserArtwork
from .serializers import ArtworkNoteSerializer, UserArtworkSerializer

logger = logging.getLogger(__name__)


@extend_schema(tags=["Collection"])
class ArtworkViewSet(ListModelMixin, CreateModelMixin, GenericViewSet):
    """
    Saved artworks of the current member.

    Permissions:
    - Only verified members can manage a collection, and only their own.

    Example Response (GET /api/collection/):
        [
            {
                "id": 7,
                "artwork_id": "436535",
                "title": "Wheat Field with Cypresses",
                "artist": "Vincent van Gogh",
                "notes": "Room 822",
                ...
            }
        ]
    """

    permission_classes = [IsVerifiedAccount]
    serializer_class = UserArtworkSerializer
    lookup_field = "artwork_id"
    lookup_value_regex = "[^/]+"

    filter_backends = [SearchFilter, DjangoFilterBackend, OrderingFilter]
    filterset_class = ArtworkFilter
    search_fields = ["title", "artist", "description"]
    ordering_fields = ["created_at", "title", "artist"]
    ordering = ["-created_at"]

    def get_queryset(self):
        return UserArtwork.objects.owned_by(self.request.user)

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["user"] = self.request.user
        return context

    def create(self, request, *args, **kwargs):
        """
        Save an artwork.

        Returns 201 with the saved item, or 409 if the member already
        saved this artwork.
        """

        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        artwork_id = serializer.validated_data["artwork_id"]

        duplicate = Response(
            {"detail": _("Artwork already in collection")},
            status=status.HTTP_409_CONFLICT,
        )
        if self.get_queryset().saved(artwork_id):
            return duplicate

        try:
            with transaction.atomic():
                serializer.save()
        except IntegrityError:
            # Saved concurrently by another request.
            return duplicate

        logger.info("User %s saved artwork %s", request.user.pk, artwork_id)
        return Response(
            {
                "detail": _("Artwork saved to collection"),
                "artwork": serializer.data,
            },
            status=status.HTTP_201_CREATED,
        )

    def destroy(self, request, artwork_id=None):
        deleted, _count = self.get_queryset().filter(artwork_id=artwork_id).delete()
        if not deleted:
            return Response(
                {"detail": _("Artwork not found")}, status=status.HTTP_404_NOT_FOUND
            )

        logger.info("User %s removed artwork %s", request.user.pk, artwork_id)
        return Response(
            {"detail": _("Artwork removed from collection")}, status=status.HTTP_200_OK
        )

    @extend_schema(request=ArtworkNoteSerializer, responses=UserArtworkSerializer)
    @action(detail=True, methods=["post"])
    def note(self, request, artwork_id=None):
        """Set the private note on a saved artwork (404 if it is not saved)."""

        serializer = ArtworkNoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        artwork = self.get_queryset().filter(artwork_id=artwork_id).first()
        if artwork is None:
            return Response(
                {"detail": _("Artwork not found")}, status=status.HTTP_404_NOT_FOUND
            )

        artwork.notes = serializer.validated_data.get("note")
        artwork.save(update_fields=["notes", "updated_at"])

        return Response(
            {
                "detail": _("Note updated successfully"),
                "artwork": UserArtworkSerializer(artwork).data,
            }
        )

    @extend_schema(
        responses=inline_serializer(
            name="ArtworkSaved", fields={"saved": serializers.BooleanField()}
        )
    )
    @action(detail=True, methods=["get"])
    def check(self, request, artwork_id=None):
        return Response({"saved": self.get_queryset().saved(artwork_id)})
