"""
Serializers for the art collection API.

Classes
-------
UserArtworkSerializer
    Reads and creates saved artworks.
ArtworkNoteSerializer
    Validates the note update payload.
"""

from django.utils.translation import gettext_lazy as _
from rest_framework import serializers

from .models import UserArtwork


class UserArtworkSerializer(serializers.ModelSerializer):
    class Meta:
        model = UserArtwork
        fields = [
            "id",
            "artwork_id",
            "title",
            "artist",
            "period",
            "image_url",
            "description",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "notes", "created_at", "updated_at"]

    def validate_artwork_id(self, artwork_id):
        artwork_id = artwork_id.strip()
        if not artwork_id:
            raise serializers.ValidationError(_("This field may not be blank."))
        return artwork_id

    def create(self, validated_data):
        return UserArtwork.objects.create(user=self.context["user"], **validated_data)


class ArtworkNoteSerializer(serializers.Serializer):
    note = serializers.CharField(
        max_length=1000, allow_blank=True, allow_null=True, required=False
    )
