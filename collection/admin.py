"""
Admin configuration for saved artworks.
"""

from django.contrib import admin

from .models import UserArtwork


@admin.register(UserArtwork)
class UserArtworkAdmin(admin.ModelAdmin):
    """
    Admin interface for `UserArtwork`.

    Features
    --------
    - Lists the owner, artwork id, title and artist.
    - Searchable by title, artist, artwork id and owner email.
    - Filterable by period and save date.
    """

    list_display = ["id", "user", "artwork_id", "title", "artist", "created_at"]
    list_display_links = ["id", "artwork_id"]
    list_filter = ["period", "created_at"]
    list_select_related = ["user"]
    search_fields = ["title", "artist", "artwork_id", "user__email"]
    autocomplete_fields = ["user"]
    readonly_fields = ["created_at", "updated_at"]
    ordering = ["-created_at"]
