"""
Integration tests for the collection API.

The tests cover:
    - Access: anonymous callers get 401, unverified accounts 403.
    - Listing: only the caller's items, newest first, with filtering and search.
    - Saving: 201 with the stored item, 409 for a duplicate.
    - Notes: set, clear, length limit and 404 for unsaved artworks.
    - Removal and the saved check.
"""

from datetime import timedelta

import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from collection.factories import UserArtworkFactory
from collection.models import UserArtwork


def list_url():
    return reverse("collection-list")


def detail_url(artwork_id, name="collection-detail"):
    return reverse(name, kwargs={"artwork_id": artwork_id})


@pytest.fixture
def member(user_factory):
    return user_factory()


@pytest.fixture
def member_client(api_client, member):
    api_client.force_authenticate(member)
    return api_client


@pytest.mark.django_db
class TestAccess:
    def test_anonymous(self, api_client):
        response = api_client.get(list_url())

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_unverified(self, api_client, user_factory):
        api_client.force_authenticate(user_factory(unverified=True))

        response = api_client.post(list_url(), {"artwork_id": "436535"}, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["code"] == "verification_required"
        assert not UserArtwork.objects.exists()


@pytest.mark.django_db
class TestList:
    def test_only_own_items_newest_first(self, member_client, member):
        older = UserArtworkFactory(user=member)
        newer = UserArtworkFactory(user=member)
        UserArtwork.objects.filter(pk=older.pk).update(
            created_at=timezone.now() - timedelta(days=1)
        )
        UserArtworkFactory()

        response = member_client.get(list_url())

        assert response.status_code == status.HTTP_200_OK
        assert [item["id"] for item in response.data] == [newer.id, older.id]

    def test_filter_by_artist(self, member_client, member):
        UserArtworkFactory(user=member, artist="Vincent van Gogh")
        UserArtworkFactory(user=member, artist="Katsushika Hokusai")

        response = member_client.get(list_url(), {"artist": "gogh"})

        assert [item["artist"] for item in response.data] == ["Vincent van Gogh"]

    def test_search(self, member_client, member):
        UserArtworkFactory(
            user=member, title="The Great Wave", artist="Hokusai", description=""
        )
        UserArtworkFactory(
            user=member, title="Wheat Field with Cypresses", artist="Van Gogh", description=""
        )

        response = member_client.get(list_url(), {"search": "wave"})

        assert [item["title"] for item in response.data] == ["The Great Wave"]


@pytest.mark.django_db
class TestSave:
    payload = {
        "artwork_id": " 436535 ",
        "title": "Wheat Field with Cypresses",
        "artist": "Vincent van Gogh",
        "period": "1889",
        "image_url": "https://images.metmuseum.org/CRDImages/ep/original/DT1567.jpg",
    }

    def test_created(self, member_client, member):
        response = member_client.post(list_url(), self.payload, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["detail"] == "Artwork saved to collection"
        assert response.data["artwork"]["artwork_id"] == "436535"
        assert response.data["artwork"]["notes"] is None
        assert UserArtwork.objects.get(user=member).title == "Wheat Field with Cypresses"

    def test_duplicate(self, member_client, member):
        UserArtworkFactory(user=member, artwork_id="436535")

        response = member_client.post(list_url(), self.payload, format="json")

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data == {"detail": "Artwork already in collection"}
        assert UserArtwork.objects.filter(user=member).count() == 1

    def test_notes_cannot_be_set_on_save(self, member_client):
        response = member_client.post(
            list_url(), {**self.payload, "notes": "sneaky"}, format="json"
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["artwork"]["notes"] is None

    def test_artwork_id_required(self, member_client):
        response = member_client.post(list_url(), {"artwork_id": "  "}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "artwork_id" in response.data


@pytest.mark.django_db
class TestNote:
    def test_set_and_clear(self, member_client, member):
        UserArtworkFactory(user=member, artwork_id="436535")
        url = detail_url("436535", "collection-note")

        response = member_client.post(url, {"note": "Room 822"}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["detail"] == "Note updated successfully"
        assert response.data["artwork"]["notes"] == "Room 822"

        response = member_client.post(url, {"note": None}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert UserArtwork.objects.get(artwork_id="436535").notes is None

    def test_too_long(self, member_client, member):
        UserArtworkFactory(user=member, artwork_id="436535")

        response = member_client.post(
            detail_url("436535", "collection-note"), {"note": "x" * 1001}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_not_saved(self, member_client):
        UserArtworkFactory(artwork_id="436535")

        response = member_client.post(
            detail_url("436535", "collection-note"), {"note": "mine?"}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {"detail": "Artwork not found"}


@pytest.mark.django_db
class TestRemoveAndCheck:
    def test_remove(self, member_client, member):
        UserArtworkFactory(user=member, artwork_id="436535")

        response = member_client.delete(detail_url("436535"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"detail": "Artwork removed from collection"}
        assert not UserArtwork.objects.exists()

    def test_remove_other_members_item(self, member_client):
        UserArtworkFactory(artwork_id="436535")

        response = member_client.delete(detail_url("436535"))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert UserArtwork.objects.count() == 1

    def test_check(self, member_client, member):
        UserArtworkFactory(user=member, artwork_id="436535")

        saved = member_client.get(detail_url("436535", "collection-check"))
        unsaved = member_client.get(detail_url("11417", "collection-check"))

        assert saved.data == {"saved": True}
        assert unsaved.data == {"saved": False}
