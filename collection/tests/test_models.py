import pytest
from django.db.utils import IntegrityError

from collection.factories import UserArtworkFactory
from collection.models import UserArtwork


@pytest.mark.django_db
class TestUserArtwork:
    def test_str(self):
        item = UserArtworkFactory(artwork_id="436535", title="Wheat Field with Cypresses")
        untitled = UserArtworkFactory(artwork_id="11417", title=None)

        assert str(item) == "Wheat Field with Cypresses"
        assert str(untitled) == "11417"

    def test_unique_per_user(self, user_factory):
        user = user_factory()
        UserArtworkFactory(user=user, artwork_id="436535")

        with pytest.raises(IntegrityError):
            UserArtworkFactory(user=user, artwork_id="436535")

    def test_same_artwork_for_different_users(self):
        UserArtworkFactory(artwork_id="436535")
        UserArtworkFactory(artwork_id="436535")

        assert UserArtwork.objects.filter(artwork_id="436535").count() == 2

    def test_owned_by_and_saved(self, user_factory):
        owner, other = user_factory(), user_factory()
        item = UserArtworkFactory(user=owner, artwork_id="436535")
        UserArtworkFactory(user=other, artwork_id="11417")

        owned = UserArtwork.objects.owned_by(owner)

        assert list(owned) == [item]
        assert owned.saved("436535") is True
        assert owned.saved("11417") is False

    def test_deleted_with_user(self, user_factory):
        user = user_factory()
        UserArtworkFactory.create_batch(2, user=user)

        user.delete()

        assert UserArtwork.objects.count() == 0
