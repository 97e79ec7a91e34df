"""
Factory for saved artworks.

Example:
    >>> item = UserArtworkFactory(user=user, artist="Vincent van Gogh")
    >>> item.user == user
    True
"""

import factory

from accounts.factories import UserFactory

from .models import UserArtwork


class UserArtworkFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = UserArtwork

    user = factory.SubFactory(UserFactory)
    artwork_id = factory.Sequence(lambda n: str(430000 + n))
    title = factory.Faker("sentence", nb_words=4)
    artist = factory.Faker("name")
    period = "19th century"
    image_url = factory.LazyAttribute(
        lambda o: f"https://images.metmuseum.org/CRDImages/{o.artwork_id}.jpg"
    )
    description = factory.Faker("paragraph")
