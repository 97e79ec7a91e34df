"""
User factory for generating test users.

This module uses `factory_boy` to provide a `UserFactory` class that creates
`User` objects with realistic fake data and a hashed password.

Example:
    >>> user = UserFactory()
    >>> user.check_password(DEFAULT_PASSWORD)
    True

    >>> user = UserFactory(password="another-pass-1843", two_factor=True)
    >>> user.has_two_factor
    True
"""

import factory
from django.contrib.auth import get_user_model
from django.utils import timezone

# Get the currently active user model
User = get_user_model()

DEFAULT_PASSWORD = "difference-engine-1843"


class UserFactory(factory.django.DjangoModelFactory):
    """
    Factory for creating verified `User` instances.

    Traits:
        unverified: The address has not been proven yet.
        two_factor: Two-factor confirmation is on.

    Meta:
        model (User): The custom user model.
        skip_postgeneration_save (bool): Prevents double-saving the object
            when the password hook saves it.
    """

    class Meta:
        model = User
        skip_postgeneration_save = True

    email = factory.Sequence(lambda n: f"member{n}@example.com")
    name = factory.Faker("name")
    is_verified = True

    class Params:
        unverified = factory.Trait(is_verified=False)
        two_factor = factory.Trait(
            two_factor_enabled=True,
            two_factor_confirmed_at=factory.LazyFunction(timezone.now),
        )

    @factory.post_generation
    def password(self, create, extracted, **kwargs):
        """
        Hash and store `extracted`, or `DEFAULT_PASSWORD` when none is given.
        """

        if not create:
            return

        self.set_password(extracted or DEFAULT_PASSWORD)
        self.save()
