"""Factory Boy definition for :class:`app.models.user.User`."""

from __future__ import annotations

from app.core.security import hash_password
from app.models.user import User

import factory
from tests.factories import BaseFactory, FactorySession

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """
    Build persisted :class:`app.models.user.User` instances.

    Notes
    -----
    - Every user gets the same default password unless ``password=`` is given.
    - No refresh session exists until a login is performed.
    """

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    full_name = factory.Faker("name")
    avatar_url = factory.LazyAttribute(lambda o: f"https://media.test/youtubebackend/{o.username}.png")
    cover_image_url = ""
    password_hash = factory.LazyFunction(lambda: hash_password(DEFAULT_PASSWORD))

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set a custom password using the model setter (ensures hashing)."""
        if not extracted:
            return
        obj.password = extracted
        if create:
            FactorySession.get().commit()
