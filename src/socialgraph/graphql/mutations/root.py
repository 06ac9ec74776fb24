"""
Root GraphQL mutation definitions
"""

import dataclasses
from typing import Any

import strawberry

from ..scalars import UUID, MemberTypeId
from ..types.post import Post
from ..types.profile import Profile
from ..types.user import User


class PartialInput:
    """Mixin for inputs where every field is optional.

    An omitted field and an explicit null both leave the stored value unchanged;
    every updatable column is non-nullable.
    """

    def to_update_data(self) -> dict[str, Any]:
        """Return only the fields given a value in the request, keyed by column name."""
        data = {}
        for field in dataclasses.fields(self):  # type: ignore[arg-type]
            value = getattr(self, field.name)
            if value is not strawberry.UNSET and value is not None:
                data[field.name] = value
        return data


# Input types for mutations
@strawberry.input
class CreateUserInput:
    """Input for creating a new user."""

    name: str
    balance: float


@strawberry.input
class ChangeUserInput(PartialInput):
    """Input for updating a user."""

    name: str | None = strawberry.UNSET
    balance: float | None = strawberry.UNSET


@strawberry.input
class CreateProfileInput:
    """Input for creating a profile."""

    is_male: bool
    year_of_birth: int
    user_id: UUID
    member_type_id: MemberTypeId


@strawberry.input
class ChangeProfileInput(PartialInput):
    """Input for updating a profile."""

    is_male: bool | None = strawberry.UNSET
    year_of_birth: int | None = strawberry.UNSET
    member_type_id: MemberTypeId | None = strawberry.UNSET


@strawberry.input
class CreatePostInput:
    """Input for creating a new post."""

    title: str
    content: str
    author_id: UUID


@strawberry.input
class ChangePostInput(PartialInput):
    """Input for updating a post."""

    title: str | None = strawberry.UNSET
    content: str | None = strawberry.UNSET


@strawberry.type
class Mutation:
    """Root GraphQL mutation type.

    Persistence failures propagate out of the resolvers. Every field is nullable,
    so a failed mutation resolves to null with an entry in ``errors`` while the
    other mutations of the same request still run.
    """

    # User mutations
    @strawberry.mutation(name="createUser")
    async def create_user(self, info: strawberry.Info, dto: CreateUserInput) -> User | None:
        """Create a new user."""
        from ..resolvers.user import create_user

        return await create_user(info, dto)

    @strawberry.mutation(name="changeUser")
    async def change_user(
        self, info: strawberry.Info, id: UUID, dto: ChangeUserInput
    ) -> User | None:
        """Update the given fields of a user."""
        from ..resolvers.user import change_user

        return await change_user(info, id, dto)

    @strawberry.mutation(name="subscribeTo")
    async def subscribe_to(
        self, info: strawberry.Info, user_id: UUID, author_id: UUID
    ) -> User | None:
        """Subscribe a user to an author; returns the subscribing user."""
        from ..resolvers.user import subscribe_to

        return await subscribe_to(info, user_id, author_id)

    # Profile mutations
    @strawberry.mutation(name="createProfile")
    async def create_profile(
        self, info: strawberry.Info, dto: CreateProfileInput
    ) -> Profile | None:
        """Create a profile for an existing user."""
        from ..resolvers.profile import create_profile

        return await create_profile(info, dto)

    @strawberry.mutation(name="changeProfile")
    async def change_profile(
        self, info: strawberry.Info, id: UUID, dto: ChangeProfileInput
    ) -> Profile | None:
        """Update the given fields of a profile."""
        from ..resolvers.profile import change_profile

        return await change_profile(info, id, dto)

    # Post mutations
    @strawberry.mutation(name="createPost")
    async def create_post(self, info: strawberry.Info, dto: CreatePostInput) -> Post | None:
        """Create a new post."""
        from ..resolvers.post import create_post

        return await create_post(info, dto)

    @strawberry.mutation(name="changePost")
    async def change_post(
        self, info: strawberry.Info, id: UUID, dto: ChangePostInput
    ) -> Post | None:
        """Update the given fields of a post."""
        from ..resolvers.post import change_post

        return await change_post(info, id, dto)
