"""
Tests for the optional batched loaders
"""

import asyncio

import pytest

from socialgraph.graphql.loaders import Loaders


@pytest.fixture
def loaders(session_factory):
    return Loaders(session_factory)


@pytest.mark.integration
class TestLoaders:
    @pytest.mark.asyncio
    async def test_users_preserve_key_order_and_missing(self, loaders, create_user):
        ann = await create_user(name="Ann")
        bob = await create_user(name="Bob")

        rows = await loaders.user_loader.load_many([bob["id"], "missing", ann["id"]])

        assert [row.name if row else None for row in rows] == ["Bob", None, "Ann"]

    @pytest.mark.asyncio
    async def test_member_types(self, loaders):
        rows = await loaders.member_type_loader.load_many(["business", "basic"])

        assert [row.posts_limit_per_month for row in rows] == [100, 20]

    @pytest.mark.asyncio
    async def test_concurrent_loads_are_batched(self, loaders, gql, create_user):
        ann = await create_user(name="Ann")
        bob = await create_user(name="Bob")
        for author, title in ((ann, "a1"), (bob, "b1"), (ann, "a2")):
            await gql(
                "mutation P($dto: CreatePostInput!) { createPost(dto: $dto) { id } }",
                {"dto": {"title": title, "content": "x", "authorId": author["id"]}},
            )

        ann_posts, bob_posts, nobody = await asyncio.gather(
            loaders.posts_by_author_loader.load(ann["id"]),
            loaders.posts_by_author_loader.load(bob["id"]),
            loaders.posts_by_author_loader.load("missing"),
        )

        assert [p.title for p in ann_posts] == ["a1", "a2"]
        assert [p.title for p in bob_posts] == ["b1"]
        assert nobody == []

    @pytest.mark.asyncio
    async def test_profiles_by_user(self, loaders, gql, create_user):
        ann = await create_user(name="Ann")
        await gql(
            "mutation P($dto: CreateProfileInput!) { createProfile(dto: $dto) { id } }",
            {
                "dto": {
                    "userId": ann["id"],
                    "memberTypeId": "basic",
                    "isMale": False,
                    "yearOfBirth": 2001,
                }
            },
        )

        profile, missing = await loaders.profile_by_user_loader.load_many([ann["id"], "nobody"])

        assert profile.year_of_birth == 2001
        assert missing is None
