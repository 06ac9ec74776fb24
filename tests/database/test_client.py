"""
Tests for the repository client and seed data
"""

import pytest
from sqlalchemy import text

from socialgraph.database.client import (
    ConstraintViolationError,
    PersistenceError,
    RecordNotFoundError,
)
from socialgraph.database.seed_data import MEMBER_TYPE_SEED, ensure_member_types


@pytest.mark.integration
class TestRepository:
    @pytest.mark.asyncio
    async def test_create_assigns_id_and_find_unique(self, db):
        user = await db.user.create({"name": "Ann", "balance": 3.0})

        found = await db.user.find_unique(user.id)

        assert user.id
        assert found.name == "Ann"
        assert found.balance == 3.0

    @pytest.mark.asyncio
    async def test_find_many_filters_and_orders(self, db):
        ann = await db.user.create({"name": "Ann", "balance": 0.0})
        await db.user.create({"name": "Bob", "balance": 0.0})
        third = await db.user.create({"name": "Ann", "balance": 1.0})

        rows = await db.user.find_many(name="Ann")

        assert [row.id for row in rows] == [ann.id, third.id]

    @pytest.mark.asyncio
    async def test_find_first_returns_none(self, db):
        assert await db.profile.find_first(user_id="nobody") is None

    @pytest.mark.asyncio
    async def test_unknown_column_is_rejected(self, db):
        with pytest.raises(ValueError, match="has no column 'nickname'"):
            await db.user.find_many(nickname="x")
        with pytest.raises(ValueError):
            await db.user.create({"name": "Ann", "balance": 0.0, "nickname": "x"})

    @pytest.mark.asyncio
    async def test_update_missing_record(self, db):
        with pytest.raises(RecordNotFoundError, match="does not exist"):
            await db.post.update("missing", {"title": "x"})

    @pytest.mark.asyncio
    async def test_update_keeps_other_columns(self, db):
        user = await db.user.create({"name": "Ann", "balance": 7.0})

        updated = await db.user.update(user.id, {"name": "Anna"})

        assert updated.name == "Anna"
        assert (await db.user.find_unique(user.id)).balance == 7.0

    @pytest.mark.asyncio
    async def test_foreign_key_violation(self, db):
        with pytest.raises(ConstraintViolationError) as exc_info:
            await db.post.create({"title": "t", "content": "c", "author_id": "nobody"})

        assert isinstance(exc_info.value, PersistenceError)

    @pytest.mark.asyncio
    async def test_failed_write_leaves_no_row(self, db):
        with pytest.raises(ConstraintViolationError):
            await db.post.create({"title": "t", "content": "c", "author_id": "nobody"})

        assert await db.post.find_many() == []

    @pytest.mark.asyncio
    async def test_database_error_is_wrapped_without_statement(self, db, engine):
        async with engine.begin() as conn:
            await conn.execute(text("DROP TABLE posts"))

        with pytest.raises(PersistenceError) as exc_info:
            await db.post.find_many()

        assert not isinstance(exc_info.value, ConstraintViolationError)
        assert str(exc_info.value) == "Posts could not be read or written"

    @pytest.mark.asyncio
    async def test_rows_created_in_one_clock_tick_keep_insertion_order(self, db, monkeypatch):
        from datetime import UTC, datetime

        from socialgraph import dbmodels

        frozen = datetime(2024, 1, 1, tzinfo=UTC)

        class FrozenDatetime(datetime):
            @classmethod
            def now(cls, tz=None):
                return frozen

        monkeypatch.setattr(dbmodels, "datetime", FrozenDatetime)
        created = [
            await db.user.create({"name": f"user-{i}", "balance": 0.0}) for i in range(5)
        ]

        rows = await db.user.find_many()

        assert [row.id for row in rows] == [row.id for row in created]

    @pytest.mark.asyncio
    async def test_member_types_ordered_by_id(self, db):
        rows = await db.member_type.find_many()

        assert [row.id for row in rows] == ["basic", "business"]


@pytest.mark.integration
class TestSubscriptions:
    @pytest.mark.asyncio
    async def test_subscribe_and_both_directions(self, db):
        ann = await db.user.create({"name": "Ann", "balance": 0.0})
        bob = await db.user.create({"name": "Bob", "balance": 0.0})

        returned = await db.user.subscribe(ann.id, bob.id)

        assert returned.id == ann.id
        assert [u.id for u in await db.user.find_many(subscribed_by=ann.id)] == [bob.id]
        assert [u.id for u in await db.user.find_many(subscribers_of=bob.id)] == [ann.id]
        assert await db.user.find_many(subscribers_of=ann.id) == []

    @pytest.mark.asyncio
    async def test_subscribe_missing_subscriber(self, db):
        bob = await db.user.create({"name": "Bob", "balance": 0.0})

        with pytest.raises(RecordNotFoundError):
            await db.user.subscribe("nobody", bob.id)

    @pytest.mark.asyncio
    async def test_duplicate_subscription(self, db):
        ann = await db.user.create({"name": "Ann", "balance": 0.0})
        bob = await db.user.create({"name": "Bob", "balance": 0.0})
        await db.user.subscribe(ann.id, bob.id)

        with pytest.raises(ConstraintViolationError):
            await db.user.subscribe(ann.id, bob.id)


@pytest.mark.integration
class TestSeedData:
    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, session_factory, db):
        async with session_factory() as session:
            created = await ensure_member_types(session)

        assert created == []
        rows = await db.member_type.find_many()
        assert {row.id: row.discount for row in rows} == {
            key: values["discount"] for key, values in MEMBER_TYPE_SEED.items()
        }

    @pytest.mark.asyncio
    async def test_seed_creates_missing(self, engine):
        from socialgraph.database.connection import create_session_factory
        from socialgraph.dbmodels import MemberTypes

        factory = create_session_factory(engine)
        async with factory() as session:
            await ensure_member_types(session)
            row = await session.get(MemberTypes, "business")
            await session.delete(row)
            await session.commit()

        async with factory() as session:
            created = await ensure_member_types(session)

        assert created == ["business"]
