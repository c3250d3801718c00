"""Tests for the ownership resolver and the resource gateway."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from worldbuilder.models import Battle, Book, MagicSystem, Plot, Series, User
from worldbuilder.services import (
    BATTLES,
    MissingOwnerError,
    OwnerAxis,
    OwnerNotFoundError,
    OwnershipResolver,
    ResourceForbiddenError,
    ResourceGateway,
    ResourceService,
)
from worldbuilder.services.gateway import BookGateway, SeriesGateway
from worldbuilder.services.kinds import MAGIC_SYSTEMS, PLOTS


async def seed(session: AsyncSession) -> dict[str, int]:
    """Two users; alice owns two series and a book, bob owns one series.

    The battle sits in alice's first series and is linked to her book.
    """
    alice = User(username="alice", email="alice@example.com", hashed_password="x")
    bob = User(username="bob", email="bob@example.com", hashed_password="x")
    saga = Series(name="Saga", user=alice)
    other = Series(name="Other", user=alice)
    bobs = Series(name="Bob's", user=bob)
    book = Book(name="Book One", user=alice, series=saga)
    battle = Battle(name="Battle of X", series=saga, books=[book])
    session.add_all([alice, bob, saga, other, bobs, book, battle])
    await session.commit()
    return {
        "alice": alice.id,
        "bob": bob.id,
        "saga": saga.id,
        "other": other.id,
        "bobs": bobs.id,
        "book": book.id,
        "battle": battle.id,
    }


def resolver(session: AsyncSession) -> OwnershipResolver:
    return OwnershipResolver(SeriesGateway(session), BookGateway(session))


class TestResolveOwnerForCreate:
    """Test owner lookup for new resources."""

    @pytest.mark.asyncio
    async def test_requires_an_owner_param(self, session: AsyncSession) -> None:
        ids = await seed(session)
        with pytest.raises(MissingOwnerError) as exc_info:
            await resolver(session).resolve_owner_for_create("battle", ids["alice"])
        assert exc_info.value.message == (
            "At least one of seriesId or bookId query param must be passed."
        )

    @pytest.mark.asyncio
    async def test_returns_both_owners(self, session: AsyncSession) -> None:
        ids = await seed(session)
        owners = await resolver(session).resolve_owner_for_create(
            "battle", ids["alice"], ids["saga"], ids["book"]
        )
        assert owners.series.id == ids["saga"]
        assert owners.book.id == ids["book"]

    @pytest.mark.asyncio
    async def test_one_owner_found_is_enough(self, session: AsyncSession) -> None:
        """Test a foreign series is ignored when the book is the caller's."""
        ids = await seed(session)
        owners = await resolver(session).resolve_owner_for_create(
            "battle", ids["alice"], ids["bobs"], ids["book"]
        )
        assert owners.series is None
        assert owners.book.id == ids["book"]

    @pytest.mark.asyncio
    async def test_no_owner_found(self, session: AsyncSession) -> None:
        ids = await seed(session)
        with pytest.raises(OwnerNotFoundError) as exc_info:
            await resolver(session).resolve_owner_for_create(
                MAGIC_SYSTEMS.label, ids["alice"], series_id=ids["bobs"]
            )
        assert exc_info.value.message == (
            "A magic system must be created belonging to one of your series or books."
        )


class TestResolveOwnerForAccess:
    """Test resource lookup through a supplied owner."""

    @pytest.mark.asyncio
    async def test_series_match(self, session: AsyncSession) -> None:
        ids = await seed(session)
        match = await resolver(session).resolve_owner_for_access(
            ResourceGateway(session, Battle), ids["battle"], ids["alice"], series_id=ids["saga"]
        )
        assert match.resource.name == "Battle of X"
        assert match.axis is OwnerAxis.SERIES

    @pytest.mark.asyncio
    async def test_book_match(self, session: AsyncSession) -> None:
        ids = await seed(session)
        match = await resolver(session).resolve_owner_for_access(
            ResourceGateway(session, Battle), ids["battle"], ids["alice"], book_id=ids["book"]
        )
        assert match.axis is OwnerAxis.BOOK

    @pytest.mark.asyncio
    async def test_series_wins_when_both_match(self, session: AsyncSession) -> None:
        ids = await seed(session)
        match = await resolver(session).resolve_owner_for_access(
            ResourceGateway(session, Battle),
            ids["battle"],
            ids["alice"],
            series_id=ids["saga"],
            book_id=ids["book"],
        )
        assert match.axis is OwnerAxis.SERIES

    @pytest.mark.asyncio
    async def test_book_used_when_series_misses(self, session: AsyncSession) -> None:
        ids = await seed(session)
        match = await resolver(session).resolve_owner_for_access(
            ResourceGateway(session, Battle),
            ids["battle"],
            ids["alice"],
            series_id=ids["other"],
            book_id=ids["book"],
        )
        assert match.axis is OwnerAxis.BOOK

    @pytest.mark.asyncio
    async def test_wrong_series_is_forbidden(self, session: AsyncSession) -> None:
        ids = await seed(session)
        with pytest.raises(ResourceForbiddenError) as exc_info:
            await resolver(session).resolve_owner_for_access(
                ResourceGateway(session, Battle), ids["battle"], ids["alice"], series_id=ids["other"]
            )
        assert exc_info.value.message == "Forbidden account action."

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(self, session: AsyncSession) -> None:
        """Test the series id alone does not grant access to another user."""
        ids = await seed(session)
        with pytest.raises(ResourceForbiddenError):
            await resolver(session).resolve_owner_for_access(
                ResourceGateway(session, Battle), ids["battle"], ids["bob"], series_id=ids["saga"]
            )

    @pytest.mark.asyncio
    async def test_requires_an_owner_param(self, session: AsyncSession) -> None:
        ids = await seed(session)
        with pytest.raises(MissingOwnerError):
            await resolver(session).resolve_owner_for_access(
                ResourceGateway(session, Battle), ids["battle"], ids["alice"]
            )

    @pytest.mark.asyncio
    async def test_with_relations(self, session: AsyncSession) -> None:
        ids = await seed(session)
        match = await resolver(session).resolve_owner_for_access(
            ResourceGateway(session, Battle),
            ids["battle"],
            ids["alice"],
            book_id=ids["book"],
            with_relations=True,
        )
        assert match.resource.series.id == ids["saga"]
        assert [book.id for book in match.resource.books] == [ids["book"]]


class TestResourceService:
    """Test the CRUD orchestrator directly."""

    @pytest.mark.asyncio
    async def test_create_links_both_owners(self, session: AsyncSession) -> None:
        ids = await seed(session)
        service = ResourceService(session, MAGIC_SYSTEMS)
        payload = MAGIC_SYSTEMS.create_schema(name="Runes", rules="Costs blood.")

        result = await service.create(ids["alice"], payload, ids["saga"], ids["book"])

        assert result.message == "Magic System created."
        assert result.data["rules"] == "Costs blood."
        by_book = await service.list(ids["alice"], book_id=ids["book"])
        assert [item["name"] for item in by_book.data] == ["Runes"]
        assert by_book.message == "Magic Systems by user id and book id fetched."

    @pytest.mark.asyncio
    async def test_list_prefers_series(self, session: AsyncSession) -> None:
        ids = await seed(session)
        result = await ResourceService(session, BATTLES).list(
            ids["alice"], series_id=ids["other"], book_id=ids["book"]
        )
        assert result.message == "Battles by user id and series id fetched."
        assert result.data == []

    @pytest.mark.asyncio
    async def test_update_keeps_unsent_fields(self, session: AsyncSession) -> None:
        ids = await seed(session)
        service = ResourceService(session, BATTLES)
        await service.update(
            ids["battle"],
            ids["alice"],
            BATTLES.fields_schema(description="Fought at dawn."),
            series_id=ids["saga"],
        )

        result = await service.update(
            ids["battle"],
            ids["alice"],
            BATTLES.fields_schema(name="Battle of Y"),
            series_id=ids["saga"],
        )

        assert result.data == {
            "id": ids["battle"],
            "name": "Battle of Y",
            "start": None,
            "end": None,
            "description": "Fought at dawn.",
        }

    @pytest.mark.asyncio
    async def test_delete(self, session: AsyncSession) -> None:
        ids = await seed(session)
        service = ResourceService(session, BATTLES)

        result = await service.delete(ids["battle"], ids["alice"], book_id=ids["book"])

        assert result.message == "Battle deleted."
        assert await session.get(Battle, ids["battle"]) is None
        with pytest.raises(ResourceForbiddenError):
            await service.get(ids["battle"], ids["alice"], series_id=ids["saga"])

    @pytest.mark.asyncio
    async def test_other_kinds_do_not_leak(self, session: AsyncSession) -> None:
        """Test a battle id is not reachable as a magic system."""
        ids = await seed(session)
        with pytest.raises(ResourceForbiddenError):
            await ResourceService(session, MAGIC_SYSTEMS).get(
                ids["battle"], ids["alice"], series_id=ids["saga"]
            )
        assert await session.get(MagicSystem, ids["battle"]) is None

    @pytest.mark.asyncio
    async def test_plot_is_linked_to_one_book(self, session: AsyncSession) -> None:
        ids = await seed(session)
        service = ResourceService(session, PLOTS)
        payload = PLOTS.create_schema(name="The Fall", order=2)

        result = await service.create(ids["alice"], payload, ids["saga"], ids["book"])

        plot = await session.get(Plot, result.data["id"])
        assert plot.series_id == ids["saga"]
        assert plot.book_id == ids["book"]
        fetched = await service.get(plot.id, ids["alice"], book_id=ids["book"])
        assert fetched.message == "Plot by id and book id fetched."
        assert fetched.data["order"] == 2
