"""Beer repository."""

from collections.abc import AsyncIterator

from sqlmodel import select

from src.brewery.entities._repository import EntityRepository
from src.brewery.entities.service.beer.table import BeerTable


class BeerRepository(EntityRepository[BeerTable]):
    """Data-access layer for beers."""

    model = BeerTable

    async def find_first_by_beer_name(self, beer_name: str) -> BeerTable | None:
        statement = select(BeerTable).where(BeerTable.beer_name == beer_name).limit(1)
        result = await self._session.exec(statement)
        return result.first()

    async def find_by_beer_style(self, beer_style: str) -> AsyncIterator[BeerTable]:
        result = await self._session.exec(
            select(BeerTable).where(BeerTable.beer_style == beer_style)
        )
        for row in result:
            yield row
