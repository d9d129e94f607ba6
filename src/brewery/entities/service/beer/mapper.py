"""Beer mapper."""

from src.brewery.entities.service.beer.dto import BeerDTO
from src.brewery.entities.service.beer.table import BeerTable


class BeerMapper:
    """Stateless field-for-field converter between BeerDTO and BeerTable."""

    def beer_dto_to_beer(self, beer_dto: BeerDTO) -> BeerTable:
        return BeerTable(
            id=beer_dto.id,
            beer_name=beer_dto.beer_name,
            beer_style=beer_dto.beer_style,
            price=beer_dto.price,
            upc=beer_dto.upc,
            quantity_on_hand=beer_dto.quantity_on_hand,
            created_at=beer_dto.created_at,
            updated_at=beer_dto.updated_at,
        )

    def beer_to_beer_dto(self, beer: BeerTable) -> BeerDTO:
        return BeerDTO.model_validate(beer, from_attributes=True)
