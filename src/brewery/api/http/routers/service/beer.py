"""Beer API router with CRUD operations."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from src.brewery.api.http.deps import get_beer_service
from src.brewery.core.services import BeerService
from src.brewery.entities.service.beer import BeerDTO

router = APIRouter(prefix="/beer", tags=["beer"])


def _not_found(beer_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Beer {beer_id} not found")


@router.get("", response_model=list[BeerDTO])
async def list_beers(
    beer_style: str | None = None,
    service: BeerService = Depends(get_beer_service),
) -> list[BeerDTO]:
    """List all beers, optionally only those of one style."""
    if beer_style:
        return [beer async for beer in service.find_by_beer_style(beer_style)]
    return [beer async for beer in service.list_beers()]


@router.get("/search", response_model=BeerDTO)
async def find_beer_by_name(
    beer_name: str,
    service: BeerService = Depends(get_beer_service),
) -> BeerDTO:
    """Get the first beer with the given name."""
    beer = await service.find_first_by_beer_name(beer_name)
    if beer is None:
        raise HTTPException(status_code=404, detail=f"No beer named {beer_name!r}")
    return beer


@router.get("/{beer_id}", response_model=BeerDTO)
async def get_beer(
    beer_id: str,
    service: BeerService = Depends(get_beer_service),
) -> BeerDTO:
    """Get a beer by ID."""
    beer = await service.get_by_id(beer_id)
    if beer is None:
        raise _not_found(beer_id)
    return beer


@router.post("", response_model=BeerDTO, status_code=status.HTTP_201_CREATED)
async def create_beer(
    beer: BeerDTO,
    request: Request,
    response: Response,
    service: BeerService = Depends(get_beer_service),
) -> BeerDTO:
    """Create a new beer."""
    created = await service.save_beer(beer)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{created.id}"
    return created


@router.put("/{beer_id}", response_model=BeerDTO)
async def update_beer(
    beer_id: str,
    beer: BeerDTO,
    service: BeerService = Depends(get_beer_service),
) -> BeerDTO:
    """Replace every mutable field of a beer."""
    updated = await service.update_beer(beer_id, beer)
    if updated is None:
        raise _not_found(beer_id)
    return updated


@router.patch("/{beer_id}", response_model=BeerDTO)
async def patch_beer(
    beer_id: str,
    beer: BeerDTO,
    service: BeerService = Depends(get_beer_service),
) -> BeerDTO:
    """Update only the fields present in the payload."""
    patched = await service.patch_beer(beer_id, beer)
    if patched is None:
        raise _not_found(beer_id)
    return patched


@router.delete("/{beer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_beer(
    beer_id: str,
    service: BeerService = Depends(get_beer_service),
) -> Response:
    """Delete a beer. Deleting an unknown ID also succeeds."""
    await service.delete_beer(beer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
