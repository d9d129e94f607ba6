"""Customer API router with CRUD operations."""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from src.brewery.api.http.deps import get_customer_service
from src.brewery.core.services import CustomerService
from src.brewery.entities.service.customer import CustomerDTO

router = APIRouter(prefix="/customer", tags=["customer"])


@router.get("", response_model=list[CustomerDTO])
async def list_customers(
    service: CustomerService = Depends(get_customer_service),
) -> list[CustomerDTO]:
    return [customer async for customer in service.list_customers()]


@router.get("/{customer_id}", response_model=CustomerDTO)
async def get_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerDTO:
    customer = await service.get_by_id(customer_id)
    if customer is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return customer


@router.post("", response_model=CustomerDTO, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer: CustomerDTO,
    request: Request,
    response: Response,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerDTO:
    created = await service.save_customer(customer)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{created.id}"
    return created


@router.put("/{customer_id}", response_model=CustomerDTO)
async def update_customer(
    customer_id: str,
    customer: CustomerDTO,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerDTO:
    updated = await service.update_customer(customer_id, customer)
    if updated is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return updated


@router.patch("/{customer_id}", response_model=CustomerDTO)
async def patch_customer(
    customer_id: str,
    customer: CustomerDTO,
    service: CustomerService = Depends(get_customer_service),
) -> CustomerDTO:
    patched = await service.patch_customer(customer_id, customer)
    if patched is None:
        raise HTTPException(status_code=404, detail="Customer not found")
    return patched


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: str,
    service: CustomerService = Depends(get_customer_service),
) -> Response:
    await service.delete_customer(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
