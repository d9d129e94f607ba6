"""Customer mapper."""

from src.brewery.entities.service.customer.dto import CustomerDTO
from src.brewery.entities.service.customer.table import CustomerTable


class CustomerMapper:
    """Stateless field-for-field converter between CustomerDTO and CustomerTable."""

    def customer_dto_to_customer(self, customer_dto: CustomerDTO) -> CustomerTable:
        return CustomerTable(
            id=customer_dto.id,
            customer_name=customer_dto.customer_name,
            created_at=customer_dto.created_at,
            updated_at=customer_dto.updated_at,
        )

    def customer_to_customer_dto(self, customer: CustomerTable) -> CustomerDTO:
        return CustomerDTO.model_validate(customer, from_attributes=True)
