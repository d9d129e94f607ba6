"""Customer transfer object."""

from pydantic import Field

from src.brewery.entities._base import EntityDTO


class CustomerDTO(EntityDTO):
    customer_name: str | None = Field(default=None, description="Customer name")
