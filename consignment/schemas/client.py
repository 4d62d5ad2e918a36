from pydantic import BaseModel, Field, ConfigDict
from datetime import datetime
from typing import Optional

from consignment.models.client import Client
from consignment.services.reconciliation import client_balance


class ClientBase(BaseModel):
    """Base schema for Client contact details."""
    name: str = Field(..., min_length=2, max_length=255, description="Client name")
    code: str = Field(..., min_length=2, max_length=64, description="Client code")
    address: str = Field(..., min_length=5, max_length=255, description="Postal address")
    phone: str = Field(..., min_length=5, max_length=32, description="Contact phone")


class ClientCreate(ClientBase):
    """Schema for creating a new client."""
    pass


class ClientUpdate(BaseModel):
    """Schema for editing a client's details. Held products are not touched."""
    name: Optional[str] = Field(None, min_length=2, max_length=255, description="Client name")
    code: Optional[str] = Field(None, min_length=2, max_length=64, description="Client code")
    address: Optional[str] = Field(None, min_length=5, max_length=255, description="Postal address")
    phone: Optional[str] = Field(None, min_length=5, max_length=32, description="Contact phone")


class ConsignedProductResponse(BaseModel):
    """Schema for a product held by a client."""
    id: int
    code: str
    name: str
    price: float
    inventory: int
    quantity: int
    purchase_date: datetime

    model_config = ConfigDict(from_attributes=True)


class ClientResponse(BaseModel):
    """Schema for client response with held products and derived balance."""
    id: int
    name: str
    code: str
    address: str
    phone: str
    products: list[ConsignedProductResponse]
    balance: float

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_client(cls, client: Client) -> "ClientResponse":
        """Build the response for a client, adding its derived balance."""
        return cls(**client.model_dump(), balance=round(client_balance(client), 2))


class ClientListResponse(BaseModel):
    """Schema for paginated client list response."""
    items: list[ClientResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class ClientSummary(BaseModel):
    """Schema for a row of the balance overview."""
    id: int
    name: str
    code: str
    product_count: int
    balance: float


class BalanceListResponse(BaseModel):
    """Schema for the balance overview."""
    items: list[ClientSummary]
    total: int
    total_balance: float


class AttachProductRequest(BaseModel):
    """Schema for handing a catalog product to a client."""
    product_id: int = Field(..., description="ID of the catalog product")
    quantity: int = Field(default=1, ge=1, description="Units to hand over")


class AdjustQuantityRequest(BaseModel):
    """Schema for manually shifting a held quantity."""
    delta: int = Field(..., description="Signed change, floored at zero")
