from pydantic import BaseModel, Field, ConfigDict
from typing import Optional


class ProductBase(BaseModel):
    """Base schema for Product with common attributes."""
    code: str = Field(..., min_length=1, max_length=64, description="Product code")
    name: str = Field(..., min_length=2, max_length=255, description="Product name")
    price: float = Field(..., gt=0, description="Unit price (must be positive)")
    inventory: int = Field(..., ge=0, description="Units held by the shop (must be non-negative)")


class ProductCreate(ProductBase):
    """Schema for creating a new product."""
    pass


class ProductUpdate(BaseModel):
    """Schema for updating an existing product. All fields are optional."""
    code: Optional[str] = Field(None, min_length=1, max_length=64, description="Product code")
    name: Optional[str] = Field(None, min_length=2, max_length=255, description="Product name")
    price: Optional[float] = Field(None, gt=0, description="Unit price")
    inventory: Optional[int] = Field(None, ge=0, description="Units held by the shop")


class ProductResponse(BaseModel):
    """Schema for product response including the id."""
    id: int
    code: str
    name: str
    price: float
    inventory: int

    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    """Schema for paginated product list response."""
    items: list[ProductResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class ProductImportRequest(BaseModel):
    """Tab-separated rows pasted from a spreadsheet: code, name, inventory, price."""
    data: str = Field(..., description="One product per line, tab-separated columns")


class ProductImportResponse(BaseModel):
    """Schema for the result of a bulk import."""
    imported: int
    items: list[ProductResponse]
