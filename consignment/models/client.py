from pydantic import BaseModel, ConfigDict, Field

from consignment.models.product import ConsignedProduct


class Client(BaseModel):
    """
    Client record together with the products it holds on consignment.

    Attributes:
        id: Unique identifier, generated at creation
        name: Client name
        code: Client code
        address: Postal address
        phone: Contact phone
        products: Held entries, in attach order, at most one per product id
    """
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    code: str
    address: str = ""
    phone: str = ""
    products: list[ConsignedProduct] = Field(default_factory=list)

    def holds(self, product_id: int) -> bool:
        return any(entry.id == product_id for entry in self.products)

    def __repr__(self):
        return f"<Client(id={self.id}, name='{self.name}', products={len(self.products)})>"
