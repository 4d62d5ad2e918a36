from typing import Optional, List, Iterable
import logging

from consignment.models.client import Client
from consignment.models.product import Product
from consignment.schemas.product import ProductCreate, ProductUpdate
from consignment.services.product_import import parse_products
from consignment.services.reconciliation import clients_holding
from consignment.services.search import ProductFilter, search_products
from consignment.utils.ids import next_id
from consignment.utils.pagination import paginate
from consignment.utils.storage import StorageService

logger = logging.getLogger(__name__)


class ProductNotFoundError(Exception):
    """Exception raised when the requested product doesn't exist."""
    pass


class ProductService:
    """
    Service class for Product catalog operations.

    This service handles:
    - Creating, editing and deleting catalog products
    - Searching the catalog
    - Bulk import from pasted spreadsheet rows

    Every mutation rewrites the whole catalog in storage. Clients that
    already hold a product keep their own copy, so nothing here touches
    the client registry.
    """

    def __init__(self, storage: StorageService):
        self.storage = storage

    def create(self, product_data: ProductCreate) -> Product:
        """
        Create a new product at the end of the catalog.

        Args:
            product_data: Product creation data

        Returns:
            Created product
        """
        products = self.storage.load_products()
        product = Product(
            id=next_id(p.id for p in products),
            **product_data.model_dump()
        )
        self.storage.save_products([*products, product])
        logger.info(f"Product #{product.id} '{product.code}' created")
        return product

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """Get a product by ID."""
        return next((p for p in self.storage.load_products() if p.id == product_id), None)

    def get_all(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str = None,
        filters: Iterable[ProductFilter] = ()
    ) -> tuple[List[Product], int, int]:
        """
        Get paginated list of products, in catalog order.

        Args:
            page: Page number (1-indexed)
            page_size: Number of items per page
            search: Optional search term for product name or code
            filters: Active stock filters

        Returns:
            Tuple of (products list, total count, total pages)
        """
        products = self.search(search, filters)
        return paginate(products, page, page_size)

    def search(self, search: str = None, filters: Iterable[ProductFilter] = ()) -> List[Product]:
        return search_products(self.storage.load_products(), search or "", filters)

    def update(self, product_id: int, product_data: ProductUpdate) -> Product:
        """
        Update an existing product.

        Args:
            product_id: ID of product to update
            product_data: Update data (only non-None fields are updated)

        Returns:
            Updated product

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        products = self.storage.load_products()
        current = next((p for p in products if p.id == product_id), None)

        if not current:
            raise ProductNotFoundError(f"Product with ID {product_id} not found")

        # Update only provided fields
        update_data = {
            field: value
            for field, value in product_data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        updated = current.model_copy(update=update_data)

        self.storage.save_products([updated if p.id == product_id else p for p in products])
        logger.info(f"Product #{product_id} updated")
        return updated

    def delete(self, product_id: int) -> None:
        """
        Delete a product from the catalog.

        Copies already held by clients are left in place.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        products = self.storage.load_products()
        remaining = [p for p in products if p.id != product_id]

        if len(remaining) == len(products):
            raise ProductNotFoundError(f"Product with ID {product_id} not found")

        self.storage.save_products(remaining)
        logger.info(f"Product #{product_id} deleted")

    def import_products(self, data: str) -> List[Product]:
        """
        Append products parsed from tab-separated text to the catalog.

        Args:
            data: Pasted rows (code, name, inventory, price)

        Returns:
            The imported products; empty if no line was usable
        """
        products = self.storage.load_products()
        imported = parse_products(data, existing_ids=(p.id for p in products))

        if imported:
            self.storage.save_products([*products, *imported])
            logger.info(f"Imported {len(imported)} products")
        else:
            logger.info("Import found no valid product lines")

        return imported

    def holders(self, product_id: int) -> List[Client]:
        """
        Clients currently holding a product.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        if not self.get_by_id(product_id):
            raise ProductNotFoundError(f"Product with ID {product_id} not found")
        return clients_holding(self.storage.load_clients(), product_id)
