from typing import Callable, Iterable, List, Optional
import logging

from consignment.models.client import Client
from consignment.schemas.client import ClientCreate, ClientUpdate
from consignment.services.product_service import ProductNotFoundError
from consignment.services.reconciliation import (
    adjust_quantity,
    attach_product,
    remove_product,
)
from consignment.services.search import ClientFilter, search_clients
from consignment.utils.ids import next_id
from consignment.utils.pagination import paginate
from consignment.utils.storage import StorageService

logger = logging.getLogger(__name__)


class ClientNotFoundError(Exception):
    """Exception raised when the requested client doesn't exist."""
    pass


class ClientService:
    """
    Service class for the client registry and consignment operations.

    Each operation loads the registry, applies one of the pure functions
    from the reconciliation module to the affected client and writes the
    whole registry back.
    """

    def __init__(self, storage: StorageService):
        self.storage = storage

    def create(self, client_data: ClientCreate) -> Client:
        """Create a new client holding no products."""
        clients = self.storage.load_clients()
        client = Client(
            id=next_id(c.id for c in clients),
            products=[],
            **client_data.model_dump()
        )
        self.storage.save_clients([*clients, client])
        logger.info(f"Client #{client.id} '{client.name}' created")
        return client

    def get_by_id(self, client_id: int) -> Optional[Client]:
        """Get a client by ID."""
        return next((c for c in self.storage.load_clients() if c.id == client_id), None)

    def get_all(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str = None,
        filters: Iterable[ClientFilter] = ()
    ) -> tuple[List[Client], int, int]:
        """
        Get paginated list of clients, in registry order.

        Args:
            page: Page number (1-indexed)
            page_size: Number of items per page
            search: Optional search term for client name or code
            filters: Active balance filters

        Returns:
            Tuple of (clients list, total count, total pages)
        """
        return paginate(self.search(search, filters), page, page_size)

    def search(self, search: str = None, filters: Iterable[ClientFilter] = ()) -> List[Client]:
        return search_clients(self.storage.load_clients(), search or "", filters)

    def update(self, client_id: int, client_data: ClientUpdate) -> Client:
        """
        Edit a client's contact details.

        Raises:
            ClientNotFoundError: If client doesn't exist
        """
        update_data = {
            field: value
            for field, value in client_data.model_dump(exclude_unset=True).items()
            if value is not None
        }
        client = self._apply(client_id, lambda c: c.model_copy(update=update_data))
        logger.info(f"Client #{client_id} updated")
        return client

    def delete(self, client_id: int) -> None:
        """
        Delete a client along with everything it holds.

        Raises:
            ClientNotFoundError: If client doesn't exist
        """
        clients = self.storage.load_clients()
        remaining = [c for c in clients if c.id != client_id]

        if len(remaining) == len(clients):
            raise ClientNotFoundError(f"Client with ID {client_id} not found")

        self.storage.save_clients(remaining)
        logger.info(f"Client #{client_id} deleted")

    def attach_product(self, client_id: int, product_id: int, quantity: int) -> Client:
        """
        Hand a catalog product to a client.

        Merges into the client's existing entry when it already holds the
        product.

        Args:
            client_id: Receiving client
            product_id: Catalog product to hand over
            quantity: Units to add (validated by the request schema)

        Returns:
            Updated client

        Raises:
            ClientNotFoundError: If client doesn't exist
            ProductNotFoundError: If product isn't in the catalog
        """
        product = next((p for p in self.storage.load_products() if p.id == product_id), None)

        if not product:
            raise ProductNotFoundError(f"Product with ID {product_id} not found")

        client = self._apply(client_id, lambda c: attach_product(c, product, quantity))
        logger.info(f"Attached {quantity} x product #{product_id} to client #{client_id}")
        return client

    def adjust_quantity(self, client_id: int, product_id: int, delta: int) -> Client:
        """Shift a held quantity, floored at zero."""
        return self._apply(client_id, lambda c: adjust_quantity(c, product_id, delta))

    def remove_product(self, client_id: int, product_id: int) -> Client:
        """Drop a held product from a client."""
        client = self._apply(client_id, lambda c: remove_product(c, product_id))
        logger.info(f"Removed product #{product_id} from client #{client_id}")
        return client

    def _apply(self, client_id: int, change: Callable[[Client], Client]) -> Client:
        """Replace one client in the registry with change(client) and save."""
        clients = self.storage.load_clients()
        current = next((c for c in clients if c.id == client_id), None)

        if not current:
            raise ClientNotFoundError(f"Client with ID {client_id} not found")

        updated = change(current)
        self.storage.save_clients([updated if c.id == client_id else c for c in clients])
        return updated
