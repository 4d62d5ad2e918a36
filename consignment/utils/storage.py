import json
import logging
from typing import Optional

import redis
from pydantic import TypeAdapter, ValidationError

from consignment.config import get_settings
from consignment.models.client import Client
from consignment.models.product import Product

logger = logging.getLogger(__name__)

settings = get_settings()

# Create Redis client
redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)

CLIENTS = "clients"
PRODUCTS = "products"

client_list = TypeAdapter(list[Client])
product_list = TypeAdapter(list[Product])
client_record = TypeAdapter(Client)
product_record = TypeAdapter(Product)


class StorageService:
    """
    Redis-backed store for the client registry and the product catalog.

    Each collection lives under a single key as a JSON array and is always
    read and written whole:
    - "<namespace>-clients" holds the clients with their held products
    - "<namespace>-products" holds the catalog

    Reads of missing or unparsable data give an empty collection. Records
    are validated one by one, so a single bad record is logged and dropped
    without losing the rest. Failed writes are logged and otherwise ignored.
    """

    def __init__(self, client: redis.Redis = None, namespace: str = None):
        self.client = client or redis_client
        self.namespace = namespace or settings.STORAGE_NAMESPACE

    def _make_key(self, collection: str) -> str:
        """Create a namespaced storage key."""
        return f"{self.namespace}-{collection}"

    def _load(self, collection: str, record: TypeAdapter) -> list:
        key = self._make_key(collection)
        try:
            raw: Optional[str] = self.client.get(key)
            if not raw:
                return []
            data = json.loads(raw)
        except (redis.RedisError, json.JSONDecodeError) as e:
            logger.error(f"Error loading {key}: {e}")
            return []

        if not isinstance(data, list):
            logger.error(f"Error loading {key}: expected a JSON array")
            return []

        records = []
        for position, item in enumerate(data):
            try:
                records.append(record.validate_python(item))
            except ValidationError as e:
                logger.error(f"Skipping record {position} of {key}: {e}")
        return records

    def _save(self, collection: str, adapter: TypeAdapter, records: list) -> bool:
        key = self._make_key(collection)
        try:
            self.client.set(key, adapter.dump_json(records, by_alias=True))
            return True
        except redis.RedisError as e:
            logger.error(f"Error saving {key}: {e}")
            return False

    def load_clients(self) -> list[Client]:
        return self._load(CLIENTS, client_record)

    def save_clients(self, clients: list[Client]) -> bool:
        return self._save(CLIENTS, client_list, clients)

    def load_products(self) -> list[Product]:
        return self._load(PRODUCTS, product_record)

    def save_products(self, products: list[Product]) -> bool:
        return self._save(PRODUCTS, product_list, products)

    def clear(self) -> None:
        """Remove both collections."""
        try:
            self.client.delete(self._make_key(CLIENTS), self._make_key(PRODUCTS))
        except redis.RedisError as e:
            logger.error(f"Error clearing storage: {e}")

    def ping(self) -> bool:
        return bool(self.client.ping())


def get_storage():
    """
    Dependency to get the storage service.
    """
    return StorageService()
