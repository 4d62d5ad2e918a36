"""
Pure operations over a client's consigned products.

Nothing here touches storage: every function takes the records it works on
and returns new records, leaving its inputs unchanged.
"""
import math
from datetime import datetime, timezone
from typing import Iterable, Optional

from consignment.models.client import Client
from consignment.models.product import ConsignedProduct, Product


def calculate_balance(products: Iterable[ConsignedProduct]) -> float:
    """
    Outstanding balance for a set of held products.

    Every entry counts, including those at quantity zero. math.fsum keeps
    the total independent of the order of the entries.
    """
    return math.fsum(entry.price * entry.quantity for entry in products)


def client_balance(client: Client) -> float:
    return calculate_balance(client.products)


def attach_product(
    client: Client,
    product: Product,
    quantity: int,
    now: Optional[datetime] = None
) -> Client:
    """
    Hand a product to a client.

    If the client already holds the product, the quantity is added to the
    existing entry and its purchase date refreshed. Otherwise a snapshot of
    the catalog product is appended to the client's holdings.

    The quantity is expected to be validated by the caller. Both the merged
    and the appended entry go through model validation, which floors the
    held quantity at zero.

    Args:
        client: Client receiving the product
        product: Catalog product to attach
        quantity: Units to add
        now: Purchase timestamp (defaults to the current UTC time)

    Returns:
        Updated client
    """
    now = now or datetime.now(timezone.utc)

    if client.holds(product.id):
        products = [
            entry.model_validate({
                **entry.model_dump(),
                "quantity": entry.quantity + quantity,
                "purchase_date": now,
            })
            if entry.id == product.id else entry
            for entry in client.products
        ]
    else:
        products = [
            *client.products,
            ConsignedProduct.from_product(product, quantity, now),
        ]

    return client.model_copy(update={"products": products})


def adjust_quantity(client: Client, product_id: int, delta: int) -> Client:
    """Shift a held quantity by delta, never below zero. No-op if not held."""
    if not client.holds(product_id):
        return client

    products = [
        entry.model_validate({**entry.model_dump(), "quantity": max(0, entry.quantity + delta)})
        if entry.id == product_id else entry
        for entry in client.products
    ]
    return client.model_copy(update={"products": products})


def remove_product(client: Client, product_id: int) -> Client:
    """Drop a held entry entirely. No-op if not held."""
    if not client.holds(product_id):
        return client
    products = [entry for entry in client.products if entry.id != product_id]
    return client.model_copy(update={"products": products})


def clients_holding(clients: Iterable[Client], product_id: int) -> list[Client]:
    return [client for client in clients if client.holds(product_id)]
