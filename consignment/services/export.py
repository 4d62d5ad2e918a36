import csv
import io
from typing import Iterable

from consignment.models.client import Client
from consignment.models.product import Product
from consignment.services.reconciliation import client_balance, clients_holding

CLIENT_HEADERS = ["Name", "Code", "Address", "Phone", "Total Balance", "Products"]
PRODUCT_HEADERS = ["Code", "Name", "Price", "Inventory", "Clients"]
BALANCE_HEADERS = ["Name", "Code", "Total Balance", "Products"]


def _held_summary(client: Client) -> str:
    return "; ".join(f"{entry.name} ({entry.quantity})" for entry in client.products)


def _render(headers: list[str], rows: Iterable[list]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def clients_csv(clients: Iterable[Client]) -> str:
    return _render(CLIENT_HEADERS, (
        [
            client.name,
            client.code,
            client.address,
            client.phone,
            f"{client_balance(client):.2f}",
            _held_summary(client),
        ]
        for client in clients
    ))


def balances_csv(clients: Iterable[Client]) -> str:
    return _render(BALANCE_HEADERS, (
        [client.name, client.code, f"{client_balance(client):.2f}", _held_summary(client)]
        for client in clients
    ))


def products_csv(products: Iterable[Product], clients: list[Client]) -> str:
    """Catalog export, listing for each product the clients that hold it."""
    return _render(PRODUCT_HEADERS, (
        [
            product.code,
            product.name,
            f"{product.price:.2f}",
            product.inventory,
            "; ".join(client.name for client in clients_holding(clients, product.id)),
        ]
        for product in products
    ))
