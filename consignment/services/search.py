import enum
from typing import Callable, Iterable, Protocol, TypeVar

from consignment.models.client import Client
from consignment.models.product import Product
from consignment.services.reconciliation import client_balance


class ClientFilter(str, enum.Enum):
    """Filter tags available on client listings."""
    HAS_BALANCE = "has_balance"
    NO_BALANCE = "no_balance"


class ProductFilter(str, enum.Enum):
    """Filter tags available on product listings."""
    IN_STOCK = "in_stock"
    OUT_OF_STOCK = "out_of_stock"


CLIENT_PREDICATES: dict[ClientFilter, Callable[[Client], bool]] = {
    ClientFilter.HAS_BALANCE: lambda client: client_balance(client) > 0,
    ClientFilter.NO_BALANCE: lambda client: client_balance(client) == 0,
}

PRODUCT_PREDICATES: dict[ProductFilter, Callable[[Product], bool]] = {
    ProductFilter.IN_STOCK: lambda product: product.inventory > 0,
    ProductFilter.OUT_OF_STOCK: lambda product: product.inventory == 0,
}


class Searchable(Protocol):
    name: str
    code: str


T = TypeVar("T", bound=Searchable)


def matches_term(record: Searchable, term: str) -> bool:
    needle = term.lower()
    return needle in record.name.lower() or needle in record.code.lower()


def apply_search(
    records: Iterable[T],
    term: str,
    active_filters: Iterable,
    predicates: dict
) -> list[T]:
    """
    Select records matching a search term and a set of filter tags.

    The term is a case-insensitive substring of name or code. Active filters
    are OR-ed with each other and AND-ed with the term; with no active filter
    only the term applies.
    """
    term = term or ""
    checks = [predicates[tag] for tag in set(active_filters or ())]

    return [
        record for record in records
        if matches_term(record, term)
        and (not checks or any(check(record) for check in checks))
    ]


def search_clients(clients: Iterable[Client], term: str = "", filters: Iterable[ClientFilter] = ()) -> list[Client]:
    return apply_search(clients, term, filters, CLIENT_PREDICATES)


def search_products(products: Iterable[Product], term: str = "", filters: Iterable[ProductFilter] = ()) -> list[Product]:
    return apply_search(products, term, filters, PRODUCT_PREDICATES)
