import logging
import math
from typing import Iterable

from consignment.models.product import Product
from consignment.utils.ids import id_sequence

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = "$€£"


def clean_price(raw: str) -> float:
    """
    Turn a spreadsheet price cell into a float.

    Strips a leading currency symbol and thousands separators. Empty or
    unparseable cells become 0.
    """
    if not raw:
        return 0.0

    cleaned = raw.strip().lstrip(CURRENCY_SYMBOLS).replace(",", "").strip()
    try:
        price = float(cleaned)
    except ValueError:
        return 0.0

    if not math.isfinite(price) or price < 0:
        return 0.0
    return price


def parse_inventory(raw: str) -> int:
    try:
        inventory = int(raw)
    except (TypeError, ValueError):
        return 0
    return max(0, inventory)


def parse_products(data: str, existing_ids: Iterable[int] = ()) -> list[Product]:
    """
    Parse tab-separated product rows pasted from a spreadsheet.

    Each line holds ``code, name, inventory, price``; extra trailing
    columns are ignored. Lines with fewer than three columns or with an
    empty code or name are skipped.

    Args:
        data: Raw pasted text
        existing_ids: Ids already used in the catalog

    Returns:
        New products, one per valid line, with fresh ids
    """
    ids = id_sequence(existing_ids)
    products = []

    for line in data.splitlines():
        parts = [part.strip() for part in line.split("\t")]
        if len(parts) < 3:
            continue

        code, name, inventory = parts[:3]
        price = parts[3] if len(parts) > 3 else ""

        if not code or not name:
            continue

        products.append(Product(
            id=next(ids),
            code=code,
            name=name,
            inventory=parse_inventory(inventory),
            price=clean_price(price),
        ))

    logger.debug(f"Parsed {len(products)} products from {len(data.splitlines())} lines")
    return products
