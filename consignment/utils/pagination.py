import math


def paginate(records: list, page: int, page_size: int) -> tuple[list, int, int]:
    """
    Slice one page out of an in-memory listing.

    Returns:
        Tuple of (page items, total count, total pages)
    """
    total = len(records)
    total_pages = math.ceil(total / page_size) if total > 0 else 1
    offset = (page - 1) * page_size
    return records[offset:offset + page_size], total, total_pages
