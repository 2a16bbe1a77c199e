"""Query helpers for repositories.

A bare `QuerySet.all()` is capped at the aggregate's default limit. Listings
and sweeps that must see every record page through the query instead.
"""

PAGE_SIZE = 100


def fetch_every(queryset, page_size: int = PAGE_SIZE) -> list:
    """Return every record matched by `queryset`, preserving its ordering."""
    records = []
    offset = 0
    while True:
        page = queryset.limit(page_size).offset(offset).all()
        records.extend(page.items)
        if not page.has_next or not page.items:
            return records
        offset += page_size
