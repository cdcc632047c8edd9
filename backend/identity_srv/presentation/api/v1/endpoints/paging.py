"""Query-string parameters shared by the listing endpoints."""

from fastapi import Query

from identity_srv.application.schemas import PageRequest
from identity_srv.domain.exceptions import InvalidArgumentError


def page_request(
    page: int | None = Query(None, description="1-based page number"),
    limit: int | None = Query(None, description="Page size"),
    search: str | None = Query(None),
    sort: str | None = Query(None, description="Field name, '-' prefix for descending"),
    filter: list[str] = Query(default=[], description="Repeatable key:value filter"),
    fetch_all: bool | None = Query(None),
) -> PageRequest:
    """Collect paging options from the query string into a PageRequest."""
    filters: dict[str, str] = {}
    for item in filter:
        key, sep, value = item.partition(":")
        if not sep or not key.strip():
            raise InvalidArgumentError(f"Malformed filter {item!r}; expected key:value")
        filters[key.strip()] = value
    return PageRequest(
        page=page,
        limit=limit,
        search=search,
        sort=sort,
        filter=filters or None,
        fetch_all=fetch_all,
    )
