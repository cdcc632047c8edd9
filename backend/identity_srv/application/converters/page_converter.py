"""Translate paged wire requests into ``QueryOptions`` and page results back."""

from identity_srv.application.schemas.base import PageRequest, PageResponse
from identity_srv.domain.entities.page import DEFAULT_LIMIT, DEFAULT_PAGE, PageResult, QueryOptions


def page_request_to_query_options(request: PageRequest | None) -> QueryOptions:
    """Normalize a possibly-absent paged request.

    ``page`` and ``limit`` are carried verbatim; range checks belong to the
    repositories. Only the first sort key is honoured.
    """
    options = QueryOptions()
    if request is None:
        return options

    options.with_page(request.page, request.limit)

    if request.search is not None and request.search != "":
        options.with_search(request.search.strip())

    if request.sort is not None and request.sort != "":
        first = request.sort.strip().split(",")[0].strip()
        if first.startswith("-"):
            options.with_order(first[1:], True)
        else:
            options.with_order(first, False)

    for key, value in (request.filter or {}).items():
        trimmed = value.strip()
        if trimmed:
            options.with_filter(key, trimmed)

    if request.fetch_all:
        options.with_fetch_all(True)

    return options


def page_result_to_response(result: PageResult | None) -> PageResponse:
    if result is None:
        return PageResponse(
            total=0,
            page=DEFAULT_PAGE,
            limit=DEFAULT_LIMIT,
            total_pages=0,
            has_next=False,
            has_prev=False,
        )
    return PageResponse(
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
        has_next=result.has_next,
        has_prev=result.has_prev,
    )
