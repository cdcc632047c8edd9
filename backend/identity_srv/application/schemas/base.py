"""Pydantic wire records shared by every paged listing."""

from pydantic import BaseModel, Field


class PageRequest(BaseModel):
    """Generic paged / searchable / sortable request.

    ``sort`` follows ``field[,ignored...]`` where a leading ``-`` means
    descending; only the first key is used.
    """

    page: int | None = Field(None, examples=[1])
    limit: int | None = Field(None, examples=[20])
    search: str | None = None
    sort: str | None = Field(None, examples=["-created_at"])
    filter: dict[str, str] | None = None
    fetch_all: bool | None = None


class PageResponse(BaseModel):
    total: int | None = None
    page: int | None = None
    limit: int | None = None
    total_pages: int | None = None
    has_next: bool | None = None
    has_prev: bool | None = None


class OperationStatusResponse(BaseModel):
    """Generic acknowledgement for operations without a payload."""

    success: bool = True
    message: str | None = None
