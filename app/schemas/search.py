"""Search request/response schemas - typed query arguments, match records, terms."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal, NamedTuple, Union

from pydantic import BaseModel, Field

# Query parameters as decoded from the request: key -> value or list of values
QueryParameters = dict[str, Union[str, list[str]]]

NO_PARENT = 0


class TaxonomyFilter(BaseModel):
    taxonomy: str = "category"
    field: Literal["slug"] = "slug"
    terms: str | list[str]


class QueryArguments(BaseModel):
    """Arguments handed to the search executor."""

    posts_per_page: int = 10
    paged: int = 1
    post_type: list[str] = Field(default_factory=lambda: ["any"])
    s: str | None = None
    tax_query: list[TaxonomyFilter] = Field(default_factory=list)

    @property
    def taxonomy_filter(self) -> TaxonomyFilter | None:
        return self.tax_query[0] if self.tax_query else None


class MatchRecord(BaseModel):
    """One ranked hit from the search backend."""

    id: int
    title: str = ""
    slug: str = ""
    content: str = ""
    excerpt: str = ""
    date: datetime | None = None
    modified: datetime | None = None
    post_type: str = "post"
    relevance_score: float = 0.0


class SearchResult(NamedTuple):
    matches: list[MatchRecord]
    total: int
    pages: int


class TaxonomyTerm(BaseModel):
    """Term with its parent either NO_PARENT, an unresolved id, or the parent term itself."""

    id: int
    name: str
    slug: str
    taxonomy: str
    parent: Union[int, TaxonomyTerm] = NO_PARENT

    model_config = {"from_attributes": True}


class SearchOutcome(NamedTuple):
    body: dict[str, Any]
    status_code: int
