"""
Pagination link builder - absolute URLs for the adjacent result pages.
"""

from typing import Literal
from urllib.parse import urlencode

from app.schemas.search import QueryArguments, QueryParameters
from app.services.query_arguments import is_provided, query_pairs

Direction = Literal["next", "previous"]

# Copied verbatim from the original request when present
CARRIED_PARAMETERS = ("post_type", "category", "taxonomy", "fields")


class PaginationLinkBuilder:
    """Builds next/previous links. Callers decide whether a link applies; no clamping here."""

    def __init__(self, base_url: str):
        self.base_url = base_url

    def build_link(
        self,
        arguments: QueryArguments,
        parameters: QueryParameters,
        direction: Direction,
    ) -> str:
        step = 1 if direction == "next" else -1
        query: QueryParameters = {
            "posts_per_page": str(arguments.posts_per_page),
            "s": arguments.s or "",
            "paged": str(arguments.paged + step),
        }
        for key in CARRIED_PARAMETERS:
            if is_provided(parameters, key):
                query[key] = parameters[key]
        # array values keep their 'key[]' marker so the next request decodes them the same way
        return f"{self.base_url}?{urlencode(query_pairs(query), safe='[]')}"
