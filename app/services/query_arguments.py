"""
Query argument builder - request parameters to typed search arguments.
Challenge: Loose HTTP input (strings, arrays, junk numbers) never fails here;
every key resolves to a default or a coerced value.
"""

import re
from collections.abc import Iterable
from typing import Any

from app.schemas.search import QueryArguments, QueryParameters, TaxonomyFilter

LIST_KEYS = frozenset({"post_type", "fields"})
INT_KEYS = frozenset({"posts_per_page", "paged"})

_LIST_SEPARATOR = re.compile(r"[\s,]+")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_provided(parameters: QueryParameters, key: str) -> bool:
    """Present and non-empty. Absent and empty ("" or []) both mean 'use the default'."""
    value = parameters.get(key)
    if value is None:
        return False
    return len(value) > 0


def parse_list(value: Any) -> list[str]:
    """Comma/whitespace separated string or array input -> list of strings."""
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [piece for piece in _LIST_SEPARATOR.split(str(value)) if piece]


def parse_int(value: Any) -> int:
    """Leading-integer parse: '12abc' -> 12, 'abc' -> 0. Arrays use their first element."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else ""
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def coerce(key: str, value: Any) -> Any:
    """Per-key coercion; unknown keys pass through unchanged."""
    if key in LIST_KEYS:
        return parse_list(value)
    if key in INT_KEYS:
        return parse_int(value)
    return value


def query_parameters_from(items: Iterable[tuple[str, str]]) -> QueryParameters:
    """
    Decode raw query string pairs.
    'key[]=a' or a repeated key becomes a list; a key given once stays a string.
    """
    collected: dict[str, list[str]] = {}
    array_keys: set[str] = set()
    for raw_key, value in items:
        key = raw_key
        if raw_key.endswith("[]"):
            key = raw_key[:-2]
            array_keys.add(key)
        collected.setdefault(key, []).append(value)
    return {
        key: values if key in array_keys or len(values) > 1 else values[0]
        for key, values in collected.items()
    }


def query_pairs(parameters: QueryParameters) -> list[tuple[str, str]]:
    """
    Inverse of query_parameters_from: list values are written as 'key[]' pairs
    so a one-element list stays a list when decoded again.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in parameters.items():
        if isinstance(value, (list, tuple)):
            pairs.extend((f"{key}[]", str(v)) for v in value)
        else:
            pairs.append((key, str(value)))
    return pairs


class ArgumentBuilder:
    """Builds QueryArguments from request parameters. Stateless."""

    def __init__(self, default_posts_per_page: int = 10):
        self.defaults: dict[str, Any] = {
            "posts_per_page": default_posts_per_page,
            "paged": 1,
            "post_type": ["any"],
            "s": None,
        }

    def _argument(self, parameters: QueryParameters, key: str) -> Any:
        if is_provided(parameters, key):
            return coerce(key, parameters[key])
        return self.defaults[key]

    def build(self, parameters: QueryParameters) -> QueryArguments:
        search_term = self._argument(parameters, "s")
        if isinstance(search_term, list):
            search_term = " ".join(search_term)

        arguments = QueryArguments(
            posts_per_page=self._argument(parameters, "posts_per_page"),
            paged=self._argument(parameters, "paged"),
            post_type=list(self._argument(parameters, "post_type")),
            s=search_term,
        )

        # optional taxonomy filter
        if is_provided(parameters, "category"):
            taxonomy = parameters["taxonomy"] if is_provided(parameters, "taxonomy") else "category"
            if isinstance(taxonomy, list):
                taxonomy = taxonomy[0]
            arguments.tax_query.append(
                TaxonomyFilter(taxonomy=taxonomy, field="slug", terms=parameters["category"])
            )

        return arguments
