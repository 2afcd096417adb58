"""Build the Elasticsearch request sent to the search.nixos.org backend."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from nixsearch.config import BackendSettings
from nixsearch.domain.models import SearchRequest
from nixsearch.services.exceptions import QueryEncodingError

PAGE_SIZE = 50
FACET_SIZE = 20
TIE_BREAKER = 0.7

# Field boosts mirror the search.nixos.org frontend so results rank identically.
MULTI_MATCH_FIELDS = (
    "package_attr_name^9",
    "package_attr_name.*^5.3999999999999995",
    "package_programs^9",
    "package_programs.*^5.3999999999999995",
    "package_pname^6",
    "package_pname.*^3.5999999999999996",
    "package_description^1.3",
    "package_description.*^0.78",
    "package_longDescription^1",
    "package_longDescription.*^0.6",
    "flake_name^0.5",
    "flake_name.*^0.3",
)

FACET_FIELDS = (
    "package_attr_set",
    "package_license_set",
    "package_maintainers_set",
    "package_platforms",
)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


@dataclass(slots=True)
class PreparedSearch:
    url: str
    content: str
    headers: dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))


def format_url(channel: str, settings: BackendSettings | None = None) -> str:
    """Return the ``_search`` endpoint of the index serving ``channel``."""

    settings = settings or BackendSettings()
    base_url = str(settings.base_url).rstrip("/")
    segment = quote(channel, safe="", errors="surrogatepass")
    return f"{base_url}/{settings.index_prefix}-{segment}/_search"


def match_name(query: str) -> str:
    return "multi_match_" + query.replace(" ", "_")


def wildcard_value(query: str) -> str:
    return f"*{query}*"


def _terms(field_name: str) -> dict[str, Any]:
    return {"terms": {"field": field_name, "size": FACET_SIZE}}


def build_payload(query: str, name: str, wildcard: str) -> dict[str, Any]:
    """Return a new request body with the three query slots filled in."""

    return {
        "from": 0,
        "size": PAGE_SIZE,
        "sort": [
            {
                "_score": "desc",
                "package_attr_name": "desc",
                "package_pversion": "desc",
            }
        ],
        "aggs": {
            **{facet: _terms(facet) for facet in FACET_FIELDS},
            "all": {
                "global": {},
                "aggregations": {facet: _terms(facet) for facet in FACET_FIELDS},
            },
        },
        "query": {
            "bool": {
                "filter": [
                    {
                        "term": {
                            "type": {
                                "value": "package",
                                "_name": "filter_packages",
                            }
                        }
                    },
                    {
                        "bool": {
                            "must": [{"bool": {"should": []}} for _ in FACET_FIELDS],
                        }
                    },
                ],
                "must": [
                    {
                        "dis_max": {
                            "tie_breaker": TIE_BREAKER,
                            "queries": [
                                {
                                    "multi_match": {
                                        "type": "cross_fields",
                                        "query": query,
                                        "analyzer": "whitespace",
                                        "auto_generate_synonyms_phrase_query": False,
                                        "operator": "and",
                                        "_name": name,
                                        "fields": list(MULTI_MATCH_FIELDS),
                                    }
                                },
                                {
                                    "wildcard": {
                                        "package_attr_name": {
                                            "value": wildcard,
                                            "case_insensitive": True,
                                        }
                                    }
                                },
                            ],
                        }
                    }
                ],
            }
        },
    }


def encode_payload(query: str) -> str:
    """Serialize the request body for ``query``.

    Raises:
        QueryEncodingError: if ``query`` is not text or cannot be encoded.
    """

    if not isinstance(query, str):
        raise QueryEncodingError(f"failed to encode query: expected str, got {type(query).__name__}")
    payload = build_payload(query, match_name(query), wildcard_value(query))
    try:
        return json.dumps(payload)
    except (TypeError, ValueError) as exc:
        raise QueryEncodingError(f"failed to encode query: {exc}") from exc


def build_search_request(
    request: SearchRequest, settings: BackendSettings | None = None
) -> PreparedSearch:
    return PreparedSearch(
        url=format_url(request.channel, settings),
        content=encode_payload(request.query),
    )


__all__ = [
    "JSON_HEADERS",
    "PAGE_SIZE",
    "PreparedSearch",
    "build_payload",
    "build_search_request",
    "encode_payload",
    "format_url",
    "match_name",
    "wildcard_value",
]
