"""Search service: query construction, HTTP exchange and response interpretation."""

from __future__ import annotations

import httpx
from pydantic import ValidationError

from nixsearch.config import NixSearchSettings, get_settings
from nixsearch.domain.models import SearchRequest, SearchResponse, SearchResult
from nixsearch.logging import logger
from nixsearch.services.exceptions import (
    BackendReportedError,
    BackendUnexpectedError,
    ChannelNotFoundError,
    MalformedResponseError,
)
from nixsearch.services.query import build_search_request
from nixsearch.services.transport import HttpExecutor

INDEX_NOT_FOUND = "index_not_found_exception"


def _body_text(body: str | bytes) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def interpret_response(
    request: SearchRequest, status_code: int, body: str | bytes
) -> SearchResult:
    """Turn a raw backend response into a :class:`SearchResult`.

    The body must always be the JSON envelope, whatever the status. Only the
    ``index_not_found_exception`` error kind is reported separately, because it
    almost always means the channel name is wrong.

    Raises:
        MalformedResponseError: body is not JSON or not shaped like the envelope.
        ChannelNotFoundError: the channel's index does not exist.
        BackendReportedError: any other structured backend error.
        BackendUnexpectedError: non-success status without an error object.
    """

    try:
        envelope = SearchResponse.model_validate_json(body)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"unexpected response from search backend (status={status_code}): {exc}",
            status_code=status_code,
        ) from exc

    if status_code != httpx.codes.OK:
        error = envelope.error
        if error is None:
            raise BackendUnexpectedError(status_code, _body_text(body))
        if error.type == INDEX_NOT_FOUND:
            raise ChannelNotFoundError(status_code, request.channel, error.resource_id)
        raise BackendReportedError(
            status_code,
            error.reason,
            kind=error.type,
            resource_type=error.resource_type,
            resource_id=error.resource_id,
        )

    return SearchResult(
        request=request,
        packages=[hit.package for hit in envelope.hits.hits],
    )


class NixSearchService:
    """Query the search.nixos.org package index for one channel at a time."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: NixSearchSettings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._executor = HttpExecutor(http_client, self._settings.backend)

    def _auth(self) -> httpx.BasicAuth:
        backend = self._settings.backend
        return httpx.BasicAuth(backend.username, backend.password.get_secret_value())

    async def search(self, channel: str, query: str) -> SearchResult:
        return await self.execute(SearchRequest(channel=channel, query=query))

    async def execute(self, request: SearchRequest) -> SearchResult:
        prepared = build_search_request(request, self._settings.backend)
        logger.debug("search_request_sent", channel=request.channel, url=prepared.url)

        response = await self._executor.send(
            "POST",
            prepared.url,
            content=prepared.content,
            headers=prepared.headers,
            auth=self._auth(),
        )
        result = interpret_response(request, response.status_code, response.content)

        logger.info(
            "search_completed",
            channel=request.channel,
            query=request.query,
            packages=len(result.packages),
        )
        return result


async def search(
    channel: str, query: str, *, settings: NixSearchSettings | None = None
) -> SearchResult:
    """Run a single search with a short-lived HTTP client."""

    async with httpx.AsyncClient() as client:
        return await NixSearchService(client, settings=settings).search(channel, query)


__all__ = ["INDEX_NOT_FOUND", "NixSearchService", "interpret_response", "search"]
