"""HTTP executor with retries for transient failures."""

from __future__ import annotations

from typing import Any

import httpx

from nixsearch.config import BackendSettings
from nixsearch.logging import logger
from nixsearch.services.exceptions import TransportError
from nixsearch.utils.retry import retry_async

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class _RetryableStatus(Exception):
    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"transient status {response.status_code}")
        self.response = response


class HttpExecutor:
    """Send a single request, retrying connection errors and transient statuses.

    Once the retry budget is spent, a transient status is handed back as a normal
    response so the caller can interpret the body; a transport failure becomes
    :class:`TransportError`.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: BackendSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or BackendSettings()

    async def send(
        self,
        method: str,
        url: str,
        *,
        content: str | bytes | None = None,
        headers: dict[str, str] | None = None,
        auth: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> httpx.Response:
        async def _request() -> httpx.Response:
            response = await self._client.request(
                method,
                url,
                content=content,
                headers=headers,
                auth=auth,
                timeout=self._settings.request_timeout_seconds,
            )
            if response.status_code in RETRYABLE_STATUS_CODES:
                raise _RetryableStatus(response)
            return response

        try:
            return await retry_async(
                _request,
                max_attempts=self._settings.max_retries + 1,
                base_delay=self._settings.retry_base_delay,
                retry_on=(httpx.RequestError, _RetryableStatus),
                logger=logger,
                operation_name="search_request",
            )
        except _RetryableStatus as exc:
            return exc.response
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc


__all__ = ["HttpExecutor", "RETRYABLE_STATUS_CODES"]
