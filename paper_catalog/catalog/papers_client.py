"""HTTP client for the papers list and metadata endpoints."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from paper_catalog.catalog.query_builder import RequestDescriptor
from paper_catalog.core.app_exceptions import ApplicationFailure, TransportFailure
from paper_catalog.core.config import settings
from paper_catalog.schemas.catalog import (
    CatalogMetadata,
    MetadataEnvelope,
    PaperListData,
    PaperListEnvelope,
)

logger = logging.getLogger(__name__)


class PapersClient:
    """
    Async client for the catalog REST API.

    Only this class performs I/O. Every failure is raised as either
    TransportFailure (network, timeout, non-2xx, unreadable body) or
    ApplicationFailure (``isSuccess: false`` or a payload that does not
    match the envelope schema).
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        metadata_path: str | None = None,
    ) -> None:
        self.base_url = (base_url if base_url is not None else settings.API_BASE_URL).rstrip("/")
        self.metadata_path = metadata_path if metadata_path is not None else settings.PAPERS_METADATA_PATH
        self._token = token if token is not None else settings.API_TOKEN
        self._client = httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> PapersClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def set_token(self, token: str | None) -> None:
        """Attach (or drop, with None) the session's bearer token."""
        self._token = token

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _get_json(
        self,
        path: str,
        params: tuple[tuple[str, str], ...] = (),
        what: str = "papers",
    ) -> Any:
        url = f"{self.base_url}/{path.strip('/')}"
        try:
            response = await self._client.get(url, params=list(params), headers=self._headers())
        except httpx.TimeoutException as e:
            raise TransportFailure(f"Timed out fetching {what}", details={"url": url}) from e
        except httpx.HTTPError as e:
            raise TransportFailure(f"Failed to fetch {what}: {e}", details={"url": url}) from e

        if not response.is_success:
            raise TransportFailure(
                f"Failed to fetch {what}: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportFailure(
                f"Failed to fetch {what}: response is not valid JSON",
                status_code=response.status_code,
            ) from e

    async def fetch_list(self, descriptor: RequestDescriptor) -> PaperListData:
        """
        GET one page of papers.

        Args:
            descriptor: Output of ``query_builder.build``.

        Returns:
            Parsed ``data`` member (items, pagination.total, optional facets).

        Raises:
            TransportFailure: on network errors, timeouts and non-2xx statuses.
            ApplicationFailure: on ``isSuccess: false`` or malformed envelopes.
        """
        payload = await self._get_json(descriptor.path, descriptor.params, what="papers")
        try:
            envelope = PaperListEnvelope.model_validate(payload)
        except ValidationError as e:
            raise ApplicationFailure(
                "Failed to fetch papers: malformed response",
                details=e.errors(include_url=False),
            ) from e

        if not envelope.is_success or envelope.data is None:
            raise ApplicationFailure(envelope.message or "Failed to fetch papers")

        logger.debug(
            "Fetched %d papers (total=%d) for %s",
            len(envelope.data.items),
            envelope.data.pagination.total,
            descriptor.query_string(),
        )
        return envelope.data

    async def fetch_metadata(self) -> CatalogMetadata:
        """
        GET the available facet values with their counts.

        Raises:
            TransportFailure: on network errors, timeouts and non-2xx statuses.
            ApplicationFailure: on ``isSuccess: false`` or malformed envelopes.
        """
        payload = await self._get_json(self.metadata_path, what="metadata")
        try:
            envelope = MetadataEnvelope.model_validate(payload)
        except ValidationError as e:
            raise ApplicationFailure(
                "Failed to fetch metadata: malformed response",
                details=e.errors(include_url=False),
            ) from e

        if not envelope.is_success or envelope.data is None:
            raise ApplicationFailure(envelope.message or "Failed to fetch metadata")
        return envelope.data
