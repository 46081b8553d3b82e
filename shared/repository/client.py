"""
DCR Repository Client
=====================

Async client for the remote DCR graph repository API.

A relation listing is obtained in two steps: start a simulation of a graph
(the simulation id comes back in a response header), then fetch the
relations of that simulation. The listing body is a constraint document
accepted by the graph decoder.

Version: 0.1.0
"""

from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from shared.config import settings
from shared.config.settings import RepositorySettings
from shared.exceptions import RepositoryError
from shared.logging import get_logger


logger = get_logger(__name__)

_TRANSIENT_ERRORS = (httpx.ConnectError, httpx.TimeoutException)

# Failures raised before the request reached the server
_CONNECT_ERRORS = (httpx.ConnectError, httpx.ConnectTimeout)


class DCRRepositoryClient:
    """
    Authenticated client for the DCR graph repository.

    Example:
        >>> async with DCRRepositoryClient() as client:
        ...     sim_id, relations = await client.fetch_relations("12345")
    """

    def __init__(
        self,
        config: RepositorySettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the repository client.

        Args:
            config: Repository settings (default from settings)
            transport: Optional httpx transport, mainly for tests
        """
        self.config = config or settings.repository

        auth = None
        if self.config.has_credentials:
            auth = httpx.BasicAuth(
                self.config.username,
                self.config.password.get_secret_value(),
            )

        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            auth=auth,
            timeout=httpx.Timeout(self.config.timeout_seconds),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

        logger.debug(
            "repository_client_initialized",
            base_url=self.config.base_url,
            authenticated=auth is not None,
        )

    async def __aenter__(self) -> "DCRRepositoryClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        retry_on: tuple[type[Exception], ...] = _TRANSIENT_ERRORS,
    ) -> httpx.Response:
        """
        Make an HTTP request, retrying transient transport failures.

        Args:
            method: HTTP method
            url: Path relative to the repository base URL
            retry_on: Transport errors worth another attempt

        Raises:
            RepositoryError: On non-2xx responses or exhausted retries
        """
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(retry_on),
                stop=stop_after_attempt(self.config.max_retries),
                wait=wait_exponential(
                    multiplier=1,
                    min=self.config.retry_min_wait_seconds,
                    max=self.config.retry_max_wait_seconds,
                ),
                before_sleep=lambda retry_state: logger.warning(
                    "repository_retry",
                    url=url,
                    attempt=retry_state.attempt_number,
                ),
                reraise=True,
            ):
                with attempt:
                    response = await self._client.request(method, url)
        except _TRANSIENT_ERRORS as e:
            logger.error("repository_unreachable", url=url, error=str(e))
            raise RepositoryError(f"Repository request failed: {e}") from e

        if response.is_error:
            logger.warning(
                "repository_error_response",
                url=url,
                status=response.status_code,
            )
            raise RepositoryError(
                f"Repository returned {response.status_code} for {method} {url}",
                status_code=response.status_code,
            )

        return response

    async def get_simulation_id(self, graph_id: str) -> str:
        """
        Start a simulation of a graph.

        Args:
            graph_id: Repository graph identifier

        Returns:
            The new simulation identifier

        Raises:
            RepositoryError: If the request fails or the response carries
                no simulation id header
        """
        # Each POST that reaches the server starts a simulation
        response = await self._request(
            "POST",
            f"/api/graphs/{graph_id}/sims",
            retry_on=_CONNECT_ERRORS,
        )

        sim_id = response.headers.get(self.config.simulation_header)
        if not sim_id:
            raise RepositoryError(
                f"{self.config.simulation_header} header not found in the response"
            )

        logger.info("simulation_started", graph_id=graph_id, sim_id=sim_id)
        return sim_id

    async def get_relations(self, graph_id: str, sim_id: str) -> str:
        """
        Fetch the relation listing of a simulation.

        Args:
            graph_id: Repository graph identifier
            sim_id: Simulation identifier

        Returns:
            Constraint document text
        """
        response = await self._request(
            "GET",
            f"/api/graphs/{graph_id}/sims/{sim_id}/relations",
        )
        return response.text

    async def fetch_relations(self, graph_id: str) -> tuple[str, str]:
        """
        Start a simulation and fetch its relations.

        Returns:
            Tuple of (simulation id, constraint document text)
        """
        sim_id = await self.get_simulation_id(graph_id)
        relations = await self.get_relations(graph_id, sim_id)
        return sim_id, relations
