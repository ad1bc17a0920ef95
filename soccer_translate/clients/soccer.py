# soccer_translate/clients/soccer.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from soccer_translate.errors import ClassificationError
from soccer_translate.utils.logger import setup_logger

logger = setup_logger(__name__)


class SoccerClient:
    """Async client for the SOCcer occupation coding endpoint.

    A call is a single ``GET <endpoint>?title=..&task=..&n=..``. The JSON body
    of a 2xx answer is returned unchanged. Non-2xx answers raise
    ``ClassificationError``; transport errors from httpx propagate as-is.
    """

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @staticmethod
    def build_params(
        title: Optional[str],
        task: Optional[str],
        code_length: int,
    ) -> Dict[str, Any]:
        """Build the query parameters, leaving out absent title/task."""
        params: Dict[str, Any] = {}
        if title is not None:
            params["title"] = title
        if task is not None:
            params["task"] = task
        params["n"] = code_length
        return params

    async def classify(
        self,
        title: Optional[str],
        task: Optional[str],
        code_length: int,
        endpoint: str,
    ) -> List[Any]:
        """Ask SOCcer for candidate codes for a job title and/or task.

        Args:
            title: Job title, already in the language SOCcer expects.
            task: Job task description.
            code_length: Value of the ``n`` query parameter.
            endpoint: Full URL of the SOCcer ``code`` endpoint.

        Returns:
            The parsed JSON response, normally a list of ``{code, ...}`` objects.

        Raises:
            ClassificationError: If SOCcer answers with a non-success status.
        """
        params = self.build_params(title, task, code_length)

        logger.info(
            "Calling SOCcer.",
            extra={"endpoint": endpoint, "n": code_length},
        )

        async with httpx.AsyncClient(
            timeout=self.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.get(
                endpoint,
                params=params,
                headers={"Accept": "application/json"},
            )

        if not response.is_success:
            logger.warning(
                "SOCcer request failed.",
                extra={"endpoint": endpoint, "status_code": response.status_code},
            )
            raise ClassificationError(response.status_code)

        return response.json()
