import logging
from typing import Optional

import httpx

from freelanceflow.core.exceptions import UpstreamError
from freelanceflow.schemas.dashboard import DashboardStats

logger = logging.getLogger(__name__)


class RemoteAssistantClient:
    """
    Client for an external financial-assistant API.

    The API receives the question plus the user's dashboard figures and
    answers with ``{"reply": "..."}``. Any failure is raised as UpstreamError;
    no fallback answer is made up.
    """

    def __init__(
        self,
        api_url: Optional[str],
        api_key: Optional[str],
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    async def ask(self, message: str, stats: DashboardStats) -> str:
        if not self.api_url or not self.api_key:
            raise UpstreamError("Finance assistant API is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}"
        }
        data = {
            "message": message,
            "context": stats.model_dump(mode="json", by_alias=True),
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.api_url, headers=headers, json=data)
        except httpx.TimeoutException as e:
            logger.error(f"Finance assistant timed out after {self.timeout}s")
            raise UpstreamError("Finance assistant timed out") from e
        except httpx.HTTPError as e:
            logger.error(f"Error calling finance assistant: {e}")
            raise UpstreamError("Finance assistant is unreachable") from e

        if not response.is_success:
            logger.error(f"Finance assistant returned HTTP {response.status_code}")
            raise UpstreamError(f"Finance assistant returned HTTP {response.status_code}")

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError("Finance assistant returned invalid JSON") from e

        reply = body.get("reply") if isinstance(body, dict) else None
        if not isinstance(reply, str) or not reply.strip():
            raise UpstreamError("Finance assistant returned no reply")
        return reply
