from typing import Any, Dict, Optional

import httpx

from bountybot.errors import BountyServiceError
from bountybot.logger import get_logger
from bountybot import settings


logger = get_logger("bountybot.gibwork")


class GibWorkClient:
    """
    Client for the GibWork public task endpoint.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url or settings.GIBWORK_API_URL
        self._transport = transport

    async def submit_task(self, request: Dict[str, Any], credential: str) -> Dict[str, Any]:
        """
        POST a task and return the decoded response
        ({"taskId", "link", "addressToDepositFunds"}).

        Raises BountyServiceError with the response body on non-2xx.
        """
        headers = {
            "accept": "application/json",
            "content-type": "application/json",
            "x-api-key": credential,
        }

        logger.info("Submitting GibWork task: %s", request.get("title"))

        async with httpx.AsyncClient(transport=self._transport) as client:
            response = await client.post(self.url, headers=headers, json=request)

        if not response.is_success:
            error_text = response.text
            logger.error("GibWork API error: %s - %s", response.status_code, error_text)
            raise BountyServiceError(
                f"GibWork API returned status {response.status_code}: {error_text}",
                status=response.status_code,
                body=error_text,
            )

        return response.json()
