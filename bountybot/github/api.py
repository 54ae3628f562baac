import httpx
from typing import Any, Dict, Optional

from bountybot.errors import GitHubAPIError, GitHubNotFound
from bountybot.github.auth import get_installation_token
from bountybot.logger import get_logger
from bountybot import settings


logger = get_logger("bountybot.github.api")


class GitHubClient:
    """
    Thin async wrapper over the GitHub REST endpoints the bot needs,
    authenticated as one installation of the app.
    """

    def __init__(
        self,
        installation_id: Optional[int],
        transport: Optional[httpx.AsyncBaseTransport] = None,
        token: Optional[str] = None,
    ):
        self.installation_id = installation_id
        self._transport = transport
        self._token = token

    async def _headers(self) -> Dict[str, str]:
        token = self._token
        if token is None:
            token = await get_installation_token(self.installation_id, self._transport)
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/vnd.github+json",
        }

    async def _request(
        self,
        method: str,
        endpoint: str,
        json: Optional[dict] = None,
    ) -> Any:
        headers = await self._headers()
        url = f"{settings.GITHUB_API_URL}{endpoint}"

        async with httpx.AsyncClient(
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = await client.request(
                method,
                url,
                headers=headers,
                json=json,
            )

        status = response.status_code

        if status in (404, 410):
            logger.info("Not found (%s): %s %s", status, method, endpoint)
            raise GitHubNotFound(
                f"Resource not found: {endpoint}",
                status=status,
                body=response.text,
            )

        if status >= 400:
            logger.warning("GitHub API error %s for %s %s", status, method, endpoint)
            raise GitHubAPIError(
                f"GitHub API returned status {status} for {endpoint}",
                status=status,
                body=response.text,
            )

        if status == 204 or not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            logger.exception("Failed to decode JSON response from %s", endpoint)
            raise

    # =========================================================
    # Permission queries
    # =========================================================

    async def get_collaborator_permission(self, owner: str, repo: str, username: str) -> str:
        data = await self._request(
            "GET",
            f"/repos/{owner}/{repo}/collaborators/{username}/permission",
        )
        return (data or {}).get("permission", "none")

    async def check_org_membership(self, org: str, username: str) -> bool:
        """
        Succeeds (204) for members. Raises GitHubNotFound for non-members.

        GitHub answers 302 when the requester is not itself an org member;
        the redirect target then returns 404, which we treat the same way.
        """
        await self._request("GET", f"/orgs/{org}/members/{username}")
        return True

    # =========================================================
    # Issues and comments
    # =========================================================

    async def get_issue(self, owner: str, repo: str, number: int) -> Dict[str, Any]:
        data = await self._request("GET", f"/repos/{owner}/{repo}/issues/{number}")
        return {
            "title": data.get("title", ""),
            "body": data.get("body") or "",
        }

    async def list_repository_languages(self, owner: str, repo: str) -> Dict[str, Any]:
        return await self._request("GET", f"/repos/{owner}/{repo}/languages") or {}

    async def create_comment(self, owner: str, repo: str, issue_number: int, body: str):
        return await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/comments",
            {"body": body},
        )

    async def delete_comment(self, owner: str, repo: str, comment_id: int):
        await self._request(
            "DELETE",
            f"/repos/{owner}/{repo}/issues/comments/{comment_id}",
        )

    async def create_issue(self, owner: str, repo: str, title: str, body: str):
        return await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues",
            {"title": title, "body": body},
        )
