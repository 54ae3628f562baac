from typing import Any, Dict

from bountybot.logger import get_logger
from bountybot.settings import (
    ISSUE_THANKS_MESSAGE,
    ORG_SETUP_INSTRUCTIONS,
    PERSONAL_SETUP_INSTRUCTIONS,
    SETUP_ISSUE_TITLE,
)


logger = get_logger("bountybot.commands.greet")


async def open_setup_issue(github, payload: Dict[str, Any]):
    """
    On a new installation, open an issue explaining how to set the API key
    in the first repository the app was granted.
    """
    account = (payload.get("installation") or {}).get("account") or {}
    owner = account.get("login")
    is_org = account.get("type") == "Organization"

    repositories = payload.get("repositories") or []
    if not repositories:
        logger.warning("Installation for %s has no repositories", owner)
        return

    repo = repositories[0].get("name")
    instructions = ORG_SETUP_INSTRUCTIONS if is_org else PERSONAL_SETUP_INSTRUCTIONS

    await github.create_issue(owner, repo, SETUP_ISSUE_TITLE, instructions)
    logger.info("Setup issue opened in %s/%s", owner, repo)


async def thank_issue_author(github, payload: Dict[str, Any]):
    issue = payload.get("issue") or {}
    body = issue.get("body") or ""

    # A /bounty in the issue body gets its own reply
    if "/bounty" in body:
        return

    repository = payload.get("repository") or {}
    owner = (repository.get("owner") or {}).get("login")
    repo = repository.get("name")
    number = issue.get("number")

    if not owner or not repo or number is None:
        return

    await github.create_comment(owner, repo, number, ISSUE_THANKS_MESSAGE)
