from typing import Any, Callable, Dict, Optional

from bountybot.cache.store import CredentialStore
from bountybot.commands.dispatcher import CommandDispatcher, handle_comment
from bountybot.commands.greet import open_setup_issue, thank_issue_author
from bountybot.github.api import GitHubClient
from bountybot.gibwork.client import GibWorkClient
from bountybot.logger import get_logger


logger = get_logger("bountybot.github.events")


def default_github_factory(installation_id: Optional[int]) -> GitHubClient:
    return GitHubClient(installation_id)


async def handle_event(
    event_type: str,
    payload: Dict[str, Any],
    store: CredentialStore,
    github_factory: Callable[[Optional[int]], Any] = default_github_factory,
    bounty_client: Optional[GibWorkClient] = None,
):
    """
    Central GitHub webhook dispatcher.

    Never raises: every failure is logged and the webhook still gets a 200.
    """
    action = payload.get("action")
    installation_id = (payload.get("installation") or {}).get("id")

    try:
        github = github_factory(installation_id)

        # ---------------------------------------------------------
        # 1. App installed → explain how to set the API key
        # ---------------------------------------------------------
        if event_type == "installation" and action == "created":
            logger.info("New installation created")
            await open_setup_issue(github, payload)
            return

        # ---------------------------------------------------------
        # 2. Issue opened → thank the author
        # ---------------------------------------------------------
        if event_type == "issues" and action == "opened":
            await thank_issue_author(github, payload)
            return

        # ---------------------------------------------------------
        # 3. Comment created → commands
        # ---------------------------------------------------------
        if event_type == "issue_comment":
            dispatcher = CommandDispatcher(
                github,
                store,
                bounty_client or GibWorkClient(),
            )
            await handle_comment(payload, dispatcher)
            return

    except Exception:
        # Never crash webhook processing
        logger.exception("Unhandled error while processing event: %s", event_type)
