from dataclasses import dataclass
from typing import Any, Dict, Optional

from bountybot.cache.keys import scope_key
from bountybot.cache.store import CredentialStore
from bountybot.commands.bounty import create_bounty, render_bounty_report
from bountybot.commands.parser import BOUNTY, SET_API_KEY, Command, parse_command
from bountybot.commands.permissions import (
    authorize,
    fail_closed,
    fail_open,
    required_level,
)
from bountybot.errors import CleanupFailure
from bountybot.logger import get_logger
from bountybot import settings


logger = get_logger("bountybot.commands.dispatcher")

BOT_SUFFIX = "[bot]"


@dataclass(frozen=True)
class CommandInvocation:
    actor: str
    owner: str
    repo: str
    owner_is_org: bool
    issue_number: int
    command: Command
    comment_id: Optional[int] = None
    installation_id: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], command: Command) -> "CommandInvocation":
        repository = payload.get("repository") or {}
        owner = repository.get("owner") or {}
        comment = payload.get("comment") or {}
        issue = payload.get("issue") or {}
        installation = payload.get("installation") or {}

        return cls(
            actor=(comment.get("user") or {}).get("login", ""),
            owner=owner.get("login", ""),
            repo=repository.get("name", ""),
            owner_is_org=owner.get("type") == "Organization",
            issue_number=issue.get("number"),
            command=command,
            comment_id=comment.get("id"),
            installation_id=installation.get("id"),
        )

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


class CommandDispatcher:
    """
    Runs one parsed command: permission check first, then side effects,
    then a reply on the triggering issue.
    """

    def __init__(self, github, store: CredentialStore, bounty_client):
        self.github = github
        self.store = store
        self.bounty_client = bounty_client
        self._handlers = {
            SET_API_KEY: self._handle_set_api_key,
            BOUNTY: self._handle_bounty,
        }

    async def _reply(self, inv: CommandInvocation, body: str):
        await self.github.create_comment(inv.owner, inv.repo, inv.issue_number, body)

    async def dispatch(self, inv: CommandInvocation):
        handler = self._handlers.get(inv.command.name)
        if handler is None:
            logger.info("No handler for command %s", inv.command.name)
            return

        try:
            await handler(inv)
        except Exception as exc:
            logger.exception(
                "Unhandled error while running %s for %s on %s#%s",
                inv.command.name, inv.actor, inv.full_name, inv.issue_number,
            )
            try:
                await self._reply(inv, settings.GENERIC_ERROR.format(error=exc))
            except Exception:
                logger.exception("Could not post error comment on %s", inv.full_name)

    # --------------------------------------------------
    # /setApiKey
    # --------------------------------------------------

    async def _handle_set_api_key(self, inv: CommandInvocation):
        logger.info("SetApiKey command from %s, checking permissions", inv.actor)

        level = required_level(SET_API_KEY, inv.owner_is_org)
        decision = await authorize(
            self.github, inv.actor, inv.owner, inv.repo, inv.owner_is_org, level
        )

        # Platform errors let the command through so operators are never locked out
        if not fail_open(decision):
            logger.info("%s may not set the API key for %s", inv.actor, inv.full_name)
            denied = settings.ORG_KEY_DENIED if inv.owner_is_org else settings.REPO_KEY_DENIED
            await self._reply(inv, denied)
            return

        key = scope_key(inv.owner, inv.repo, inv.owner_is_org)
        store_error = None
        try:
            self.store.set(key, inv.command.argument)
        except Exception as exc:
            logger.exception("Error setting API key for %s", key)
            store_error = exc

        # The key was posted in clear text: remove it whatever happened above
        try:
            await self._delete_trigger_comment(inv)
        except CleanupFailure:
            logger.exception("Failed to delete comment with API key")

        if store_error is not None:
            await self._reply(inv, settings.KEY_SET_ERROR.format(error=store_error))
            return

        if inv.owner_is_org:
            message = settings.ORG_KEY_SET.format(org=inv.owner)
        else:
            message = settings.REPO_KEY_SET
        await self._reply(inv, message)

    async def _delete_trigger_comment(self, inv: CommandInvocation):
        try:
            await self.github.delete_comment(inv.owner, inv.repo, inv.comment_id)
        except Exception as exc:
            raise CleanupFailure(
                f"Failed to delete comment {inv.comment_id} on {inv.full_name}"
            ) from exc

        logger.info("Deleted comment with API key on %s", inv.full_name)

    # --------------------------------------------------
    # /bounty
    # --------------------------------------------------

    async def _handle_bounty(self, inv: CommandInvocation):
        logger.info("Bounty command from %s, checking permissions", inv.actor)

        level = required_level(BOUNTY, inv.owner_is_org)
        decision = await authorize(
            self.github, inv.actor, inv.owner, inv.repo, inv.owner_is_org, level
        )

        # Funding a bounty is hard to undo: platform errors deny
        if not fail_closed(decision):
            logger.info(
                "%s may not create bounties on %s (%s)",
                inv.actor, inv.full_name, decision.value,
            )
            await self._reply(inv, settings.BOUNTY_DENIED)
            return

        if settings.BOUNTY_ACK_ENABLED:
            await self._reply(inv, settings.BOUNTY_PROCESSING)

        credential = self.store.get_credential(inv.owner, inv.repo, inv.owner_is_org)
        source = self.store.resolve_source_label(inv.owner, inv.repo, inv.owner_is_org)
        logger.info("Using %s API key for %s", source, inv.full_name)

        if not credential:
            missing = settings.ORG_KEY_MISSING if inv.owner_is_org else settings.REPO_KEY_MISSING
            await self._reply(inv, missing)
            return

        issue = await self.github.get_issue(inv.owner, inv.repo, inv.issue_number)
        languages = await self.github.list_repository_languages(inv.owner, inv.repo)

        outcome = await create_bounty(
            self.bounty_client,
            issue.get("title", ""),
            issue.get("body") or "",
            languages,
            credential,
        )
        await self._reply(inv, render_bounty_report(outcome))


# --------------------------------------------------
# issue_comment entry point
# --------------------------------------------------

async def handle_comment(payload: Dict[str, Any], dispatcher: CommandDispatcher):
    if payload.get("action") != "created":
        return

    comment = payload.get("comment") or {}
    body = comment.get("body") or ""
    author = (comment.get("user") or {}).get("login")

    if not author or author.lower().endswith(BOT_SUFFIX):
        return

    command = parse_command(body)
    if command is None:
        logger.info("No recognized command in comment from %s", author)
        return

    inv = CommandInvocation.from_payload(payload, command)
    if inv.issue_number is None:
        return

    logger.info(
        "%s command from %s on %s#%s (org: %s)",
        command.name, author, inv.full_name, inv.issue_number, inv.owner_is_org,
    )
    await dispatcher.dispatch(inv)
