from enum import Enum

from bountybot.commands.parser import BOUNTY, SET_API_KEY
from bountybot.errors import GitHubNotFound
from bountybot.logger import get_logger


logger = get_logger("bountybot.commands.permissions")


class Level(Enum):
    ADMIN = "admin"
    ANY_MEMBER = "any_member"
    WRITE_OR_ADMIN = "write_or_admin"


class Decision(Enum):
    GRANTED = "granted"
    DENIED = "denied"
    # The platform errored; callers pick fail-open or fail-closed
    INCONCLUSIVE = "inconclusive"


def required_level(command_name: str, owner_is_org: bool) -> Level:
    if command_name == SET_API_KEY:
        return Level.ANY_MEMBER if owner_is_org else Level.ADMIN
    if command_name == BOUNTY:
        return Level.WRITE_OR_ADMIN
    raise ValueError(f"Unknown command: {command_name}")


def fail_open(decision: Decision) -> bool:
    return decision is not Decision.DENIED


def fail_closed(decision: Decision) -> bool:
    return decision is Decision.GRANTED


# ---------------------------------------------------------
# Individual checks
# ---------------------------------------------------------

async def _check_collaborator(github, actor, owner, repo, accepted) -> Decision:
    try:
        permission = await github.get_collaborator_permission(owner, repo, actor)
    except GitHubNotFound:
        logger.info("%s is not a collaborator on %s/%s", actor, owner, repo)
        return Decision.DENIED
    except Exception as exc:
        logger.warning(
            "Error checking repo permissions for %s on %s/%s: %s",
            actor, owner, repo, exc,
        )
        return Decision.INCONCLUSIVE

    if permission in accepted:
        logger.info("%s has repo permission: %s", actor, permission)
        return Decision.GRANTED

    logger.info("%s has repo permission: %s, which is insufficient", actor, permission)
    return Decision.DENIED


async def _check_membership(github, actor, org) -> Decision:
    try:
        await github.check_org_membership(org, actor)
    except GitHubNotFound:
        logger.info("%s is not a member of organization %s", actor, org)
        return Decision.DENIED
    except Exception as exc:
        logger.warning(
            "Error checking org membership for %s in %s: %s", actor, org, exc
        )
        return Decision.INCONCLUSIVE

    logger.info("%s is a member of organization %s", actor, org)
    return Decision.GRANTED


# ---------------------------------------------------------
# Public entry point
# ---------------------------------------------------------

async def authorize(
    github,
    actor: str,
    owner: str,
    repo: str,
    owner_is_org: bool,
    level: Level,
) -> Decision:
    """
    Decide whether `actor` holds `level` on owner/repo.

    Never raises for platform errors: those come back as INCONCLUSIVE
    and the caller applies its own policy. Computed fresh per call.
    """
    if level is Level.ADMIN:
        return await _check_collaborator(github, actor, owner, repo, ("admin",))

    if level is Level.ANY_MEMBER:
        return await _check_membership(github, actor, owner)

    if level is Level.WRITE_OR_ADMIN:
        decision = await _check_collaborator(
            github, actor, owner, repo, ("admin", "write")
        )
        if decision is Decision.GRANTED or not owner_is_org:
            return decision

        membership = await _check_membership(github, actor, owner)
        if membership is Decision.GRANTED:
            return membership

        if Decision.INCONCLUSIVE in (decision, membership):
            return Decision.INCONCLUSIVE
        return Decision.DENIED

    raise ValueError(f"Unknown permission level: {level}")
