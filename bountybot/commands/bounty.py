from dataclasses import dataclass
from typing import Any, Dict, Mapping, Union

from bountybot.errors import BountyServiceError
from bountybot.logger import get_logger
from bountybot.settings import (
    BOUNTY_CREATED,
    BOUNTY_ERROR,
    BOUNTY_REQUIREMENTS,
)


logger = get_logger("bountybot.commands.bounty")

OTHER_LANGUAGE = "other"
NO_DESCRIPTION = "No description provided"


@dataclass(frozen=True)
class BountyResult:
    task_id: str
    link: str
    deposit_address: str


@dataclass(frozen=True)
class BountyFailure:
    message: str
    status: Union[int, None] = None
    body: str = ""


BountyOutcome = Union[BountyResult, BountyFailure]


def primary_language(stats: Mapping[str, Any]) -> str:
    """
    Language with the strictly greatest byte count.

    Ties keep the first language seen. Values that are not numbers are
    skipped. Empty or all-zero stats give "other".
    """
    best = OTHER_LANGUAGE
    max_bytes = 0

    for language, raw in (stats or {}).items():
        if isinstance(raw, bool):
            continue
        try:
            value = float(raw)
        except (TypeError, ValueError):
            continue
        if value != value:  # NaN
            continue
        if value > max_bytes:
            best = language
            max_bytes = value

    return best


def build_task_request(title: str, body: str, stats: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "title": title,
        "content": body or NO_DESCRIPTION,
        "requirements": BOUNTY_REQUIREMENTS,
        "tags": [primary_language(stats)],
    }


async def create_bounty(
    client,
    title: str,
    body: str,
    stats: Mapping[str, Any],
    credential: str,
) -> BountyOutcome:
    """
    Submit a GibWork task for an issue.

    Service failures are returned as BountyFailure rather than raised.
    """
    request = build_task_request(title, body, stats)

    try:
        data = await client.submit_task(request, credential)
    except BountyServiceError as exc:
        return BountyFailure(message=str(exc), status=exc.status, body=exc.body)
    except Exception as exc:
        logger.exception("Error making GibWork API call")
        return BountyFailure(message=str(exc))

    logger.info("GibWork task created: %s", data.get("taskId"))

    return BountyResult(
        task_id=str(data.get("taskId", "")),
        link=data.get("link", ""),
        deposit_address=data.get("addressToDepositFunds", ""),
    )


def render_bounty_report(outcome: BountyOutcome) -> str:
    if isinstance(outcome, BountyResult):
        return BOUNTY_CREATED.format(
            task_id=outcome.task_id,
            link=outcome.link,
            deposit_address=outcome.deposit_address,
        )
    return BOUNTY_ERROR.format(error=outcome.message)
