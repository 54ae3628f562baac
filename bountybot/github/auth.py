import time
from typing import Dict, Optional, Tuple

import httpx
import jwt

from bountybot.logger import get_logger
from bountybot import settings


logger = get_logger("bountybot.github.auth")

_PRIVATE_KEY: Optional[str] = None

# installation id -> (token, expiry timestamp)
_TOKEN_CACHE: Dict[int, Tuple[str, float]] = {}


def _load_private_key() -> str:
    global _PRIVATE_KEY

    if _PRIVATE_KEY is not None:
        return _PRIVATE_KEY

    if not settings.GITHUB_PRIVATE_KEY_PATH:
        raise RuntimeError("GITHUB_PRIVATE_KEY_PATH is not set")

    try:
        with open(settings.GITHUB_PRIVATE_KEY_PATH, "r") as f:
            _PRIVATE_KEY = f.read()
            return _PRIVATE_KEY
    except OSError as exc:
        raise RuntimeError(
            f"Failed to read GitHub private key at {settings.GITHUB_PRIVATE_KEY_PATH}"
        ) from exc


def create_jwt() -> str:
    if not settings.GITHUB_APP_ID:
        raise RuntimeError("GITHUB_APP_ID is not set")

    now = int(time.time())
    payload = {
        "iat": now - 30,
        "exp": now + 9 * 60,
        "iss": int(settings.GITHUB_APP_ID),
    }

    private_key = _load_private_key()
    return jwt.encode(payload, private_key, algorithm="RS256")


async def get_installation_token(
    installation_id: int,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Return an access token for one installation of the app.
    Cached per installation until shortly before GitHub expires it.
    """
    now = time.time()
    cached = _TOKEN_CACHE.get(installation_id)
    if cached and now < cached[1]:
        return cached[0]

    headers = {
        "Authorization": f"Bearer {create_jwt()}",
        "Accept": "application/vnd.github+json",
    }

    async with httpx.AsyncClient(transport=transport) as client:
        token_resp = await client.post(
            f"{settings.GITHUB_API_URL}/app/installations/{installation_id}/access_tokens",
            headers=headers,
        )
        token_resp.raise_for_status()

        data = token_resp.json()

    # GitHub tokens expire in 1 hour; subtract buffer
    _TOKEN_CACHE[installation_id] = (data["token"], time.time() + 50 * 60)

    logger.info("GitHub installation token obtained for installation %s", installation_id)

    return data["token"]
