import hmac
import hashlib
from typing import Optional

from bountybot import settings


def verify_signature(payload: bytes, signature: Optional[str]) -> bool:
    """
    Verify GitHub webhook signature using HMAC SHA-256.

    Returns False on any validation failure.
    """
    if not signature:
        return False

    secret = settings.GITHUB_WEBHOOK_SECRET
    if not secret:
        return False

    try:
        mac = hmac.new(
            secret.encode(),
            msg=payload,
            digestmod=hashlib.sha256,
        )
        expected = "sha256=" + mac.hexdigest()
        return hmac.compare_digest(expected, signature.strip())
    except (TypeError, ValueError):
        return False
