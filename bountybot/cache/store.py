from typing import Dict, Optional

from bountybot.cache.keys import org_scope_key, repo_scope_key
from bountybot.logger import get_logger


logger = get_logger("bountybot.cache.store")

SOURCE_ORGANIZATION = "organization-wide"
SOURCE_REPOSITORY = "repository-specific"
SOURCE_DEFAULT = "default"


class CredentialStore:
    """
    In-memory GibWork API key cache, keyed by scope.

    Values live for the lifetime of the process and are lost on restart;
    an authorized user can set them again at any time. There is no
    locking: concurrent writes to the same key are last-write-wins.
    """

    def __init__(self, default_secret: str = ""):
        self._default = default_secret or ""
        self._entries: Dict[str, str] = {}

    # =========================================================
    # Raw key access
    # =========================================================

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def set(self, key: str, secret: str):
        self._entries[key] = secret
        logger.info("API key stored for scope %s", key)

    # =========================================================
    # Scoped lookups
    # =========================================================

    def _resolve(self, owner: str, repo: str, owner_is_org: bool):
        if owner_is_org:
            value = self.get(org_scope_key(owner))
            if value:
                return value, SOURCE_ORGANIZATION

        value = self.get(repo_scope_key(owner, repo))
        if value:
            return value, SOURCE_REPOSITORY

        return self._default, SOURCE_DEFAULT

    def get_credential(self, owner: str, repo: str, owner_is_org: bool) -> str:
        """
        Organization key first, then repository key, then the process default.
        Always returns a string (empty when no default is configured).
        """
        value, _ = self._resolve(owner, repo, owner_is_org)
        return value

    def resolve_source_label(self, owner: str, repo: str, owner_is_org: bool) -> str:
        _, source = self._resolve(owner, repo, owner_is_org)
        return source
