# ---------------------------------------------------------
# Credential scope keys
# ---------------------------------------------------------
# Organization keys are the bare login ("acme"), repository
# keys are "owner/repo". A login can never contain "/", so
# the two key spaces never collide.
# ---------------------------------------------------------


def org_scope_key(owner: str) -> str:
    return owner


def repo_scope_key(owner: str, repo: str) -> str:
    return f"{owner}/{repo}"


def scope_key(owner: str, repo: str, owner_is_org: bool) -> str:
    """
    Key a /setApiKey command writes to.

    Organization-owned repositories always write the organization key so
    the value is shared by every repository in that organization.
    """
    if owner_is_org:
        return org_scope_key(owner)
    return repo_scope_key(owner, repo)
