from typing import Optional


class UpstreamServiceError(Exception):
    """
    Raised when GitHub or GibWork answers with a non-success status.
    """

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class GitHubAPIError(UpstreamServiceError):
    pass


class GitHubNotFound(GitHubAPIError):
    """
    Raised for 404/410 responses: deleted or renamed resources, and
    GitHub's way of saying "not a member" or "not a collaborator".
    """
    pass


class BountyServiceError(UpstreamServiceError):
    pass


class CleanupFailure(Exception):
    """
    Raised when the comment carrying an API key could not be deleted.
    Only ever logged.
    """
    pass
