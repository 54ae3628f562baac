"""
Shared fixtures: in-memory fakes for the GitHub and GibWork collaborators.
"""

import pytest

from bountybot.cache.store import CredentialStore
from bountybot.errors import BountyServiceError, GitHubAPIError, GitHubNotFound


class FakeGitHub:
    """Records calls; behaviour is driven by the attributes set in each test."""

    def __init__(self):
        # username -> permission string, or an exception instance to raise
        self.permissions = {}
        # username -> True (member), or an exception instance to raise
        self.members = {}
        self.issue = {"title": "Fix crash", "body": "It crashes on null input"}
        self.languages = {"C": 900}
        self.delete_error = None

        self.comments = []
        self.deleted = []
        self.issues_created = []
        self.calls = []

    async def get_collaborator_permission(self, owner, repo, username):
        self.calls.append(("permission", owner, repo, username))
        value = self.permissions.get(username, GitHubNotFound("not a collaborator", status=404))
        if isinstance(value, Exception):
            raise value
        return value

    async def check_org_membership(self, org, username):
        self.calls.append(("membership", org, username))
        value = self.members.get(username, GitHubNotFound("not a member", status=404))
        if isinstance(value, Exception):
            raise value
        return True

    async def get_issue(self, owner, repo, number):
        self.calls.append(("issue", owner, repo, number))
        return dict(self.issue)

    async def list_repository_languages(self, owner, repo):
        self.calls.append(("languages", owner, repo))
        return dict(self.languages)

    async def create_comment(self, owner, repo, issue_number, body):
        self.comments.append((owner, repo, issue_number, body))
        return {"id": len(self.comments)}

    async def delete_comment(self, owner, repo, comment_id):
        if self.delete_error:
            raise self.delete_error
        self.deleted.append((owner, repo, comment_id))

    async def create_issue(self, owner, repo, title, body):
        self.issues_created.append((owner, repo, title, body))
        return {"number": 1}

    @property
    def bodies(self):
        return [c[3] for c in self.comments]


class FakeGibWork:
    def __init__(self):
        self.requests = []
        self.response = {
            "taskId": "task-42",
            "link": "https://app.gib.work/tasks/task-42",
            "addressToDepositFunds": "DepositAddr111",
        }
        self.error = None

    async def submit_task(self, request, credential):
        self.requests.append((request, credential))
        if self.error:
            raise self.error
        return dict(self.response)


@pytest.fixture
def github():
    return FakeGitHub()


@pytest.fixture
def gibwork():
    return FakeGibWork()


@pytest.fixture
def store():
    return CredentialStore("DEFAULT_KEY")


@pytest.fixture
def platform_error():
    return GitHubAPIError("GitHub API returned status 500", status=500)


@pytest.fixture
def service_error():
    return BountyServiceError(
        "GibWork API returned status 401: invalid api key",
        status=401,
        body="invalid api key",
    )


def comment_payload(
    body,
    user="alice",
    owner="acme",
    repo="widgets",
    owner_type="User",
    comment_id=555,
    issue_number=7,
    action="created",
):
    return {
        "action": action,
        "installation": {"id": 99},
        "repository": {
            "name": repo,
            "full_name": f"{owner}/{repo}",
            "owner": {"login": owner, "type": owner_type},
        },
        "issue": {"number": issue_number},
        "comment": {"id": comment_id, "body": body, "user": {"login": user}},
    }
