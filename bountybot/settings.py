import os
from dotenv import load_dotenv

load_dotenv()

# === Raw environment values ===

GITHUB_WEBHOOK_SECRET = os.getenv("GITHUB_WEBHOOK_SECRET")

# GitHub App authentication
GITHUB_APP_ID = os.getenv("GITHUB_APP_ID")
GITHUB_PRIVATE_KEY_PATH = os.getenv("GITHUB_PRIVATE_KEY_PATH")
GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com")

# GibWork task marketplace
GIBWORK_API_URL = os.getenv("GIBWORK_API_URL", "https://api2.gib.work/tasks/public")

# Fallback key used when no organization or repository key has been set
GIBWORK_API_KEY = os.getenv("GIBWORK_API_KEY", "")

BOUNTY_ACK_ENABLED = os.getenv("BOUNTY_ACK_ENABLED", "true").lower() == "true"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

BOUNTY_REQUIREMENTS = "PR TO BE MERGED"

# Configurable messages

ORG_SETUP_INSTRUCTIONS = """Thanks for installing the GibWork integration bot!

To set your organization-wide GibWork API key, any organization member can post a comment with:

`/setApiKey YOUR_API_KEY`

The comment will be automatically deleted for security.

**Note**: This API key will be shared across all repositories in your organization.

Once set up, you can create bounties by commenting `/bounty` on any issue.

**Note**: Only repository collaborators with write access or organization members can create bounties."""

PERSONAL_SETUP_INSTRUCTIONS = """Thanks for installing the GibWork integration bot!

To set your GibWork API key, a repository owner can post a comment with:

`/setApiKey YOUR_API_KEY`

The comment will be automatically deleted for security.

Once set up, you can create bounties by commenting `/bounty` on any issue.

**Note**: Only repository collaborators with write access can create bounties."""

SETUP_ISSUE_TITLE = "GibWork Integration Setup"

ISSUE_THANKS_MESSAGE = "Thanks for opening this issue!"

ORG_KEY_DENIED = (
    "❌ Permission denied: Only organization members can set the "
    "organization-wide API key."
)
REPO_KEY_DENIED = "❌ Permission denied: Only repository owners can set the API key."

ORG_KEY_SET = (
    "✅ Organization-wide API key set successfully. This key will be used for "
    "all repositories in the {org} organization. The comment with your API key "
    "has been deleted for security."
)
REPO_KEY_SET = (
    "✅ Repository API key set successfully. The comment with your API key "
    "has been deleted for security."
)
KEY_SET_ERROR = "❌ Error setting API key: {error}"

BOUNTY_DENIED = (
    "❌ Permission denied: Only repository collaborators with write access "
    "or organization members can create bounties."
)
BOUNTY_PROCESSING = "⏳ Processing bounty request..."

ORG_KEY_MISSING = (
    "❌ API key not set. Please ask an organization member to set the "
    "organization-wide API key using `/setApiKey YOUR_API_KEY`"
)
REPO_KEY_MISSING = "❌ API key not set. Please set the API key using `/setApiKey YOUR_API_KEY`"

BOUNTY_CREATED = """✅ Bounty created on GibWork!

**Task ID**: {task_id}
**Link**: {link}
**Address to deposit funds**: `{deposit_address}`

You can view and manage this bounty at {link}"""

BOUNTY_ERROR = "❌ Error creating bounty: {error}"

GENERIC_ERROR = "❌ Error: {error}"


def validate_github_settings() -> None:
    """
    Validate required GitHub App configuration.

    Raises RuntimeError if required values are missing or invalid.
    """
    if not GITHUB_APP_ID:
        raise RuntimeError("GITHUB_APP_ID is not set")

    if not GITHUB_PRIVATE_KEY_PATH:
        raise RuntimeError("GITHUB_PRIVATE_KEY_PATH is not set")

    if not os.path.exists(GITHUB_PRIVATE_KEY_PATH):
        raise RuntimeError(
            f"GITHUB_PRIVATE_KEY_PATH does not exist: {GITHUB_PRIVATE_KEY_PATH}"
        )

    if not GITHUB_WEBHOOK_SECRET:
        raise RuntimeError("GITHUB_WEBHOOK_SECRET is not set")
