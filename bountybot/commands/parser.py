import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple


SET_API_KEY = "set_api_key"
BOUNTY = "bounty"

# Marker and token must share a line
_SET_API_KEY_RE = re.compile(r"/setApiKey[ \t]+(\S+)")
_BOUNTY_RE = re.compile(r"/bounty\b", re.IGNORECASE)


@dataclass(frozen=True)
class Command:
    name: str
    argument: Optional[str] = None


def match_set_api_key(text: str) -> Optional[re.Match]:
    return _SET_API_KEY_RE.search(text)


def match_bounty(text: str) -> Optional[re.Match]:
    return _BOUNTY_RE.search(text)


# Evaluated in order; the first matcher that fires names the command.
# A capture group, when the pattern has one, becomes the argument.
COMMAND_MATCHERS: List[Tuple[str, Callable[[str], Optional[re.Match]]]] = [
    (SET_API_KEY, match_set_api_key),
    (BOUNTY, match_bounty),
]


def parse_command(text: str) -> Optional[Command]:
    if not text:
        return None

    for name, matcher in COMMAND_MATCHERS:
        m = matcher(text)
        if m:
            argument = m.group(1) if m.re.groups else None
            return Command(name, argument)

    return None
