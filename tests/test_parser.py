from bountybot.commands.parser import (
    BOUNTY,
    COMMAND_MATCHERS,
    SET_API_KEY,
    Command,
    parse_command,
)


def test_set_api_key_takes_first_token_verbatim():
    assert parse_command("/setApiKey sk_live-123:abc/def+= trailing words") == Command(
        SET_API_KEY, "sk_live-123:abc/def+="
    )


def test_set_api_key_inside_longer_comment():
    body = "Setting this up now\n/setApiKey SECRET123\nthanks"
    assert parse_command(body) == Command(SET_API_KEY, "SECRET123")


def test_set_api_key_without_token_is_not_a_command():
    assert parse_command("/setApiKey") is None
    assert parse_command("/setApiKey   ") is None


def test_set_api_key_token_must_be_on_the_same_line():
    assert parse_command("/setApiKey\nfoo") is None
    assert parse_command("/setApiKey\n\nThanks for the bot!") is None
    assert parse_command("How do I use /setApiKey\nwith our org?") is None


def test_set_api_key_accepts_tab_separator():
    assert parse_command("/setApiKey\tSECRET123") == Command(SET_API_KEY, "SECRET123")


def test_set_api_key_marker_is_case_sensitive():
    assert parse_command("/setapikey SECRET") is None


def test_bounty_is_case_insensitive():
    assert parse_command("/BOUNTY please") == Command(BOUNTY)
    assert parse_command("Let's add a /Bounty for this") == Command(BOUNTY)


def test_bounty_must_be_a_standalone_word():
    assert parse_command("/bountyhunter") is None


def test_set_api_key_wins_over_bounty():
    command = parse_command("/bounty\n/setApiKey SECRET123")
    assert command == Command(SET_API_KEY, "SECRET123")


def test_unrecognized_text_yields_nothing():
    assert parse_command("Looks good to me") is None
    assert parse_command("") is None
    assert parse_command(None) is None


def test_matchers_are_ordered_by_priority():
    assert [name for name, _ in COMMAND_MATCHERS] == [SET_API_KEY, BOUNTY]


def test_matcher_name_labels_the_command(monkeypatch):
    monkeypatch.setattr(
        "bountybot.commands.parser.COMMAND_MATCHERS",
        [("renamed", COMMAND_MATCHERS[1][1])],
    )

    assert parse_command("/bounty") == Command("renamed")
