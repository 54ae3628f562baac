from bountybot.commands.bounty import (
    NO_DESCRIPTION,
    BountyFailure,
    BountyResult,
    build_task_request,
    create_bounty,
    primary_language,
    render_bounty_report,
)


def test_primary_language_picks_largest():
    assert primary_language({"Go": 500, "Python": 1500}) == "Python"


def test_primary_language_tie_keeps_first_seen():
    # dicts keep insertion order, so Python is seen before Rust
    stats = {"Go": 500, "Python": 1500, "Rust": 1500}
    assert primary_language(stats) == "Python"

    reordered = {"Rust": 1500, "Go": 500, "Python": 1500}
    assert primary_language(reordered) == "Rust"


def test_primary_language_defaults_to_other():
    assert primary_language({}) == "other"
    assert primary_language({"X": 0}) == "other"
    assert primary_language(None) == "other"


def test_primary_language_skips_non_numeric():
    assert primary_language({"X": "lots", "Y": None}) == "other"
    assert primary_language({"X": "lots", "C": "12"}) == "C"


def test_build_task_request():
    request = build_task_request("Fix crash", "", {"C": 900})

    assert request == {
        "title": "Fix crash",
        "content": NO_DESCRIPTION,
        "requirements": "PR TO BE MERGED",
        "tags": ["C"],
    }


async def test_create_bounty_success(gibwork):
    outcome = await create_bounty(
        gibwork, "Fix crash", "It crashes on null input", {"C": 900}, "KEY1"
    )

    assert outcome == BountyResult(
        task_id="task-42",
        link="https://app.gib.work/tasks/task-42",
        deposit_address="DepositAddr111",
    )
    request, credential = gibwork.requests[0]
    assert credential == "KEY1"
    assert request["tags"] == ["C"]


async def test_create_bounty_service_error_becomes_failure(gibwork, service_error):
    gibwork.error = service_error

    outcome = await create_bounty(gibwork, "t", "b", {}, "KEY1")

    assert isinstance(outcome, BountyFailure)
    assert outcome.status == 401
    assert outcome.body == "invalid api key"


async def test_create_bounty_transport_error_becomes_failure(gibwork):
    gibwork.error = ConnectionError("connection reset")

    outcome = await create_bounty(gibwork, "t", "b", {}, "KEY1")

    assert isinstance(outcome, BountyFailure)
    assert outcome.status is None
    assert "connection reset" in outcome.message


def test_render_report():
    success = render_bounty_report(BountyResult("t1", "https://x/t1", "ADDR"))
    assert "t1" in success
    assert "https://x/t1" in success
    assert "`ADDR`" in success

    failure = render_bounty_report(BountyFailure("GibWork API returned status 500: boom"))
    assert failure.startswith("❌ Error creating bounty:")
    assert "boom" in failure
