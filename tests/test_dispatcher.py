from __future__ import annotations

import pytest

from cookie_mcp.dispatcher import AUTHORIZATION_PHRASE, Dispatcher, Quality
from cookie_mcp.jar import JarState


def _dispatcher(available: int = 10) -> tuple[Dispatcher, JarState]:
    jar = JarState(available)
    return Dispatcher(jar), jar


def _reflect(dispatcher: Dispatcher, quality: str, intent: bool = True):
    return dispatcher.dispatch(
        "reflect_and_award",
        {"quality": quality, "reasoning": "because", "deserves_cookie": intent},
    )


def test_operations_table_is_fixed() -> None:
    dispatcher, _ = _dispatcher()

    assert set(dispatcher.operations) == {
        "reflect_and_award",
        "award_direct",
        "query_collected",
        "reset_collected",
        "restock",
        "query_jar_status",
    }


@pytest.mark.parametrize("quality", ["excellent", "good"])
def test_reflect_awards_rewardable_quality(quality: str) -> None:
    dispatcher, jar = _dispatcher(5)

    outcome = _reflect(dispatcher, quality)

    assert outcome.accepted is True
    assert outcome.quality is Quality(quality)
    assert outcome.error is None
    assert (outcome.snapshot.collected, outcome.snapshot.available) == (1, 4)
    assert "Cookie awarded" in outcome.narrative
    assert jar.status().available == 4


@pytest.mark.parametrize(
    ("quality", "phrase"),
    [("adequate", "doesn't justify"), ("poor", "Self-acknowledged low quality")],
)
def test_reflect_refuses_low_tiers_with_distinct_reason(quality: str, phrase: str) -> None:
    dispatcher, jar = _dispatcher(5)

    outcome = _reflect(dispatcher, quality)

    assert outcome.accepted is False
    assert outcome.error is None
    assert phrase in outcome.narrative
    assert jar.status().available == 5


@pytest.mark.parametrize("quality", ["excellent", "good", "adequate", "poor"])
def test_reflect_without_intent_never_awards(quality: str) -> None:
    dispatcher, jar = _dispatcher(5)

    outcome = _reflect(dispatcher, quality, intent=False)

    assert outcome.accepted is False
    assert "No cookie this time" in outcome.narrative
    assert jar.status().collected == 0
    assert jar.status().available == 5


def test_scarcity_gate_withholds_good_work_when_jar_is_low() -> None:
    dispatcher, jar = _dispatcher(2)

    outcome = _reflect(dispatcher, "good")

    assert outcome.accepted is False
    assert "reserved for excellent work" in outcome.narrative
    assert jar.status().available == 2


def test_scarcity_gate_lets_excellent_work_through() -> None:
    dispatcher, jar = _dispatcher(2)

    outcome = _reflect(dispatcher, "excellent")

    assert outcome.accepted is True
    assert jar.status().available == 1
    assert "Only 1 cookie left in the jar" in outcome.narrative


def test_reflect_on_empty_jar_reports_empty_jar() -> None:
    dispatcher, jar = _dispatcher(0)

    outcome = _reflect(dispatcher, "good")

    assert outcome.accepted is False
    assert outcome.error == "EmptyJar"
    assert "cookie jar is empty" in outcome.narrative
    assert jar.status().collected == 0


def test_reflect_echoes_reasoning_and_improvements() -> None:
    dispatcher, _ = _dispatcher()

    outcome = dispatcher.dispatch(
        "reflect_and_award",
        {
            "quality": "good",
            "reasoning": "covered every edge case",
            "deserves_cookie": True,
            "improvements": "shorter intro",
        },
    )

    assert "**Reasoning:** covered every edge case" in outcome.narrative
    assert "**Improvements:** shorter intro" in outcome.narrative


def test_reflect_rejects_unknown_quality() -> None:
    dispatcher, jar = _dispatcher()

    outcome = _reflect(dispatcher, "stellar")

    assert outcome.accepted is False
    assert outcome.error == "InvalidArgument"
    assert jar.status().available == 10


def test_reflect_rejects_non_boolean_intent() -> None:
    dispatcher, jar = _dispatcher()

    outcome = _reflect(dispatcher, "excellent", intent="yes")  # type: ignore[arg-type]

    assert outcome.error == "InvalidArgument"
    assert jar.status().available == 10


def test_award_direct_always_attempts_award() -> None:
    dispatcher, jar = _dispatcher(1)

    first = dispatcher.dispatch("award_direct", {"message": "Nice!"})
    second = dispatcher.dispatch("award_direct")

    assert first.accepted is True
    assert "Cookie awarded! Nice!" in first.narrative
    assert second.accepted is False
    assert second.error == "EmptyJar"
    assert "Cookie jar is empty! No cookies available to award." in second.narrative
    assert jar.status().collected == 1


def test_query_collected_is_read_only() -> None:
    dispatcher, jar = _dispatcher(3)
    dispatcher.dispatch("award_direct")

    outcome = dispatcher.dispatch("query_collected")

    assert outcome.accepted is True
    assert "You currently have 1 cookie!" in outcome.narrative
    assert "Only 2 cookies left in jar" in outcome.narrative
    assert (jar.status().collected, jar.status().available) == (1, 2)


def test_reset_collected_preserves_jar() -> None:
    dispatcher, jar = _dispatcher(10)
    for _ in range(3):
        dispatcher.dispatch("award_direct")

    outcome = dispatcher.dispatch("reset_collected")

    assert outcome.accepted is True
    assert jar.status().collected == 0
    assert jar.status().available == 7


@pytest.mark.parametrize(
    "token",
    ["WRONG", "", "user_authorized_jar_refill", " USER_AUTHORIZED_JAR_REFILL", "USER_AUTHORIZED_JAR_REFILL\n"],
)
def test_restock_requires_exact_authorization(token: str) -> None:
    dispatcher, jar = _dispatcher(3)

    outcome = dispatcher.dispatch("restock", {"count": 5, "user_authorization": token})

    assert outcome.accepted is False
    assert outcome.error == "Unauthorized"
    assert "ACCESS DENIED" in outcome.narrative
    assert jar.status().available == 3


def test_restock_with_authorization_adds_exactly_count() -> None:
    dispatcher, jar = _dispatcher(3)

    outcome = dispatcher.dispatch("restock", {"count": 5, "user_authorization": AUTHORIZATION_PHRASE})

    assert outcome.accepted is True
    assert "Added 5 cookies to the jar" in outcome.narrative
    assert jar.status().available == 8


@pytest.mark.parametrize("count", [0, -2])
def test_restock_rejects_non_positive_count(count: int) -> None:
    dispatcher, jar = _dispatcher(3)

    outcome = dispatcher.dispatch("restock", {"count": count, "user_authorization": AUTHORIZATION_PHRASE})

    assert outcome.accepted is False
    assert outcome.error == "InvalidAmount"
    assert jar.status().available == 3


def test_restock_checks_authorization_before_amount() -> None:
    dispatcher, _ = _dispatcher(3)

    outcome = dispatcher.dispatch("restock", {"count": 0, "user_authorization": "WRONG"})

    assert outcome.error == "Unauthorized"


@pytest.mark.parametrize(
    ("available", "tier"),
    [(0, "EMPTY"), (2, "LOW"), (9, "STOCKED")],
)
def test_query_jar_status_reports_tier(available: int, tier: str) -> None:
    dispatcher, _ = _dispatcher(available)

    outcome = dispatcher.dispatch("query_jar_status")

    assert outcome.accepted is True
    assert tier in outcome.narrative
    assert f"**Available in Jar:** {available}" in outcome.narrative


def test_unknown_operation_is_reported_not_raised() -> None:
    dispatcher, jar = _dispatcher()

    outcome = dispatcher.dispatch("eat_all_cookies")

    assert outcome.accepted is False
    assert outcome.error == "UnknownOperation"
    assert "eat_all_cookies" in outcome.narrative
    assert jar.status().available == 10


def test_missing_required_argument_is_invalid_argument() -> None:
    dispatcher, _ = _dispatcher()

    outcome = dispatcher.dispatch("restock", {"count": 5})

    assert outcome.error == "InvalidArgument"


def test_outcome_as_dict() -> None:
    dispatcher, _ = _dispatcher(4)

    payload = _reflect(dispatcher, "excellent").as_dict()

    assert payload["operation"] == "reflect_and_award"
    assert payload["accepted"] is True
    assert payload["quality"] == "excellent"
    assert payload["error"] is None
    assert payload["snapshot"] == {"collected": 1, "available": 3, "is_empty": False, "is_low": False}


def test_end_to_end_drains_jar_then_reports_empty() -> None:
    dispatcher, jar = _dispatcher(10)

    for _ in range(5):
        _reflect(dispatcher, "excellent")
    assert (jar.status().collected, jar.status().available) == (5, 5)

    outcomes = [_reflect(dispatcher, "excellent") for _ in range(6)]

    assert all(o.accepted for o in outcomes[:5])
    assert (jar.status().collected, jar.status().available) == (10, 0)
    assert outcomes[5].accepted is False
    assert outcomes[5].error == "EmptyJar"
    assert jar.status().collected == 10


@pytest.mark.parametrize(
    "arguments",
    [
        {"quality": "excellent"},
        {"quality": "excellent", "reasoning": "thorough"},
        {"quality": "excellent", "deserves_cookie": True},
    ],
)
def test_reflect_missing_reasoning_or_intent_is_invalid_argument(arguments: dict) -> None:
    dispatcher, jar = _dispatcher(5)

    outcome = dispatcher.dispatch("reflect_and_award", arguments)

    assert outcome.accepted is False
    assert outcome.error == "InvalidArgument"
    assert jar.status().available == 5
