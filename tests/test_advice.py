"""Tests for the motivational advice service."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from debtsummit.services.advice import (
    FALLBACK_MESSAGE,
    AdviceService,
    build_advice_prompt,
    debt_to_income_ratio,
    parse_advice,
)


class FakeCompletions:
    """Stands in for ``client.chat.completions``."""

    def __init__(self, content: str | None = None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _client(completions: FakeCompletions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


VALID_REPLY = json.dumps(
    {
        "pepTalk": "Every payment is a step up the mountain.",
        "nextMilestone": "Clear the Premium Credit Card",
        "financialTip": "Automate your minimums.",
        "budgetAdvice": "Your DTI is healthy.",
        "healthScore": 72,
    }
)


def test_debt_to_income_ratio(sample_debts):
    assert debt_to_income_ratio(sample_debts, 4700.0) == pytest.approx(0.1)


@pytest.mark.parametrize("income", [0.0, -100.0])
def test_debt_to_income_ratio_guards_missing_income(sample_debts, income):
    assert debt_to_income_ratio(sample_debts, income) is None


def test_build_advice_prompt_describes_snapshot(sample_debts):
    prompt = build_advice_prompt(sample_debts, total_paid=250.0, monthly_income=4700.0)

    assert "Current total debt: $17000.00." in prompt
    assert "Total amount paid off so far: $250.00." in prompt
    assert "Mandatory Monthly Minimums: $470.00." in prompt
    assert "Debt-to-income ratio: 10.0%." in prompt
    assert "Premium Credit Card (Balance: $5,000.00, Rate: 22.0%)" in prompt
    assert 'Paying off the Premium Credit Card' in prompt


def test_build_advice_prompt_without_income(sample_debts):
    prompt = build_advice_prompt(sample_debts)

    assert "unknown (no income provided)" in prompt


def test_parse_advice_valid_reply():
    message = parse_advice(VALID_REPLY)

    assert message.pep_talk == "Every payment is a step up the mountain."
    assert message.next_milestone == "Clear the Premium Credit Card"
    assert message.budget_advice == "Your DTI is healthy."
    assert message.health_score == 72


@pytest.mark.parametrize("text", [None, "", "not json", "[1, 2]", json.dumps({"pepTalk": "only one"})])
def test_parse_advice_falls_back(text):
    assert parse_advice(text) == FALLBACK_MESSAGE


@pytest.mark.parametrize(
    ("score", "expected"),
    [
        (150, 100),
        (-5, 1),
        ("64.6", 65),
        ("high", None),
        (float("inf"), None),
        (float("nan"), None),
        ("Infinity", None),
    ],
)
def test_parse_advice_clamps_health_score(score, expected):
    reply = json.loads(VALID_REPLY)
    reply["healthScore"] = score

    assert parse_advice(json.dumps(reply)).health_score == expected


def test_service_requests_json_object(sample_debts):
    completions = FakeCompletions(content=VALID_REPLY)
    service = AdviceService(client=_client(completions), model="test-model")

    message = service.get_encouragement(sample_debts, total_paid=10.0, monthly_income=3000.0)

    assert message.health_score == 72
    call = completions.calls[0]
    assert call["model"] == "test-model"
    assert call["response_format"] == {"type": "json_object"}
    assert "Premium Credit Card" in call["messages"][1]["content"]


def test_service_failure_returns_fallback(sample_debts, caplog):
    completions = FakeCompletions(error=RuntimeError("network down"))
    service = AdviceService(client=_client(completions))

    assert service.get_encouragement(sample_debts) == FALLBACK_MESSAGE
    assert "network down" in caplog.text


def test_service_tolerates_non_finite_health_score(sample_debts):
    reply = (
        '{"pepTalk": "Keep going.", "nextMilestone": "Clear the card",'
        ' "financialTip": "Automate it.", "healthScore": Infinity}'
    )
    service = AdviceService(client=_client(FakeCompletions(content=reply)))

    message = service.get_encouragement(sample_debts)

    assert message.pep_talk == "Keep going."
    assert message.health_score is None
