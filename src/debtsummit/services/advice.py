"""Motivational advice generated from a snapshot of the user's debts.

The language model is optional: any failure (missing key, network error,
malformed reply) degrades to ``FALLBACK_MESSAGE`` and never reaches the
payoff engine.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

from openai import OpenAI

from ..models import Debt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4.1-mini"

SYSTEM_PROMPT = "You are a senior debt-relief strategist. Always respond with valid JSON only."


@dataclass(frozen=True, slots=True)
class MotivationalMessage:
    pep_talk: str
    next_milestone: str
    financial_tip: str
    budget_advice: Optional[str] = None
    health_score: Optional[int] = None


FALLBACK_MESSAGE = MotivationalMessage(
    pep_talk="You're making consistent progress toward total debt freedom.",
    next_milestone="Focus on your current high-priority balance to build momentum.",
    financial_tip="Review non-essential monthly subscriptions to increase your snowball power.",
    budget_advice="Aim to keep your debt-to-income ratio below 36% for optimal financial health.",
    health_score=50,
)


def debt_to_income_ratio(debts: Sequence[Debt], monthly_income: float) -> Optional[float]:
    """Monthly minimums divided by income; None when income is not positive."""

    if monthly_income <= 0:
        return None
    return sum(d.minimum_payment for d in debts) / monthly_income


def build_advice_prompt(debts: Sequence[Debt], total_paid: float = 0.0, monthly_income: float = 0.0) -> str:
    """Compose the user prompt describing the current debt snapshot."""

    total_balance = sum(d.balance for d in debts)
    total_mins = sum(d.minimum_payment for d in debts)
    ratio = debt_to_income_ratio(debts, monthly_income)
    ratio_text = f"{ratio * 100:.1f}%" if ratio is not None else "unknown (no income provided)"
    listing = ", ".join(
        f"{d.name} (Balance: ${d.balance:,.2f}, Rate: {d.interest_rate}%)" for d in debts
    )
    first_name = debts[0].name if debts else "first card"

    return f"""Current total debt: ${total_balance:.2f}.
Total amount paid off so far: ${total_paid:.2f}.
Monthly Net Income: ${monthly_income:.2f}.
Mandatory Monthly Minimums: ${total_mins:.2f}.
Debt-to-income ratio: {ratio_text}.
Debts list: {listing}.

Provide:
1. A highly encouraging pep talk.
2. A specific next milestone (e.g. "Paying off the {first_name}").
3. A practical financial tip.
4. Strategic advice about their income vs debt (DTI ratio).
5. A 'healthScore' from 1-100 where 100 is debt-free.

Respond with JSON:
{{"pepTalk": "...", "nextMilestone": "...", "financialTip": "...", "budgetAdvice": "...", "healthScore": 0}}
Do not use beach or sea metaphors."""


def _clamp_score(value: Any) -> Optional[int]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    # json.loads accepts NaN and Infinity literals
    if not math.isfinite(number):
        return None
    return max(1, min(100, int(round(number))))


def parse_advice(text: Optional[str]) -> MotivationalMessage:
    """Turn the model's JSON reply into a message, falling back when unusable."""

    try:
        data = json.loads((text or "").strip() or "{}")
    except json.JSONDecodeError:
        logger.warning("Advice reply was not valid JSON")
        return FALLBACK_MESSAGE
    if not isinstance(data, dict):
        return FALLBACK_MESSAGE

    pep_talk = data.get("pepTalk")
    milestone = data.get("nextMilestone")
    tip = data.get("financialTip")
    if not all(isinstance(v, str) and v.strip() for v in (pep_talk, milestone, tip)):
        return FALLBACK_MESSAGE

    budget_advice = data.get("budgetAdvice")
    return MotivationalMessage(
        pep_talk=pep_talk.strip(),
        next_milestone=milestone.strip(),
        financial_tip=tip.strip(),
        budget_advice=budget_advice.strip() if isinstance(budget_advice, str) else None,
        health_score=_clamp_score(data.get("healthScore")),
    )


class AdviceService:
    """Requests encouragement from an OpenAI chat model."""

    def __init__(self, client: Optional[OpenAI] = None, model: str = DEFAULT_MODEL):
        self._client = client
        self.model = model

    @property
    def client(self) -> OpenAI:
        if self._client is None:
            self._client = OpenAI()
        return self._client

    def get_encouragement(
        self,
        debts: Sequence[Debt],
        total_paid: float = 0.0,
        monthly_income: float = 0.0,
    ) -> MotivationalMessage:
        prompt = build_advice_prompt(debts, total_paid=total_paid, monthly_income=monthly_income)
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.7,
                response_format={"type": "json_object"},
            )
            content = response.choices[0].message.content
        except Exception as e:
            logger.warning(f"[ADVICE] Encouragement request failed: {e}")
            return FALLBACK_MESSAGE
        return parse_advice(content)
