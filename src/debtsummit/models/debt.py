"""Debt entities and payoff strategies."""

from __future__ import annotations

import secrets
import string
from dataclasses import dataclass
from enum import Enum

_ID_ALPHABET = string.digits + string.ascii_lowercase


def new_debt_id(length: int = 9) -> str:
    """Return a short random base-36 identifier for a new debt."""

    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


class Strategy(str, Enum):
    """Ordering policy deciding which debt receives extra payments."""

    SNOWBALL = "snowball"  # smallest balance first
    AVALANCHE = "avalanche"  # highest interest rate first

    @classmethod
    def parse(cls, value: "Strategy | str") -> "Strategy":
        """Coerce an enum member or a case-insensitive name into a Strategy."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        raise ValueError("Invalid debt payoff strategy.")

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(slots=True)
class Debt:
    """Represents one interest-bearing debt supplied to payoff projections.

    ``interest_rate`` is an annual percentage (``24.0`` means 24% APR).
    Balances and payments are plain floats in a single currency.
    """

    id: str
    name: str
    balance: float
    interest_rate: float
    minimum_payment: float

    @property
    def monthly_rate(self) -> float:
        return self.interest_rate / 100 / 12
