"""Products sold through widgets and reported by pingbacks."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class ProductType(str, Enum):
    """Kind of product."""

    FIXED = "fixed"
    SUBSCRIPTION = "subscription"


class PeriodType(str, Enum):
    """Unit of a subscription period."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


def _round_cents(amount: float) -> float:
    scaled = amount * 100
    whole = math.trunc(scaled)
    if abs(scaled - whole) >= 0.5:
        whole += int(math.copysign(1, scaled))
    return whole / 100


@dataclass
class Product:
    """A one-time or subscription item; the amount is rounded to two decimals."""

    id: str
    amount: float = 0.0
    currency_code: str = ""
    name: str = ""
    type: ProductType = ProductType.FIXED
    period_length: int = 0
    period_type: PeriodType | None = None
    recurring: bool = False
    trial_product: Product | None = None

    def __post_init__(self) -> None:
        try:
            self.type = ProductType(self.type)
        except ValueError:
            raise ValueError(f"invalid product type: {self.type}") from None
        if self.period_type in (None, ""):
            self.period_type = None
        else:
            try:
                self.period_type = PeriodType(self.period_type)
            except ValueError:
                raise ValueError(
                    f"invalid period type: {self.period_type}"
                ) from None
        self.amount = _round_cents(float(self.amount))
        if not (self.type is ProductType.SUBSCRIPTION and self.recurring):
            self.trial_product = None

    def is_recurring(self) -> bool:
        """Return True if the product renews automatically."""
        return self.recurring