"""
Opening-status and annual-savings calculators for the public home page.

Both are pure functions of their inputs; the route layer supplies the
current gym-local time.
"""
import math
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from core.exceptions import ValidationException
from core.utils.timeutils import gym_now

# Day indices follow the Sunday=0 convention used by the public site.
SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)

# (opening hour, closing hour); open while opening <= hour < closing
WEEKLY_SCHEDULE = {
    SUNDAY: (8, 18),
    MONDAY: (5, 23),
    TUESDAY: (5, 23),
    WEDNESDAY: (5, 23),
    THURSDAY: (5, 23),
    FRIDAY: (5, 23),
    SATURDAY: (7, 20),
}

DAY_NAMES = [
    "domingo",
    "segunda-feira",
    "terça-feira",
    "quarta-feira",
    "quinta-feira",
    "sexta-feira",
    "sábado",
]

# Next opening once today's closing hour has passed
NEXT_OPENING_AFTER_CLOSE = {
    SUNDAY: "Segunda, 05:00",
    MONDAY: "Amanhã, 05:00",
    TUESDAY: "Amanhã, 05:00",
    WEDNESDAY: "Amanhã, 05:00",
    THURSDAY: "Amanhã, 05:00",
    FRIDAY: "Sábado, 07:00",
    SATURDAY: "Domingo, 08:00",
}

ANNUAL_DISCOUNT_PERCENTAGE = 15
BILLING_CYCLES = ("monthly", "yearly")


def day_index(moment: datetime) -> int:
    """Sunday=0 .. Saturday=6"""
    return (moment.weekday() + 1) % 7


def gym_status(day: int, hour: int, minute: int = 0) -> Dict[str, Any]:
    if day not in WEEKLY_SCHEDULE:
        raise ValueError(f"day must be between 0 and 6, got {day}")
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be between 0 and 23, got {hour}")

    opening, closing = WEEKLY_SCHEDULE[day]
    is_open = opening <= hour < closing

    if is_open:
        next_status = "Fechamento"
        next_time = f"{closing:02d}:00"
    elif hour < opening:
        next_status = "Abertura"
        next_time = f"{opening:02d}:00"
    else:
        next_status = "Abertura"
        next_time = NEXT_OPENING_AFTER_CLOSE[day]

    return {
        "is_open": is_open,
        "message": "Aberto Agora" if is_open else "Fechado Agora",
        "status": "open" if is_open else "closed",
        "next_status": next_status,
        "next_time": next_time,
        "current_time": f"{hour:02d}:{minute:02d}",
        "day_name": DAY_NAMES[day],
    }


def current_gym_status(now: Optional[datetime] = None) -> Dict[str, Any]:
    """Status at ``now`` (defaults to the current time in the gym's timezone)."""
    now = now or gym_now()
    return gym_status(day_index(now), now.hour, now.minute)


def _round_half_up(value: Decimal, places: str = "1") -> Decimal:
    return value.quantize(Decimal(places), rounding=ROUND_HALF_UP)


def calculate_annual_savings(price: float = 0, billing_cycle: str = "monthly") -> Dict[str, Any]:
    """Compare paying monthly for a year against the discounted annual plan.

    ``price`` is a monthly price for the ``monthly`` cycle and a yearly price
    for the ``yearly`` cycle.
    """
    if billing_cycle not in BILLING_CYCLES:
        raise ValidationException(
            message="billingCycle must be 'monthly' or 'yearly'",
            errors={"billingCycle": f"unsupported value '{billing_cycle}'"},
        )
    if price is None or not math.isfinite(price):
        raise ValidationException(
            message="monthlyPrice must be a number",
            errors={"monthlyPrice": "not a finite number"},
        )
    if price < 0:
        raise ValidationException(
            message="monthlyPrice must not be negative",
            errors={"monthlyPrice": "must be >= 0"},
        )

    amount = Decimal(str(price))
    if billing_cycle == "yearly":
        yearly = amount
        monthly = amount / 12
    else:
        monthly = amount
        yearly = amount * 12

    factor = Decimal(100 - ANNUAL_DISCOUNT_PERCENTAGE) / Decimal(100)
    discounted = _round_half_up(yearly * factor)
    savings = _round_half_up(yearly - yearly * factor)

    return {
        "monthly_price": float(_round_half_up(monthly, "0.01")),
        "yearly_price": int(discounted),
        "savings": int(savings),
        "discount_percentage": ANNUAL_DISCOUNT_PERCENTAGE,
        "billing_cycle": billing_cycle,
    }
