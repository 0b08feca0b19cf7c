"""Currency rules shared by every bill consumer.

Bills missing a currency are treated as ``USD``. The rule lives here and is
applied once, when a :class:`BillEntity` is built.
"""
from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from medtrack_core.core.domain.entities.bill_entity import BillEntity

DEFAULT_CURRENCY = "USD"
ZERO = Decimal("0")


def normalize_currency(code: str | None) -> str:
    """Return ``code`` stripped, or the default currency when it is blank."""
    if code is None:
        return DEFAULT_CURRENCY
    code = str(code).strip()
    return code or DEFAULT_CURRENCY


def to_decimal(value: Decimal | float | int | str | None) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def primary_currency(bills: Iterable[BillEntity]) -> str:
    """
    Most frequent currency among ``bills``.

    Ties go to the currency seen first, since the scan only replaces the
    current winner on a strictly greater count. Empty input yields USD.
    """
    counts: Counter[str] = Counter()
    for bill in bills:
        counts[normalize_currency(bill.currency)] += 1

    winner = DEFAULT_CURRENCY
    best = 0
    for currency, count in counts.items():
        if count > best:
            best = count
            winner = currency
    return winner
