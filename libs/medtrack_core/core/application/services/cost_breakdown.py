from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from medtrack_core.core.application.dtos.dashboard_dto import (
    CategoryBreakdownDTO,
    CoverageEfficiencyDTO,
    OutOfPocketShareDTO,
)
from medtrack_core.core.domain.entities.appointment_entity import AppointmentEntity
from medtrack_core.core.domain.entities.bill_entity import BillEntity
from medtrack_core.core.domain.entities.result_entity import ResultEntity
from medtrack_core.core.domain.services.category_classifier import classify_bill, index_by_id
from medtrack_core.core.domain.services.currency import ZERO, primary_currency

HUNDRED = Decimal("100")
TENTH = Decimal("0.1")


def _percentage(part: Decimal, whole: Decimal) -> float:
    return float(part / whole * HUNDRED) if whole > 0 else 0.0


def _share(part: Decimal, whole: Decimal) -> float:
    """Percentage to one decimal, ties rounded away from zero (12.25 -> 12.3)."""
    if whole <= 0:
        return 0.0
    return float((part / whole * HUNDRED).quantize(TENTH, rounding=ROUND_HALF_UP))


def compute_category_breakdown(
    bills: Sequence[BillEntity],
    appointments: Sequence[AppointmentEntity],
    results: Sequence[ResultEntity],
) -> list[CategoryBreakdownDTO]:
    """
    Per-category spend over the bills in the primary currency.

    Bills in any other currency are left out (no conversion is attempted).
    ``userPaid`` is a plain subtraction and may go negative when the
    recorded coverage exceeds the amount.
    """
    currency = primary_currency(bills)
    appointments_by_id = index_by_id(appointments)
    results_by_id = index_by_id(results)

    # category -> [total amount, insurance coverage]; dict keeps first-seen order
    totals: dict[str, list[Decimal]] = {}
    for bill in bills:
        if bill.currency != currency:
            continue
        appointment = appointments_by_id.get(bill.appointment_id) if bill.appointment_id else None
        result = results_by_id.get(bill.result_id) if bill.result_id else None
        category = classify_bill(bill, appointment, result)

        bucket = totals.setdefault(category, [ZERO, ZERO])
        bucket[0] += bill.amount
        bucket[1] += bill.covered_amount

    breakdown = [
        CategoryBreakdownDTO(
            category=category,
            totalAmount=total,
            insuranceCoverage=covered,
            userPaid=total - covered,
            coveragePercentage=_percentage(covered, total),
        )
        for category, (total, covered) in totals.items()
    ]
    # sorted() is stable: ties keep first-seen category order
    return sorted(breakdown, key=lambda entry: entry.userPaid, reverse=True)


def compute_coverage_efficiency(breakdown: Sequence[CategoryBreakdownDTO]) -> CoverageEfficiencyDTO:
    """Overall insurance vs. out-of-pocket figures for a category breakdown."""
    total = sum((entry.totalAmount for entry in breakdown), ZERO)
    covered = sum((entry.insuranceCoverage for entry in breakdown), ZERO)
    user_paid = sum((entry.userPaid for entry in breakdown), ZERO)

    shares = [
        OutOfPocketShareDTO(
            category=entry.category,
            amount=entry.userPaid,
            percentage=_share(entry.userPaid, user_paid),
        )
        for entry in breakdown
        if entry.userPaid > 0
    ]

    return CoverageEfficiencyDTO(
        totalAmount=total,
        insuranceCoverage=covered,
        userPaid=user_paid,
        coveragePercentage=_percentage(covered, total),
        userPaidPercentage=_percentage(user_paid, total),
        outOfPocketShares=shares,
    )
