from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from datetime import datetime
from decimal import Decimal

import structlog
from django.utils import timezone

from medtrack_core.adapters.observability.metrics import (
    DASHBOARD_BUILD_DURATION,
    DASHBOARD_FETCH_FAILURES,
)
from medtrack_core.core.application.dtos.dashboard_dto import (
    BillWithRelationDTO,
    CostBreakdownDTO,
    DashboardStatsDTO,
    TimelineEventDTO,
    TotalCostsDTO,
)
from medtrack_core.core.application.services.cost_breakdown import (
    compute_category_breakdown,
    compute_coverage_efficiency,
)
from medtrack_core.core.application.services.timeline_builder import build_timeline
from medtrack_core.core.domain.entities.appointment_entity import AppointmentEntity
from medtrack_core.core.domain.entities.bill_entity import BillEntity
from medtrack_core.core.domain.entities.result_entity import ResultEntity
from medtrack_core.core.domain.events.exceptions import DataFetchError
from medtrack_core.core.domain.repositories.appointment_repository import AppointmentRepository
from medtrack_core.core.domain.repositories.bill_repository import BillRepository
from medtrack_core.core.domain.repositories.result_repository import ResultRepository
from medtrack_core.core.domain.services.category_classifier import index_by_id
from medtrack_core.core.domain.services.currency import ZERO, primary_currency

logger = structlog.get_logger(__name__)

RECENT_LIMIT = 5
Records = tuple[list[AppointmentEntity], list[ResultEntity], list[BillEntity]]


def start_of_month(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def start_of_year(moment: datetime) -> datetime:
    return start_of_month(moment).replace(month=1)


class DashboardService:
    def __init__(
        self,
        appointment_repo: AppointmentRepository,
        result_repo: ResultRepository,
        bill_repo: BillRepository,
        *,
        clock: Callable[[], datetime] = timezone.now,
        recent_limit: int = RECENT_LIMIT,
    ):
        self.appointment_repo = appointment_repo
        self.result_repo = result_repo
        self.bill_repo = bill_repo
        self.clock = clock
        self.recent_limit = recent_limit

    # ▶ fan-out / fan-in over the three collections
    async def _load_records(self) -> Records:
        sources = ("appointments", "results", "bills")
        outcomes = await asyncio.gather(
            self.appointment_repo.list_all(),
            self.result_repo.list_all(),
            self.bill_repo.list_all(),
            return_exceptions=True,
        )
        for source, outcome in zip(sources, outcomes):
            if not isinstance(outcome, BaseException):
                continue
            if not isinstance(outcome, Exception):
                raise outcome
            DASHBOARD_FETCH_FAILURES.labels(source=source).inc()
            logger.error("dashboard.fetch_failed", source=source, error=str(outcome))
            raise DataFetchError(source, f"Failed to fetch {source}: {outcome}") from outcome

        appointments, results, bills = outcomes
        logger.debug(
            "dashboard.records_loaded",
            appointments=len(appointments),
            results=len(results),
            bills=len(bills),
        )
        return list(appointments), list(results), list(bills)

    async def get_stats(self) -> DashboardStatsDTO:
        with DASHBOARD_BUILD_DURATION.labels(view="stats").time():
            appointments, results, bills = await self._load_records()
            stats = self.build_stats(appointments, results, bills, now=self.clock())
        logger.info(
            "dashboard.stats_built",
            total_appointments=stats.totalAppointments,
            primary_currency=stats.primaryCurrency,
            categories=len(stats.categoryBreakdown),
        )
        return stats

    async def get_timeline(self) -> list[TimelineEventDTO]:
        with DASHBOARD_BUILD_DURATION.labels(view="timeline").time():
            appointments, results, bills = await self._load_records()
            events = build_timeline(appointments, results, bills)
        logger.info("dashboard.timeline_built", events=len(events))
        return events

    async def get_cost_breakdown(self) -> CostBreakdownDTO:
        with DASHBOARD_BUILD_DURATION.labels(view="cost_breakdown").time():
            appointments, results, bills = await self._load_records()
            breakdown = compute_category_breakdown(bills, appointments, results)
        return CostBreakdownDTO(
            primaryCurrency=primary_currency(bills),
            categoryBreakdown=breakdown,
            coverageEfficiency=compute_coverage_efficiency(breakdown),
        )

    # ▶ pure aggregation over already-loaded collections
    def build_stats(
        self,
        appointments: Sequence[AppointmentEntity],
        results: Sequence[ResultEntity],
        bills: Sequence[BillEntity],
        *,
        now: datetime,
    ) -> DashboardStatsDTO:
        limit = self.recent_limit
        # calendar boundaries in the active timezone (settings.TIME_ZONE by default)
        local_now = timezone.localtime(now)
        month_start = start_of_month(local_now)
        year_start = start_of_year(local_now)

        upcoming = sorted(
            (a for a in appointments if a.is_after(now)),
            key=lambda a: a.date,
        )[:limit]

        # window start only; bills dated later in the period still count
        paid_bills = [b for b in bills if b.is_paid]
        month_bills = [b for b in paid_bills if b.payment_date >= month_start]
        year_bills = [b for b in paid_bills if b.payment_date >= year_start]

        by_currency: dict[str, Decimal] = {}
        for bill in year_bills:
            by_currency[bill.currency] = by_currency.get(bill.currency, ZERO) + bill.amount

        totals = TotalCostsDTO(
            thisMonth=sum((b.amount for b in month_bills), ZERO),
            thisYear=sum((b.amount for b in year_bills), ZERO),
            byCurrency=by_currency,
        )

        appointments_by_id = index_by_id(appointments)
        results_by_id = index_by_id(results)
        recent_bills = [
            BillWithRelationDTO(
                bill=bill,
                relatedAppointment=appointments_by_id.get(bill.appointment_id) if bill.appointment_id else None,
                relatedResult=results_by_id.get(bill.result_id) if bill.result_id else None,
            )
            for bill in bills[:limit]
        ]

        return DashboardStatsDTO(
            totalAppointments=len(appointments),
            upcomingAppointments=upcoming,
            recentResults=list(results[:limit]),
            totalCosts=totals,
            recentBills=recent_bills,
            categoryBreakdown=compute_category_breakdown(bills, appointments, results),
            primaryCurrency=primary_currency(bills),
        )
