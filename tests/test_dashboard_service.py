"""Tests for the timeline builder and the dashboard aggregation service."""

import uuid
from datetime import timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase
from django.utils import timezone

from medtrack_core.core.application.services.dashboard_service import DashboardService
from medtrack_core.core.application.services.timeline_builder import build_timeline
from medtrack_core.core.domain.events.exceptions import DataFetchError
from tests.helpers.records import (
    InMemoryAppointmentRepo,
    InMemoryBillRepo,
    InMemoryResultRepo,
    appointment,
    at,
    bill,
    result,
)

NOW = at(2024, 6, 15)


def make_service(appointments=(), results=(), bills=(), *, now=NOW, **kw):
    return DashboardService(
        InMemoryAppointmentRepo(appointments),
        InMemoryResultRepo(results),
        InMemoryBillRepo(bills),
        clock=lambda: now,
        **kw,
    )


class TimelineTests(SimpleTestCase):
    def test_result_without_appointment_uses_created_at(self) -> None:
        res = result(created_at=at(2024, 3, 1))
        (event,) = build_timeline([], [res], [])
        self.assertEqual(event.type, "result")
        self.assertEqual(event.date, at(2024, 3, 1))

    def test_result_with_appointment_uses_appointment_date(self) -> None:
        appt = appointment(date=at(2024, 2, 10))
        res = result(created_at=at(2024, 3, 1), appointment_id=appt.id)
        events = build_timeline([appt], [res], [])
        result_event = next(e for e in events if e.type == "result")
        self.assertEqual(result_event.date, at(2024, 2, 10))

    def test_dangling_appointment_link_falls_back_to_created_at(self) -> None:
        res = result(created_at=at(2024, 3, 1), appointment_id=uuid.uuid4())
        (event,) = build_timeline([], [res], [])
        self.assertEqual(event.date, at(2024, 3, 1))

    def test_bill_date_priority(self) -> None:
        appt = appointment(date=at(2024, 2, 10))
        paid = bill(payment_date=at(2024, 4, 1), appointment_id=appt.id, created_at=at(2024, 1, 1))
        linked = bill(appointment_id=appt.id, created_at=at(2024, 1, 2))
        loose = bill(created_at=at(2024, 1, 3))
        events = {e.id: e for e in build_timeline([appt], [], [paid, linked, loose])}
        self.assertEqual(events[paid.id].date, at(2024, 4, 1))
        self.assertEqual(events[linked.id].date, at(2024, 2, 10))
        self.assertEqual(events[loose.id].date, at(2024, 1, 3))

    def test_sorted_most_recent_first_with_stable_ties(self) -> None:
        day = at(2024, 5, 5)
        appt = appointment(date=day)
        res = result(created_at=day)
        older = bill(created_at=at(2024, 1, 1))
        events = build_timeline([appt], [res], [older])
        self.assertEqual([e.type for e in events], ["appointment", "result", "bill"])
        self.assertIs(events[0].appointment, appt)
        self.assertIs(events[1].result, res)
        self.assertIs(events[2].bill, older)

    def test_one_event_per_record(self) -> None:
        events = build_timeline([appointment()], [result(), result()], [bill(), bill(), bill()])
        self.assertEqual(len(events), 6)


class DashboardStatsTests(SimpleTestCase):
    async def test_upcoming_is_strictly_after_now_ascending_and_capped(self) -> None:
        at_now = appointment(date=NOW)
        past = appointment(date=at(2024, 6, 1))
        future = [appointment(date=at(2024, 7, day)) for day in (9, 3, 7, 1, 5, 2)]
        stats = await make_service([at_now, past, *future]).get_stats()

        self.assertEqual(stats.totalAppointments, 8)
        self.assertNotIn(at_now, stats.upcomingAppointments)
        self.assertEqual(
            [a.date.day for a in stats.upcomingAppointments],
            [1, 2, 3, 5, 7],
        )

    async def test_one_second_after_now_is_upcoming(self) -> None:
        just_after = appointment(date=NOW + timedelta(seconds=1))
        stats = await make_service([appointment(date=NOW), just_after]).get_stats()
        self.assertEqual(stats.upcomingAppointments, [just_after])

    async def test_cost_windows_follow_active_timezone(self) -> None:
        # 02:00 UTC on July 1st is still June 30th in Santiago (UTC-4)
        now = at(2024, 7, 1, 2)
        june = bill(25, payment_date=at(2024, 6, 20))
        with timezone.override(ZoneInfo("America/Santiago")):
            stats = await make_service(bills=[june], now=now).get_stats()
        self.assertEqual(stats.totalCosts.thisMonth, Decimal("25"))

    async def test_recent_results_and_bills_follow_repository_order(self) -> None:
        results = [result(test_name=f"r{i}") for i in range(7)]
        bills = [bill(i + 1) for i in range(7)]
        stats = await make_service(results=results, bills=bills).get_stats()

        self.assertEqual([r.test_name for r in stats.recentResults], ["r0", "r1", "r2", "r3", "r4"])
        self.assertEqual([b.bill.amount for b in stats.recentBills], [Decimal(n) for n in (1, 2, 3, 4, 5)])

    async def test_recent_limit_is_configurable(self) -> None:
        stats = await make_service(results=[result() for _ in range(4)], recent_limit=2).get_stats()
        self.assertEqual(len(stats.recentResults), 2)

    async def test_recent_bills_resolve_relations(self) -> None:
        appt = appointment(specialty="Cardiology")
        res = result(test_type="Imaging")
        bills = [bill(appointment_id=appt.id), bill(result_id=res.id), bill(appointment_id=uuid.uuid4())]
        stats = await make_service([appt], [res], bills).get_stats()

        first, second, third = stats.recentBills
        self.assertIs(first.relatedAppointment, appt)
        self.assertIsNone(first.relatedResult)
        self.assertIs(second.relatedResult, res)
        self.assertIsNone(third.relatedAppointment)

    async def test_cost_windows_count_only_paid_bills(self) -> None:
        bills = [
            bill(100, payment_date=at(2024, 6, 2)),              # this month
            bill(40, payment_date=at(2024, 2, 10)),              # this year
            bill(7, payment_date=at(2023, 12, 31, 23)),          # last year
            bill(500),                                           # unpaid
            bill(30, currency="EUR", payment_date=at(2024, 6, 3)),
        ]
        stats = await make_service(bills=bills).get_stats()

        self.assertEqual(stats.totalCosts.thisMonth, Decimal("130"))
        self.assertEqual(stats.totalCosts.thisYear, Decimal("170"))
        self.assertEqual(stats.totalCosts.byCurrency, {"USD": Decimal("140"), "EUR": Decimal("30")})

    async def test_cost_windows_have_no_upper_bound(self) -> None:
        stats = await make_service(bills=[bill(25, payment_date=at(2024, 6, 28))]).get_stats()
        self.assertEqual(stats.totalCosts.thisMonth, Decimal("25"))

    async def test_breakdown_and_primary_currency(self) -> None:
        bills = [bill(10, currency="EUR"), bill(20, currency="EUR"), bill(99, currency="USD")]
        stats = await make_service(bills=bills).get_stats()
        self.assertEqual(stats.primaryCurrency, "EUR")
        self.assertEqual([e.totalAmount for e in stats.categoryBreakdown], [Decimal("30")])

    async def test_empty_dashboard(self) -> None:
        stats = await make_service().get_stats()
        self.assertEqual(stats.totalAppointments, 0)
        self.assertEqual(stats.upcomingAppointments, [])
        self.assertEqual(stats.totalCosts.thisYear, Decimal("0"))
        self.assertEqual(stats.totalCosts.byCurrency, {})
        self.assertEqual(stats.primaryCurrency, "USD")


class DashboardFetchTests(SimpleTestCase):
    async def test_failed_fetch_names_the_source(self) -> None:
        boom = RuntimeError("db down")
        service = DashboardService(
            InMemoryAppointmentRepo([appointment()]),
            InMemoryResultRepo(error=boom),
            InMemoryBillRepo([bill()]),
            clock=lambda: NOW,
        )
        with self.assertRaises(DataFetchError) as ctx:
            await service.get_stats()

        self.assertEqual(ctx.exception.source, "results")
        self.assertIs(ctx.exception.__cause__, boom)

    async def test_all_three_collections_are_requested(self) -> None:
        repos = (InMemoryAppointmentRepo(), InMemoryResultRepo(), InMemoryBillRepo())
        service = DashboardService(*repos, clock=lambda: NOW)
        await service.get_timeline()
        self.assertEqual([r.calls for r in repos], [1, 1, 1])

    async def test_timeline_failure_propagates(self) -> None:
        service = DashboardService(
            InMemoryAppointmentRepo(error=ValueError("bad row")),
            InMemoryResultRepo(),
            InMemoryBillRepo(),
        )
        with self.assertRaises(DataFetchError) as ctx:
            await service.get_timeline()
        self.assertEqual(ctx.exception.source, "appointments")

    async def test_cost_breakdown_bundles_efficiency(self) -> None:
        res = await make_service(bills=[bill(100, coverage=25)]).get_cost_breakdown()
        self.assertEqual(res.primaryCurrency, "USD")
        self.assertEqual(res.coverageEfficiency.userPaid, Decimal("75"))
        self.assertEqual(len(res.categoryBreakdown), 1)
