from asgiref.sync import async_to_sync

from medtrack_core.core.application.cqrs import QueryHandler
from medtrack_core.core.application.dtos.dashboard_dto import (
    CostBreakdownDTO,
    DashboardStatsDTO,
    TimelineEventDTO,
)
from medtrack_core.core.application.queries.dashboard_queries import (
    GetCostBreakdownQuery,
    GetDashboardStatsQuery,
    GetTimelineQuery,
)
from medtrack_core.core.application.services.dashboard_service import DashboardService


class GetDashboardStatsHandler(QueryHandler[GetDashboardStatsQuery, DashboardStatsDTO]):
    def __init__(self, dashboard_service: DashboardService):
        self.service = dashboard_service

    def handle(self, query: GetDashboardStatsQuery) -> DashboardStatsDTO:
        return async_to_sync(self.service.get_stats)()


class GetTimelineHandler(QueryHandler[GetTimelineQuery, list[TimelineEventDTO]]):
    def __init__(self, dashboard_service: DashboardService):
        self.service = dashboard_service

    def handle(self, query: GetTimelineQuery) -> list[TimelineEventDTO]:
        return async_to_sync(self.service.get_timeline)()


class GetCostBreakdownHandler(QueryHandler[GetCostBreakdownQuery, CostBreakdownDTO]):
    def __init__(self, dashboard_service: DashboardService):
        self.service = dashboard_service

    def handle(self, query: GetCostBreakdownQuery) -> CostBreakdownDTO:
        return async_to_sync(self.service.get_cost_breakdown)()
