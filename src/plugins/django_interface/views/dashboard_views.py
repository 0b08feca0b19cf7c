from dataclasses import asdict

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from medtrack_core.adapters.config import composition_root
from medtrack_core.core.application.queries.dashboard_queries import (
    GetCostBreakdownQuery,
    GetDashboardStatsQuery,
    GetTimelineQuery,
)
from medtrack_core.core.domain.events.exceptions import DataFetchError
from plugins.django_interface.serializers.dashboard_serializers import TimelineQuerySerializer

logger = structlog.get_logger(__name__)


class DashboardAPIView(APIView):
    """Base for the dashboard views: a failed record fetch becomes a 503."""

    def dispatch_query(self, query):
        return composition_root.container.query_bus().dispatch(query)

    def handle_exception(self, exc):
        if isinstance(exc, DataFetchError):
            logger.warning("dashboard.unavailable", source=exc.source, view=type(self).__name__)
            return Response(
                {"detail": str(exc), "source": exc.source},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        return super().handle_exception(exc)


def flatten_bill(entry) -> dict:
    """Bill fields at the top level with its related records alongside."""
    return {
        **asdict(entry.bill),
        "relatedAppointment": asdict(entry.relatedAppointment) if entry.relatedAppointment else None,
        "relatedResult": asdict(entry.relatedResult) if entry.relatedResult else None,
    }


# ╭──────────────────────────────────────────────╮
# │      DASHBOARD STATS                         │
# ╰──────────────────────────────────────────────╯
class DashboardStatsView(DashboardAPIView):
    def get(self, request):
        res = self.dispatch_query(GetDashboardStatsQuery())
        data = asdict(res)
        data["recentBills"] = [flatten_bill(entry) for entry in res.recentBills]
        return Response(data)


# ╭──────────────────────────────────────────────╮
# │      HEALTH JOURNEY TIMELINE                 │
# ╰──────────────────────────────────────────────╯
class DashboardTimelineView(DashboardAPIView):
    def get(self, request):
        params = TimelineQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        types = params.validated_data.get("types")

        events = self.dispatch_query(GetTimelineQuery())
        if types:
            # applied to the finished timeline; relative order is kept
            events = [event for event in events if event.type in types]
        return Response([asdict(event) for event in events])


# ╭──────────────────────────────────────────────╮
# │      COST BREAKDOWN                          │
# ╰──────────────────────────────────────────────╯
class CostBreakdownView(DashboardAPIView):
    def get(self, request):
        res = self.dispatch_query(GetCostBreakdownQuery())
        return Response(asdict(res))
