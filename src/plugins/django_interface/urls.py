from django.urls import path

from .views.dashboard_views import CostBreakdownView, DashboardStatsView, DashboardTimelineView
from .views.health_views import HealthCheckView
from .views.insurance_views import AnalyzeCoverageView

urlpatterns = [
    path("healthz/", HealthCheckView.as_view(), name="healthz"),
    path("dashboard/stats/", DashboardStatsView.as_view(), name="dashboard-stats"),
    path("dashboard/timeline/", DashboardTimelineView.as_view(), name="dashboard-timeline"),
    path("dashboard/cost-breakdown/", CostBreakdownView.as_view(), name="dashboard-cost-breakdown"),
    path(
        "insurances/<uuid:insurance_id>/analyze-coverage/",
        AnalyzeCoverageView.as_view(),
        name="insurance-analyze-coverage",
    ),
]
