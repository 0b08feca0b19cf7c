from django.http import HttpResponse
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

registry = CollectorRegistry()

DASHBOARD_BUILD_DURATION = Histogram(
    "dashboard_build_duration_seconds",
    "Time spent loading records and building a dashboard view",
    ["view"],
    registry=registry,
)

DASHBOARD_FETCH_FAILURES = Counter(
    "dashboard_fetch_failures_total",
    "Record collections that could not be loaded for the dashboard",
    ["source"],
    registry=registry,
)

COVERAGE_ANALYSIS_COUNT = Counter(
    "coverage_analysis_total",
    "Insurance coverage extractions",
    ["outcome"],
    registry=registry,
)


def metrics(request):
    data = generate_latest(registry)
    return HttpResponse(data, content_type=CONTENT_TYPE_LATEST)
