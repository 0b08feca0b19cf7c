from dataclasses import dataclass
from typing import Any

from medtrack_core.core.application.cqrs import QueryDTO


@dataclass(frozen=True)
class GetDashboardStatsQuery(QueryDTO):
    filters: dict[str, Any] | None = None

@dataclass(frozen=True)
class GetTimelineQuery(QueryDTO):
    filters: dict[str, Any] | None = None

@dataclass(frozen=True)
class GetCostBreakdownQuery(QueryDTO):
    filters: dict[str, Any] | None = None
