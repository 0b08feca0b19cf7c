from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Literal

from medtrack_core.core.domain.entities.appointment_entity import AppointmentEntity
from medtrack_core.core.domain.entities.bill_entity import BillEntity
from medtrack_core.core.domain.entities.result_entity import ResultEntity

TimelineEventType = Literal["appointment", "result", "bill"]


@dataclass(frozen=True)
class CategoryBreakdownDTO:
    category: str
    totalAmount: Decimal
    insuranceCoverage: Decimal
    userPaid: Decimal
    coveragePercentage: float

@dataclass(frozen=True)
class OutOfPocketShareDTO:
    category: str
    amount: Decimal
    percentage: float

@dataclass(frozen=True)
class CoverageEfficiencyDTO:
    totalAmount: Decimal
    insuranceCoverage: Decimal
    userPaid: Decimal
    coveragePercentage: float
    userPaidPercentage: float
    outOfPocketShares: list[OutOfPocketShareDTO] = field(default_factory=list)

@dataclass(frozen=True)
class CostBreakdownDTO:
    primaryCurrency: str
    categoryBreakdown: list[CategoryBreakdownDTO]
    coverageEfficiency: CoverageEfficiencyDTO

@dataclass(frozen=True)
class TotalCostsDTO:
    thisMonth: Decimal
    thisYear: Decimal
    byCurrency: dict[str, Decimal] = field(default_factory=dict)

@dataclass(frozen=True)
class BillWithRelationDTO:
    bill: BillEntity
    relatedAppointment: AppointmentEntity | None = None
    relatedResult: ResultEntity | None = None

@dataclass(frozen=True)
class DashboardStatsDTO:
    totalAppointments: int
    upcomingAppointments: list[AppointmentEntity]
    recentResults: list[ResultEntity]
    totalCosts: TotalCostsDTO
    recentBills: list[BillWithRelationDTO]
    categoryBreakdown: list[CategoryBreakdownDTO]
    primaryCurrency: str

@dataclass(frozen=True)
class TimelineEventDTO:
    id: object
    type: TimelineEventType
    date: datetime
    appointment: AppointmentEntity | None = None
    result: ResultEntity | None = None
    bill: BillEntity | None = None
