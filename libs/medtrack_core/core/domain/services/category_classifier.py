from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol, TypeVar

from medtrack_core.core.domain.entities.appointment_entity import AppointmentEntity
from medtrack_core.core.domain.entities.bill_entity import BillEntity
from medtrack_core.core.domain.entities.result_entity import ResultEntity

APPOINTMENT_CATEGORY = "Appointment"
TEST_CATEGORY = "Test"
OTHER_CATEGORY = "Other"


class _Identified(Protocol):
    id: object


R = TypeVar("R", bound=_Identified)


def index_by_id(records: Iterable[R]) -> dict[object, R]:
    """Map id -> record. On duplicate ids the first record wins."""
    index: dict[object, R] = {}
    for record in records:
        index.setdefault(record.id, record)
    return index


def classify_bill(
    bill: BillEntity,
    appointment: AppointmentEntity | None = None,
    result: ResultEntity | None = None,
) -> str:
    """
    Category label of a bill.

    1. linked appointment with specialty -> specialty
    2. linked appointment                -> "Appointment"
    3. linked result with test type      -> test type
    4. linked result                     -> "Test"
    5. otherwise                         -> "Other"
    """
    if bill.appointment_id:
        if appointment is not None and appointment.specialty:
            return appointment.specialty
        return APPOINTMENT_CATEGORY
    if bill.result_id:
        if result is not None and result.test_type:
            return result.test_type
        return TEST_CATEGORY
    return OTHER_CATEGORY
