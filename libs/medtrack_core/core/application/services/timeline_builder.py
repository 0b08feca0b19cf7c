from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime

from medtrack_core.core.application.dtos.dashboard_dto import TimelineEventDTO
from medtrack_core.core.domain.entities.appointment_entity import AppointmentEntity
from medtrack_core.core.domain.entities.bill_entity import BillEntity
from medtrack_core.core.domain.entities.result_entity import ResultEntity
from medtrack_core.core.domain.services.category_classifier import index_by_id


def result_effective_date(
    result: ResultEntity, appointments_by_id: Mapping[object, AppointmentEntity]
) -> datetime:
    if result.appointment_id:
        appointment = appointments_by_id.get(result.appointment_id)
        if appointment is not None:
            return appointment.date
    return result.created_at


def bill_effective_date(
    bill: BillEntity, appointments_by_id: Mapping[object, AppointmentEntity]
) -> datetime:
    if bill.payment_date is not None:
        return bill.payment_date
    if bill.appointment_id:
        appointment = appointments_by_id.get(bill.appointment_id)
        if appointment is not None:
            return appointment.date
    return bill.created_at


def build_timeline(
    appointments: Sequence[AppointmentEntity],
    results: Sequence[ResultEntity],
    bills: Sequence[BillEntity],
) -> list[TimelineEventDTO]:
    """
    One event per appointment, result and bill, most recent first.

    Events sharing a date keep their insertion order (appointments, then
    results, then bills). No type filtering happens here.
    """
    appointments_by_id = index_by_id(appointments)

    events: list[TimelineEventDTO] = [
        TimelineEventDTO(id=a.id, type="appointment", date=a.date, appointment=a)
        for a in appointments
    ]
    events.extend(
        TimelineEventDTO(
            id=r.id,
            type="result",
            date=result_effective_date(r, appointments_by_id),
            result=r,
        )
        for r in results
    )
    events.extend(
        TimelineEventDTO(
            id=b.id,
            type="bill",
            date=bill_effective_date(b, appointments_by_id),
            bill=b,
        )
        for b in bills
    )
    return sorted(events, key=lambda event: event.date, reverse=True)
