from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from medtrack_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class AppointmentEntity(EntityMixin):
    id: uuid.UUID
    date: datetime
    doctor_name: str
    specialty: str | None = None
    medical_center: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_after(self, moment: datetime) -> bool:
        return self.date > moment
