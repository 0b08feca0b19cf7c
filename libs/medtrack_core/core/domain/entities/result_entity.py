from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime

from medtrack_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class ResultEntity(EntityMixin):
    id: uuid.UUID
    test_name: str
    created_at: datetime
    appointment_id: uuid.UUID | None = None
    test_type: str | None = None
    value: str | None = None
    unit: str | None = None
    reference_range: str | None = None
    notes: str | None = None
    file_url: str | None = None
