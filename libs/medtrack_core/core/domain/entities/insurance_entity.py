from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from medtrack_core.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class InsuranceEntity(EntityMixin):
    id: uuid.UUID
    provider_name: str
    policy_id: str
    insurance_type: str | None = None
    price: Decimal | None = None
    currency: str | None = None
    pdf_url: str | None = None
    coverage_data: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def has_coverage(self) -> bool:
        return bool(self.coverage_data)
