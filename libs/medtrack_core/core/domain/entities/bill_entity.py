from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from medtrack_core.core.domain.entities._base import EntityMixin
from medtrack_core.core.domain.services.currency import (
    DEFAULT_CURRENCY,
    ZERO,
    normalize_currency,
    to_decimal,
)


@dataclass(slots=True)
class BillEntity(EntityMixin):
    id: uuid.UUID
    amount: Decimal
    created_at: datetime
    currency: str = DEFAULT_CURRENCY
    appointment_id: uuid.UUID | None = None
    result_id: uuid.UUID | None = None
    insurance_coverage: Decimal | None = None
    payment_date: datetime | None = None
    payment_method: str | None = None
    receipt_url: str | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        # ingestion boundary: currency and money types are fixed here only
        self.currency = normalize_currency(self.currency)
        self.amount = to_decimal(self.amount)
        if self.insurance_coverage is not None:
            self.insurance_coverage = to_decimal(self.insurance_coverage)

    @property
    def covered_amount(self) -> Decimal:
        return self.insurance_coverage if self.insurance_coverage is not None else ZERO

    @property
    def is_paid(self) -> bool:
        return self.payment_date is not None
