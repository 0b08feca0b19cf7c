from typing import Any

from django.core.exceptions import ValidationError

from medtrack_core.core.domain.entities.insurance_entity import InsuranceEntity
from medtrack_core.core.domain.events.exceptions import InsuranceNotFoundError
from medtrack_core.core.domain.repositories.insurance_repository import InsuranceRepository
from plugins.django_interface.models import Insurance as InsuranceModel


class InsuranceRepoImpl(InsuranceRepository):
    def find_by_id(self, insurance_id: str) -> InsuranceEntity | None:
        try:
            m = InsuranceModel.objects.get(id=insurance_id)
            return InsuranceEntity.from_model(m)
        except (InsuranceModel.DoesNotExist, ValidationError):
            return None

    def save_coverage(self, insurance_id: str, coverage_data: dict[str, Any]) -> InsuranceEntity:
        try:
            m = InsuranceModel.objects.get(id=insurance_id)
        except (InsuranceModel.DoesNotExist, ValidationError) as exc:
            raise InsuranceNotFoundError(insurance_id) from exc
        m.coverage_data = coverage_data
        m.save(update_fields=["coverage_data", "updated_at"])
        return InsuranceEntity.from_model(m)
