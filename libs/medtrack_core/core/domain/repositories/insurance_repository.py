from abc import ABC, abstractmethod
from typing import Any

from medtrack_core.core.domain.entities.insurance_entity import InsuranceEntity


class InsuranceRepository(ABC):
    @abstractmethod
    def find_by_id(self, insurance_id: str) -> InsuranceEntity | None:
        """Fetch one policy by id."""
        ...

    @abstractmethod
    def save_coverage(self, insurance_id: str, coverage_data: dict[str, Any]) -> InsuranceEntity:
        """Store the extracted coverage data and return the updated policy."""
        ...
