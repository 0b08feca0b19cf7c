from abc import ABC, abstractmethod

from medtrack_core.core.domain.entities.result_entity import ResultEntity


class ResultRepository(ABC):
    @abstractmethod
    async def list_all(self) -> list[ResultEntity]:
        """
        Every result, newest first (by ``created_at``).
        The dashboard slices its "recent results" straight from this order.
        """
        ...
