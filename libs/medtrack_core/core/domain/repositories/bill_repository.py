from abc import ABC, abstractmethod

from medtrack_core.core.domain.entities.bill_entity import BillEntity


class BillRepository(ABC):
    @abstractmethod
    async def list_all(self) -> list[BillEntity]:
        """
        Every bill, newest first (by ``created_at``).
        The dashboard slices its "recent bills" straight from this order.
        """
        ...
