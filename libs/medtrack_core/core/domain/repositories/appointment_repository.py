from abc import ABC, abstractmethod

from medtrack_core.core.domain.entities.appointment_entity import AppointmentEntity


class AppointmentRepository(ABC):
    @abstractmethod
    async def list_all(self) -> list[AppointmentEntity]:
        """Every appointment, in any order."""
        ...
