from medtrack_core.core.domain.entities.appointment_entity import AppointmentEntity
from medtrack_core.core.domain.repositories.appointment_repository import AppointmentRepository
from plugins.django_interface.models import Appointment as AppointmentModel


class AppointmentRepoImpl(AppointmentRepository):
    async def list_all(self) -> list[AppointmentEntity]:
        return [AppointmentEntity.from_model(m) async for m in AppointmentModel.objects.order_by("-date")]
