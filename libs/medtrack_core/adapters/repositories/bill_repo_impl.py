from medtrack_core.core.domain.entities.bill_entity import BillEntity
from medtrack_core.core.domain.repositories.bill_repository import BillRepository
from plugins.django_interface.models import Bill as BillModel


class BillRepoImpl(BillRepository):
    async def list_all(self) -> list[BillEntity]:
        qs = BillModel.objects.order_by("-created_at", "-id")
        return [BillEntity.from_model(m) async for m in qs]
