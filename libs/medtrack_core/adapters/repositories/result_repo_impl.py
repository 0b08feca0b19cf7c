from medtrack_core.core.domain.entities.result_entity import ResultEntity
from medtrack_core.core.domain.repositories.result_repository import ResultRepository
from plugins.django_interface.models import Result as ResultModel


class ResultRepoImpl(ResultRepository):
    async def list_all(self) -> list[ResultEntity]:
        qs = ResultModel.objects.order_by("-created_at", "-id")
        return [ResultEntity.from_model(m) async for m in qs]
