import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from medtrack_core.adapters.config import composition_root
from medtrack_core.core.application.commands.coverage_commands import AnalyzeInsuranceCoverageCommand
from medtrack_core.core.domain.events.exceptions import CoverageAnalysisError, InsuranceNotFoundError
from plugins.django_interface.serializers.dashboard_serializers import AnalyzeCoverageSerializer

logger = structlog.get_logger(__name__)


class AnalyzeCoverageView(APIView):
    """
    POST /api/insurances/<uuid>/analyze-coverage/
    Body: {"pdf_text": "..."}; stores and returns the extracted coverage data.
    """

    def post(self, request, insurance_id):
        payload = AnalyzeCoverageSerializer(data=request.data)
        if not payload.is_valid():
            return Response(
                {"success": False, "errors": payload.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        cmd = AnalyzeInsuranceCoverageCommand(
            insurance_id=str(insurance_id),
            pdf_text=payload.validated_data["pdf_text"],
        )
        try:
            res = composition_root.container.command_bus().dispatch(cmd)
        except InsuranceNotFoundError as exc:
            return Response({"success": False, "detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except CoverageAnalysisError as exc:
            logger.warning("coverage.analysis_failed", insurance_id=str(insurance_id), error=str(exc))
            return Response({"success": False, "detail": str(exc)}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(res.model_dump(), status=status.HTTP_200_OK)
