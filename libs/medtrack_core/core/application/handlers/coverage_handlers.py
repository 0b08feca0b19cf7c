from medtrack_core.core.application.commands.coverage_commands import AnalyzeInsuranceCoverageCommand
from medtrack_core.core.application.cqrs import CommandHandler
from medtrack_core.core.application.dtos.coverage_dto import CoverageAnalysisResultDTO
from medtrack_core.core.application.services.coverage_service import CoverageAnalysisService


class AnalyzeInsuranceCoverageHandler(CommandHandler[AnalyzeInsuranceCoverageCommand]):
    def __init__(self, coverage_service: CoverageAnalysisService):
        self.service = coverage_service

    def handle(self, cmd: AnalyzeInsuranceCoverageCommand) -> CoverageAnalysisResultDTO:
        return self.service.analyze(cmd.insurance_id, cmd.pdf_text)
