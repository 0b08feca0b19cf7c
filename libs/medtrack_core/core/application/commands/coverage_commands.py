from dataclasses import dataclass

from medtrack_core.core.application.cqrs import CommandDTO


@dataclass(frozen=True)
class AnalyzeInsuranceCoverageCommand(CommandDTO):
    insurance_id: str
    pdf_text: str
