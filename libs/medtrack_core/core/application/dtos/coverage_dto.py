from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# ───────────────────────────────────────────────
# DTOs for the Gemini generateContent API
# ───────────────────────────────────────────────

class GeminiPartDTO(BaseModel):
    text: str | None = None

class GeminiContentDTO(BaseModel):
    parts: list[GeminiPartDTO] = Field(default_factory=list)
    role: str | None = None

class GeminiCandidateDTO(BaseModel):
    content: GeminiContentDTO | None = None
    finishReason: str | None = None

class GeminiGenerateResponseDTO(BaseModel):
    candidates: list[GeminiCandidateDTO] = Field(default_factory=list)
    usageMetadata: dict[str, Any] | None = None
    modelVersion: str | None = None

    @property
    def text(self) -> str:
        """Concatenated text of the first candidate (empty when the model returned nothing)."""
        if not self.candidates or self.candidates[0].content is None:
            return ""
        return "".join(part.text or "" for part in self.candidates[0].content.parts)

# ───────────────────────────────────────────────
# Application result
# ───────────────────────────────────────────────

class CoverageAnalysisResultDTO(BaseModel):
    success: bool = True
    insurance_id: str
    model: str
    coverage_data: dict[str, Any]
