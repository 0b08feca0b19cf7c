from __future__ import annotations

from collections.abc import Sequence

import requests
import structlog
from pydantic import ValidationError

from medtrack_core.adapters.api_clients.gemini_api_client import GeminiAPIClient
from medtrack_core.adapters.observability.metrics import COVERAGE_ANALYSIS_COUNT
from medtrack_core.core.application.dtos.coverage_dto import CoverageAnalysisResultDTO
from medtrack_core.core.application.services.utils.coverage_prompt import build_coverage_prompt
from medtrack_core.core.application.services.utils.json_salvage import salvage_json_object
from medtrack_core.core.domain.events.exceptions import (
    CoverageAnalysisError,
    CoverageServiceUnavailableError,
    InsuranceNotFoundError,
    MedTrackError,
)
from medtrack_core.core.domain.repositories.insurance_repository import InsuranceRepository

logger = structlog.get_logger(__name__)

DEFAULT_MODELS = (
    "gemini-3-flash-preview",
    "gemini-2.5-flash",
    "gemini-2.5-pro",
    "gemini-1.5-pro",
    "gemini-1.5-flash",
    "gemini-pro",
)


class _ModelUnavailable(Exception):
    """Internal signal: this model name does not exist, try the next one."""


class CoverageAnalysisService:
    """
    Turns the text of an insurance policy into structured coverage data
    with an LLM and stores it on the policy.
    """

    def __init__(
        self,
        insurance_repo: InsuranceRepository,
        llm_client: GeminiAPIClient,
        model_names: Sequence[str] = DEFAULT_MODELS,
    ):
        self.insurance_repo = insurance_repo
        self.llm_client = llm_client
        self.model_names = tuple(model_names) or DEFAULT_MODELS

    def analyze(self, insurance_id: str, pdf_text: str) -> CoverageAnalysisResultDTO:
        try:
            result = self._analyze(insurance_id, pdf_text)
        except InsuranceNotFoundError:
            COVERAGE_ANALYSIS_COUNT.labels(outcome="not_found").inc()
            raise
        except CoverageServiceUnavailableError:
            COVERAGE_ANALYSIS_COUNT.labels(outcome="unavailable").inc()
            raise
        except MedTrackError:
            COVERAGE_ANALYSIS_COUNT.labels(outcome="failed").inc()
            raise
        COVERAGE_ANALYSIS_COUNT.labels(outcome="success").inc()
        return result

    def _analyze(self, insurance_id: str, pdf_text: str) -> CoverageAnalysisResultDTO:
        insurance = self.insurance_repo.find_by_id(insurance_id)
        if insurance is None:
            raise InsuranceNotFoundError(insurance_id)

        if not pdf_text or not pdf_text.strip():
            raise CoverageAnalysisError(
                "No text could be extracted from the PDF. The PDF might be image-based or encrypted."
            )
        if not self.llm_client.is_configured:
            raise CoverageServiceUnavailableError("GEMINI_API_KEY is not configured")

        log = logger.bind(insurance_id=str(insurance_id), provider=insurance.provider_name)
        log.info("coverage.analysis_started", chars=len(pdf_text), had_coverage=insurance.has_coverage)

        model, reply = self._generate(build_coverage_prompt(pdf_text))
        coverage_data = salvage_json_object(reply)

        updated = self.insurance_repo.save_coverage(insurance_id, coverage_data)
        log.info("coverage.analysis_saved", model=model, keys=len(coverage_data))
        return CoverageAnalysisResultDTO(
            insurance_id=str(updated.id),
            model=model,
            coverage_data=updated.coverage_data or coverage_data,
        )

    # ▶ model fallback
    def _generate(self, prompt: str) -> tuple[str, str]:
        missing: list[str] = []
        for model in self.model_names:
            try:
                reply = self._call_model(model, prompt)
            except _ModelUnavailable:
                missing.append(model)
                logger.warning("coverage.model_not_found", model=model)
                continue
            if reply:
                return model, reply
            logger.warning("coverage.empty_reply", model=model)

        if missing:
            raise CoverageAnalysisError(
                "Gemini model not found. Tried "
                f"{', '.join(missing)} but none were available. Check that the API key "
                "has access to Gemini models and that the Generative Language API is enabled."
            )
        raise CoverageAnalysisError("Failed to get a response from any Gemini model")

    def _call_model(self, model: str, prompt: str) -> str:
        try:
            return self.llm_client.generate_content(model, prompt).text
        except requests.HTTPError as exc:
            raise self._translate_http_error(model, exc) from exc
        except requests.RequestException as exc:
            logger.error("coverage.request_failed", model=model, error=type(exc).__name__)
            raise CoverageServiceUnavailableError(f"Could not reach the Gemini API: {type(exc).__name__}") from exc
        except ValidationError as exc:
            raise CoverageAnalysisError(f"Unexpected Gemini response shape from {model}") from exc

    @staticmethod
    def _translate_http_error(model: str, exc: requests.HTTPError) -> Exception:
        response = exc.response
        status = response.status_code if response is not None else None
        body = response.text if response is not None else ""

        if status == 404 or "is not found" in body:
            return _ModelUnavailable(model)
        logger.error("coverage.llm_http_error", model=model, status_code=status)
        if status == 401 or "API_KEY_INVALID" in body:
            return CoverageServiceUnavailableError("Gemini API key is invalid. Check GEMINI_API_KEY.")
        if status == 429 or "RESOURCE_EXHAUSTED" in body:
            return CoverageServiceUnavailableError(
                "Gemini API quota exceeded. Try again later or edit the coverage data manually."
            )
        if status == 403 or "PERMISSION_DENIED" in body:
            return CoverageServiceUnavailableError(
                "Gemini API permission denied. Enable the Generative Language API for this key."
            )
        return CoverageServiceUnavailableError(f"Gemini API request failed with status {status}")
