from __future__ import annotations

import structlog

from medtrack_core.adapters.api_clients.base_api_client import BaseAPIClient
from medtrack_core.core.application.dtos.coverage_dto import GeminiGenerateResponseDTO

logger = structlog.get_logger(__name__)

DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_OUTPUT_TOKENS = 2000


class GeminiAPIClient(BaseAPIClient):
    """
    Thin wrapper over the Generative Language REST API (``generateContent``).
    The API key travels as the ``key`` query parameter of every request.
    """

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout: float = 60.0,
        temperature: float = DEFAULT_TEMPERATURE,
        max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS,
    ) -> None:
        super().__init__(
            base_url=base_url,
            default_headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=timeout,
        )
        self.api_key = api_key
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        logger.debug("GeminiAPIClient initialised", base_url=self.base_url, configured=self.is_configured)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def generate_content(self, model: str, prompt: str) -> GeminiGenerateResponseDTO:
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_output_tokens,
            },
        }
        return self._post(
            "models/{model}:generateContent",
            path_params={"model": model},
            params={"key": self.api_key},
            json=body,
            response_model=GeminiGenerateResponseDTO,
        )
