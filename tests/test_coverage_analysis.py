"""Tests for coverage JSON salvage and the LLM-backed coverage service."""

import uuid
from unittest import mock

import requests
from django.test import SimpleTestCase

from medtrack_core.core.application.dtos.coverage_dto import GeminiGenerateResponseDTO
from medtrack_core.core.application.services.coverage_service import CoverageAnalysisService
from medtrack_core.core.application.services.utils.coverage_prompt import (
    MAX_POLICY_CHARS,
    build_coverage_prompt,
)
from medtrack_core.core.application.services.utils.json_salvage import salvage_json_object
from medtrack_core.core.domain.entities.insurance_entity import InsuranceEntity
from medtrack_core.core.domain.events.exceptions import (
    CoverageAnalysisError,
    CoverageServiceUnavailableError,
    InsuranceNotFoundError,
)
from medtrack_core.core.domain.repositories.insurance_repository import InsuranceRepository


def gemini_reply(text: str) -> GeminiGenerateResponseDTO:
    return GeminiGenerateResponseDTO.model_validate(
        {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}
    )


def http_error(status: int, body: str = "") -> requests.HTTPError:
    response = requests.Response()
    response.status_code = status
    response._content = body.encode()
    return requests.HTTPError(f"{status} error", response=response)


class InMemoryInsuranceRepo(InsuranceRepository):
    def __init__(self, *insurances: InsuranceEntity):
        self.items = {str(i.id): i for i in insurances}

    def find_by_id(self, insurance_id):
        return self.items.get(str(insurance_id))

    def save_coverage(self, insurance_id, coverage_data):
        entity = self.items[str(insurance_id)]
        entity.coverage_data = coverage_data
        return entity


class JsonSalvageTests(SimpleTestCase):
    def test_plain_json(self) -> None:
        self.assertEqual(salvage_json_object(' {"dental": {"coverage_percentage": 50}} '), {"dental": {"coverage_percentage": 50}})

    def test_fenced_block(self) -> None:
        text = 'Here you go:\n```json\n{"emergency": {"limit": "Unlimited"}}\n```\nThanks'
        self.assertEqual(salvage_json_object(text), {"emergency": {"limit": "Unlimited"}})

    def test_trailing_commas_and_truncation_are_repaired(self) -> None:
        text = '{"exclusions": ["Cosmetic", "Experimental",], "dental": {"coverage_percentage": 50,'
        self.assertEqual(
            salvage_json_object(text),
            {"exclusions": ["Cosmetic", "Experimental"], "dental": {"coverage_percentage": 50}},
        )

    def test_prose_before_object(self) -> None:
        self.assertEqual(salvage_json_object('Sure! {"gp": {"copayment": "0%"}}'), {"gp": {"copayment": "0%"}})

    def test_no_object_raises_with_preview(self) -> None:
        with self.assertRaises(CoverageAnalysisError) as ctx:
            salvage_json_object("I could not read the policy.")
        self.assertIn("I could not read the policy.", str(ctx.exception))

    def test_unrepairable_object_raises(self) -> None:
        with self.assertRaises(CoverageAnalysisError):
            salvage_json_object('{"a": tru')


class CoveragePromptTests(SimpleTestCase):
    def test_policy_text_is_truncated(self) -> None:
        prompt = build_coverage_prompt("x" * (MAX_POLICY_CHARS + 100))
        self.assertIn("x" * MAX_POLICY_CHARS, prompt)
        self.assertNotIn("x" * (MAX_POLICY_CHARS + 1), prompt)
        self.assertTrue(prompt.rstrip().endswith("return as JSON:"))


class CoverageAnalysisServiceTests(SimpleTestCase):
    def setUp(self) -> None:
        self.insurance = InsuranceEntity(id=uuid.uuid4(), provider_name="Colmena", policy_id="P-1")
        self.repo = InMemoryInsuranceRepo(self.insurance)
        self.client = mock.Mock()
        self.client.is_configured = True
        self.service = CoverageAnalysisService(self.repo, self.client, model_names=["m-new", "m-old"])

    def test_extracts_and_persists_coverage(self) -> None:
        self.client.generate_content.return_value = gemini_reply('```json\n{"dental": {"coverage_percentage": 50}}\n```')

        res = self.service.analyze(str(self.insurance.id), "Plan text")

        self.assertTrue(res.success)
        self.assertEqual(res.model, "m-new")
        self.assertEqual(res.coverage_data, {"dental": {"coverage_percentage": 50}})
        self.assertEqual(self.insurance.coverage_data, {"dental": {"coverage_percentage": 50}})

    def test_missing_model_falls_through_to_next(self) -> None:
        self.client.generate_content.side_effect = [http_error(404), gemini_reply('{"gp": {}}')]

        res = self.service.analyze(str(self.insurance.id), "Plan text")

        self.assertEqual(res.model, "m-old")
        self.assertEqual([c.args[0] for c in self.client.generate_content.call_args_list], ["m-new", "m-old"])

    def test_all_models_missing(self) -> None:
        self.client.generate_content.side_effect = http_error(404)
        with self.assertRaises(CoverageAnalysisError) as ctx:
            self.service.analyze(str(self.insurance.id), "Plan text")
        self.assertIn("m-new, m-old", str(ctx.exception))

    def test_quota_error_stops_immediately(self) -> None:
        self.client.generate_content.side_effect = http_error(429, '{"error": {"status": "RESOURCE_EXHAUSTED"}}')
        with self.assertRaises(CoverageServiceUnavailableError) as ctx:
            self.service.analyze(str(self.insurance.id), "Plan text")
        self.assertIn("quota", str(ctx.exception))
        self.assertEqual(self.client.generate_content.call_count, 1)

    def test_invalid_key_is_reported(self) -> None:
        self.client.generate_content.side_effect = http_error(400, '{"error": {"details": [{"reason": "API_KEY_INVALID"}]}}')
        with self.assertRaises(CoverageServiceUnavailableError) as ctx:
            self.service.analyze(str(self.insurance.id), "Plan text")
        self.assertIn("invalid", str(ctx.exception))

    def test_network_failure_is_unavailable(self) -> None:
        self.client.generate_content.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(CoverageServiceUnavailableError):
            self.service.analyze(str(self.insurance.id), "Plan text")

    def test_unknown_insurance(self) -> None:
        with self.assertRaises(InsuranceNotFoundError):
            self.service.analyze(str(uuid.uuid4()), "Plan text")
        self.client.generate_content.assert_not_called()

    def test_blank_text_is_rejected(self) -> None:
        with self.assertRaises(CoverageAnalysisError):
            self.service.analyze(str(self.insurance.id), "   \n")
        self.client.generate_content.assert_not_called()

    def test_unconfigured_client(self) -> None:
        self.client.is_configured = False
        with self.assertRaises(CoverageServiceUnavailableError):
            self.service.analyze(str(self.insurance.id), "Plan text")

    def test_empty_reply_tries_next_model(self) -> None:
        self.client.generate_content.side_effect = [gemini_reply(""), gemini_reply('{"ok": true}')]
        res = self.service.analyze(str(self.insurance.id), "Plan text")
        self.assertEqual(res.coverage_data, {"ok": True})
