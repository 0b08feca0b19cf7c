"""
Prompt used to extract structured coverage data from an insurance policy.
"""

MAX_POLICY_CHARS = 30000

_EXAMPLE_FORMAT = """{
  "specialist_visits": {
    "coverage_percentage": 80,
    "limit": "2 UF per month",
    "copayment": "20%"
  },
  "general_practitioner": {
    "coverage_percentage": 100,
    "copayment": "0%"
  },
  "emergency": {
    "coverage_percentage": 90,
    "limit": "Unlimited"
  },
  "dental": {
    "coverage_percentage": 50,
    "annual_limit": "50 UF"
  },
  "medications": {
    "coverage_percentage": 70,
    "limit": "Unlimited"
  },
  "exclusions": ["Cosmetic procedures", "Experimental treatments"]
}"""

_TEMPLATE = """You are an expert at analyzing Chilean health insurance policy documents. \
Extract coverage information from the following insurance policy text and return it \
as a structured JSON object.

Focus on extracting:
- Coverage percentages for different services (specialist visits, general practitioner, emergency, etc.)
- Coverage limits (maximum amounts in UF or CLP)
- Copayments or deductibles
- Specific coverage details for procedures, medications, dental, vision, etc.
- Any exclusions or limitations mentioned

The insurance document may be in Spanish and use Chilean terminology (Isapre, Fonasa, UF, CLP, etc.).

Return ONLY valid JSON, no additional text or markdown. Use a clear, hierarchical structure. \
Example format:
{example}

Insurance Policy Text:
{policy}

Extract the coverage information and return as JSON:"""


def truncate_policy_text(pdf_text: str, limit: int = MAX_POLICY_CHARS) -> str:
    return pdf_text[:limit]


def build_coverage_prompt(pdf_text: str) -> str:
    return _TEMPLATE.format(example=_EXAMPLE_FORMAT, policy=truncate_policy_text(pdf_text))
