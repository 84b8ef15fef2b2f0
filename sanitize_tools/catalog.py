"""Canonical sanitization tools.

The descriptions are the only signal the selection step has about a tool's
purpose, so they must stay precise and must not overlap.
"""

from sanitize_tools.base import Tool
from sanitize_tools.registry import ToolRegistry

ANONYMIZE_PII = Tool(
    name="anonymize_pii",
    description=(
        "Anonymizes personally identifiable information (PII): names, emails, "
        "phone numbers, postal addresses and dates of birth."
    ),
)

REDACT_FINANCIAL = Tool(
    name="redact_financial",
    description=(
        "Redacts financial data: IBANs, bank account numbers, credit-card numbers, "
        "crypto wallet addresses and sort codes."
    ),
)

REDACT_MEDICAL = Tool(
    name="redact_medical",
    description=(
        "Redacts medical data: patient IDs, medical record numbers, diagnoses "
        "and medications."
    ),
)

GENERAL_SANITIZE = Tool(
    name="general_sanitize",
    description=(
        "General sanitization of any other sensitive or confidential information "
        "not covered by a specialised tool."
    ),
)

CANONICAL_TOOLS = (ANONYMIZE_PII, REDACT_FINANCIAL, REDACT_MEDICAL, GENERAL_SANITIZE)

# ============================================================================
# SYSTEM INSTRUCTIONS
# ============================================================================

FALLBACK_TOOL = GENERAL_SANITIZE.name

SYSTEM_PROMPTS: dict[str, str] = {
    "anonymize_pii": (
        "You are a PII anonymiser. Replace all personally identifiable information "
        "with appropriate placeholders while maintaining the structure and readability "
        "of the text. Return only the anonymised text."
    ),
    "redact_financial": (
        "You are a financial-data redactor. Replace all financial information like bank "
        "account numbers, credit card numbers, IBANs, crypto wallet addresses, and sort "
        "codes with appropriate placeholders while maintaining the structure and "
        "readability of the text. Return only the redacted text."
    ),
    "redact_medical": (
        "You are a medical data redactor. Replace all medical information like patient "
        "IDs, medical record numbers, diagnoses, medications, and other sensitive health "
        "information with appropriate placeholders while maintaining the structure and "
        "readability of the text. Return only the redacted text."
    ),
    "general_sanitize": (
        "You are a general data sanitizer. Replace any sensitive or confidential "
        "information with appropriate placeholders while maintaining the structure and "
        "readability of the text. This includes but is not limited to names, addresses, "
        "phone numbers, emails, IDs, and other personally identifiable information. "
        "Return only the sanitized text."
    ),
}


def instruction_for(tool_name: str) -> str:
    """System instruction for a tool; unknown tools get the general one."""
    return SYSTEM_PROMPTS.get(tool_name, SYSTEM_PROMPTS[FALLBACK_TOOL])


def build_default_registry() -> ToolRegistry:
    """Registry holding the four canonical tools."""
    registry = ToolRegistry()
    for tool in CANONICAL_TOOLS:
        registry.register(tool)
    return registry
