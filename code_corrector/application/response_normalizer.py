"""
Converts the free-form text returned by the completion provider into a
well-formed CorrectionResponse.

The chain is fence-strip -> brace-scan -> parse -> field-validate. Every
path ends in a response with all three fields populated; degraded results
are signalled through their ``issues``.
"""
import json
import re
from typing import Any, List, Optional

from code_corrector.core.logging_config import logger, preview
from code_corrector.domain.models import CorrectionResponse

DEFAULT_EXPLANATION = "Code has been analyzed and corrections have been applied."
DEFAULT_ISSUES = ["Code analysis completed"]

MISSING_CODE_EXPLANATION = (
    "The model response was missing the corrected code. Please try again."
)
MISSING_CODE_ISSUES = ["Invalid API response format", "Missing corrected code field"]

FALLBACK_EXPLANATION = (
    "The model provided feedback but in an unexpected format. The raw response "
    "is shown as comments in the corrected code section above your original code."
)
FALLBACK_ISSUES = [
    "JSON parsing failed - the model returned non-JSON format",
    "Check the raw response in the corrected code section",
    "Try submitting the code again for a properly formatted response",
]

COMMENT_PREFIXES = {"python": "# "}
DEFAULT_COMMENT_PREFIX = "// "

_OPENING_FENCE = re.compile(r"^```[\w.+-]*\s*")
_CLOSING_FENCE = re.compile(r"\s*```$")


def strip_code_fence(text: str) -> str:
    if not text.startswith("```"):
        return text
    text = _OPENING_FENCE.sub("", text, count=1)
    return _CLOSING_FENCE.sub("", text, count=1)


def extract_json_candidate(text: str) -> str:
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start:end + 1]
    return text


def parse_candidate(candidate: str) -> Optional[dict]:
    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError) as e:
        logger.warning(f"No se pudo parsear la respuesta del modelo: {preview(candidate, 500)}")
        logger.warning(f"Error de parseo: {e}")
        return None

    if not isinstance(parsed, dict):
        logger.warning(f"La respuesta del modelo no es un objeto JSON: {type(parsed).__name__}")
        return None
    return parsed


def _coerce_issues(value: Any) -> List[str]:
    if not isinstance(value, list):
        return list(DEFAULT_ISSUES)

    issues = []
    for item in value:
        if isinstance(item, str):
            issues.append(item)
        elif isinstance(item, (int, float, bool)):
            issues.append(str(item))
        elif isinstance(item, (dict, list)):
            issues.append(json.dumps(item, ensure_ascii=False))
    return issues


def build_result(parsed: dict, original_code: str) -> CorrectionResponse:
    corrected = parsed.get("correctedCode")
    if not isinstance(corrected, str) or not corrected:
        logger.warning("La respuesta del modelo no incluye correctedCode, se devuelve el código original")
        return missing_code_result(original_code)

    explanation = parsed.get("explanation")
    if not isinstance(explanation, str) or not explanation:
        explanation = DEFAULT_EXPLANATION

    return CorrectionResponse(
        correctedCode=corrected,
        explanation=explanation,
        issues=_coerce_issues(parsed.get("issues")),
    )


def missing_code_result(original_code: str) -> CorrectionResponse:
    return CorrectionResponse(
        correctedCode=original_code,
        explanation=MISSING_CODE_EXPLANATION,
        issues=list(MISSING_CODE_ISSUES),
    )


def fallback_result(raw_reply: str, original_code: str, language: Optional[str] = None) -> CorrectionResponse:
    prefix = COMMENT_PREFIXES.get(language, DEFAULT_COMMENT_PREFIX)
    commented = "\n".join(prefix + line for line in raw_reply.split("\n"))
    corrected = (
        f"{prefix}Model response (parsing failed):\n"
        f"{commented}\n\n"
        f"{prefix}Original code:\n"
        f"{original_code}"
    )
    return CorrectionResponse(
        correctedCode=corrected,
        explanation=FALLBACK_EXPLANATION,
        issues=list(FALLBACK_ISSUES),
    )


def normalize_response(
    raw_reply: str,
    original_code: str,
    language: Optional[str] = None,
    preview_chars: int = 300,
) -> CorrectionResponse:
    raw_reply = raw_reply or ""
    logger.info(f"Respuesta cruda del modelo: {preview(raw_reply, preview_chars)}")

    text = raw_reply.strip()
    text = strip_code_fence(text)
    candidate = extract_json_candidate(text)

    parsed = parse_candidate(candidate)
    if parsed is None:
        return fallback_result(raw_reply, original_code, language)

    return build_result(parsed, original_code)
