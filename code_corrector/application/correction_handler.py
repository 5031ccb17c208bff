import json
from typing import Any, Tuple

from code_corrector.application.prompt_builder import build_prompt
from code_corrector.application.response_normalizer import normalize_response
from code_corrector.core.config import Settings
from code_corrector.core.exceptions import CorrectionError, StatusCategory
from code_corrector.core.logging_config import logger
from code_corrector.domain.languages import is_supported
from code_corrector.domain.models import CorrectionRequest


def parse_request(raw_input: Any) -> CorrectionRequest:
    # El cuerpo HTTP llega sin decodificar
    if isinstance(raw_input, (bytes, str)):
        try:
            raw_input = json.loads(raw_input)
        except ValueError as e:
            logger.warning(f"Cuerpo JSON inválido: {e}")
            raise CorrectionError(StatusCategory.INVALID_INPUT, "Request body must be valid JSON") from e

    if not isinstance(raw_input, dict):
        raise CorrectionError(StatusCategory.INVALID_INPUT, "Request body must be a JSON object")

    code = raw_input.get("code")
    if not isinstance(code, str) or not code.strip():
        raise CorrectionError(StatusCategory.INVALID_INPUT)

    language = raw_input.get("language")
    if not isinstance(language, str) or not is_supported(language):
        raise CorrectionError(
            StatusCategory.INVALID_INPUT,
            "Unsupported language",
            details=f"language={language!r}",
        )

    description = raw_input.get("description")
    if description is not None and not isinstance(description, str):
        raise CorrectionError(StatusCategory.INVALID_INPUT, "Description must be a string")

    return CorrectionRequest(code=code, language=language, description=description or None)


class CorrectionHandler:
    """Runs one correction request end to end and maps every failure to a status category."""

    def __init__(self, settings: Settings, completion_client):
        self.settings = settings
        self.client = completion_client

    async def handle(self, raw_input: Any) -> Tuple[StatusCategory, dict]:
        try:
            result = await self._correct(raw_input)
            return StatusCategory.SUCCESS, result
        except CorrectionError as e:
            logger.error(f"Error al corregir código [{e.category.label}]: {e.details or e.message}")
            return e.category, e.to_body()
        except Exception as e:
            logger.exception(f"Error inesperado al corregir código: {e}")
            error = CorrectionError(StatusCategory.UNKNOWN, details=str(e) or type(e).__name__)
            return error.category, error.to_body()

    async def _correct(self, raw_input: Any) -> dict:
        if not self.settings.provider_configured:
            raise CorrectionError(StatusCategory.CONFIGURATION)

        request = parse_request(raw_input)
        logger.info(
            f"Recibida solicitud de corrección: language={request.language}, "
            f"{len(request.code)} caracteres"
        )

        prompt = build_prompt(request.code, request.language, request.description)
        logger.debug(f"Prompt construido ({len(prompt)} caracteres)")

        reply = await self.client.complete(
            prompt,
            model=self.settings.model_name,
            temperature=self.settings.temperature,
            max_tokens=self.settings.max_tokens,
            top_p=self.settings.top_p,
        )

        result = normalize_response(
            reply,
            request.code,
            language=request.language,
            preview_chars=self.settings.log_preview_chars,
        )
        logger.info(f"Corrección completada con {len(result.issues)} issues")
        return result.model_dump()
