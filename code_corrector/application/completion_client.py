import time
from typing import Optional

import httpx

from code_corrector.core.exceptions import ProviderError, StatusCategory
from code_corrector.core.logging_config import logger

_STATUS_CATEGORIES = {
    401: StatusCategory.AUTH,
    403: StatusCategory.AUTH,
    408: StatusCategory.TIMEOUT,
    429: StatusCategory.RATE_LIMIT,
    504: StatusCategory.TIMEOUT,
}

_MESSAGE_MARKERS = [
    (StatusCategory.AUTH, ("api key", "authentication", "unauthorized")),
    (StatusCategory.RATE_LIMIT, ("rate limit", "quota", "limit exceeded")),
    (StatusCategory.TIMEOUT, ("timeout", "timed out", "network")),
    (StatusCategory.MALFORMED_PROVIDER_RESPONSE, ("json", "parse")),
]


def classify_error_message(message: str) -> StatusCategory:
    """Fallback classification for errors that carry no usable status code."""
    lowered = (message or "").lower()
    for category, markers in _MESSAGE_MARKERS:
        if any(marker in lowered for marker in markers):
            return category
    return StatusCategory.UNKNOWN


def classify_status_code(status_code: int, message: str = "") -> StatusCategory:
    if status_code in _STATUS_CATEGORIES:
        return _STATUS_CATEGORIES[status_code]
    return classify_error_message(message)


class GroqCompletionClient:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = "https://api.groq.com/openai/v1",
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key or ""
        self.url = base_url.rstrip("/") + "/chat/completions"
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def complete(
        self,
        prompt: str,
        model: str,
        temperature: float,
        max_tokens: int,
        top_p: float = 1.0,
    ) -> str:
        payload = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
            "top_p": top_p,
            "stream": False,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        start = time.perf_counter()
        try:
            resp = await self._client.post(self.url, json=payload, headers=headers)
            resp.raise_for_status()
            content = resp.json()
        except httpx.HTTPStatusError as e:
            message = _error_message(e.response)
            category = classify_status_code(e.response.status_code, message)
            raise ProviderError(category, f"HTTP {e.response.status_code}: {message}") from e
        except httpx.TimeoutException as e:
            raise ProviderError(StatusCategory.TIMEOUT, f"Request timeout: {e}") from e
        except httpx.NetworkError as e:
            raise ProviderError(StatusCategory.TIMEOUT, f"Network error: {e}") from e
        except ValueError as e:
            raise ProviderError(
                StatusCategory.MALFORMED_PROVIDER_RESPONSE, f"Invalid JSON from provider: {e}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(classify_error_message(str(e)), str(e)) from e
        finally:
            logger.info(f"Tiempo de respuesta del proveedor: {time.perf_counter() - start:.2f} segundos")

        try:
            content = content["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError(
                StatusCategory.MALFORMED_PROVIDER_RESPONSE,
                f"Unexpected response structure from provider: {e!r}",
            ) from e

        return content or ""

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]

    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        return str(error.get("message", ""))
    if error:
        return str(error)
    return response.text[:200]
