from typing import List, Optional

from pydantic_settings import BaseSettings

GROQ_MODELS = {
    "fast": "llama3-8b-8192",
    "balanced": "llama3-70b-8192",
    "advanced": "mixtral-8x7b-32768",
}


class Settings(BaseSettings):
    groq_api_key: Optional[str] = None
    groq_base_url: str = "https://api.groq.com/openai/v1"
    model_name: str = GROQ_MODELS["balanced"]

    # Parámetros de muestreo
    temperature: float = 0.1
    max_tokens: int = 4000
    top_p: float = 1.0
    request_timeout: float = 60.0

    log_level: str = "INFO"
    log_preview_chars: int = 300

    port: int = 8000
    host: str = "0.0.0.0"
    cors_origins: List[str] = ["*"]

    class Config:
        env_file = ".env"

    @property
    def provider_configured(self) -> bool:
        return bool(self.groq_api_key and self.groq_api_key.strip())


settings = Settings()
