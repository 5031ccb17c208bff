from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from code_corrector.application.completion_client import GroqCompletionClient
from code_corrector.core.config import Settings, settings as default_settings
from code_corrector.core.logging_config import logger, setup_logging
from code_corrector.infrastructure.routes import router

STATIC_DIR = Path(__file__).parent / "static"


def create_app(settings: Optional[Settings] = None, completion_client=None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if app.state.completion_client is None:
            owned = GroqCompletionClient(
                api_key=settings.groq_api_key,
                base_url=settings.groq_base_url,
                timeout=settings.request_timeout,
            )
            app.state.completion_client = owned

        if not settings.provider_configured:
            logger.warning("GROQ_API_KEY no está configurada; las correcciones fallarán")
        logger.info(f"Servicio iniciado con modelo {settings.model_name}")

        try:
            yield
        finally:
            if owned is not None:
                await owned.aclose()
                app.state.completion_client = None

    app = FastAPI(title="Code Corrector Service", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.completion_client = completion_client
    app.state.static_dir = STATIC_DIR

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    @app.get("/")
    async def root():
        return {
            "service": "Code Corrector",
            "model": settings.model_name,
            "status": "running"
        }

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run(
        "code_corrector.main:app",
        host=default_settings.host,
        port=default_settings.port,
    )


if __name__ == "__main__":
    run()
