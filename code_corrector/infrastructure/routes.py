from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, JSONResponse

from code_corrector.application.correction_handler import CorrectionHandler
from code_corrector.domain.languages import SUPPORTED_LANGUAGES

router = APIRouter()


def get_handler(request: Request) -> CorrectionHandler:
    return CorrectionHandler(request.app.state.settings, request.app.state.completion_client)


@router.get("/health")
async def health_check(request: Request):
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "model": settings.model_name,
        "provider_configured": settings.provider_configured,
    }


@router.get("/api/languages")
async def list_languages():
    return [lang.model_dump() for lang in SUPPORTED_LANGUAGES]


@router.post("/api/correct")
async def correct_code(request: Request, handler: CorrectionHandler = Depends(get_handler)):
    category, body = await handler.handle(await request.body())
    return JSONResponse(status_code=category.status_code, content=body)


@router.get("/ui", include_in_schema=False)
async def ui(request: Request):
    return FileResponse(request.app.state.static_dir / "index.html")
