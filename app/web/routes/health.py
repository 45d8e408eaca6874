from fastapi import APIRouter, Request

from app.web.dependencies import get_settings

router = APIRouter()


@router.get("/health")
async def health(request: Request) -> dict[str, str]:
    settings = get_settings(request)
    return {
        "status": "ok",
        "extract_mode": settings.extract_mode,
        "ocr_engine": settings.ocr_engine,
    }
