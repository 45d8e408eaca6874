from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.web.dependencies import get_translator
from app.web.responses import error_response, text_response

router = APIRouter()


async def _read_json(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.post("/translate")
async def translate(request: Request) -> JSONResponse:
    """Translate {text, toLang} and answer {text} or {error}."""
    try:
        translator = get_translator(request)
        body = await _read_json(request)
        translated = await translator.translate(body.get("text"), body.get("toLang"))  # type: ignore[arg-type]
        return text_response(translated)
    except Exception as exc:
        return error_response(exc)
