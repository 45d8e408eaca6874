from fastapi.responses import JSONResponse

from app.errors.classifier import classify_error
from app.logging.logger import Log
from app.translation.schemas import ErrorResponse, TextResponse


def text_response(text: str) -> JSONResponse:
    return JSONResponse(TextResponse(text=text).model_dump())


def error_response(exc: BaseException) -> JSONResponse:
    """Render any failure as {"error": message} with its classified status."""
    classified = classify_error(exc)
    if classified.status_code >= 500:
        Log.error(f"{classified.kind}: {classified.message}")
    else:
        Log.warning(f"{classified.kind}: {classified.message}")
    return JSONResponse(
        ErrorResponse(error=classified.message).model_dump(),
        status_code=classified.status_code,
    )
