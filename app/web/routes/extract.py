from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile

from app.documents.models import Document
from app.web.dependencies import get_extractor, get_settings, get_validator
from app.web.responses import error_response, text_response

router = APIRouter()

DISABLED_MESSAGE = "Text extraction runs on the client; this endpoint is disabled"


async def _read_document(upload: object) -> Document | None:
    if not isinstance(upload, UploadFile):
        return None
    data = await upload.read()
    return Document.from_bytes(
        data,
        mime_type=upload.content_type or "",
        filename=upload.filename or "",
    )


@router.post("/extract")
async def extract(request: Request) -> JSONResponse:
    """Extract text from the multipart field `file` with the remote vision model."""
    try:
        extractor = get_extractor(request)
        if get_settings(request).extract_mode.lower() != "remote":
            return JSONResponse({"error": DISABLED_MESSAGE}, status_code=410)
        async with request.form() as form:
            document = await _read_document(form.get("file"))
        image = get_validator(request).validate(document)
        return text_response(await extractor.extract(image))
    except Exception as exc:
        return error_response(exc)
