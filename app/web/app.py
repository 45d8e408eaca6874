from fastapi import FastAPI

from app.config.settings import Settings
from app.documents.validator import DocumentValidator
from app.translation.translator import Translator
from app.vision.extractor import RemoteVisionExtractor
from app.web.routes import extract, health, translate


def create_app(
    settings: Settings,
    *,
    translator: Translator | None = None,
    extractor: RemoteVisionExtractor | None = None,
) -> FastAPI:
    """Build the HTTP application. Upstream adapters are built lazily when omitted."""
    app = FastAPI(title="imagetext API")
    app.state.settings = settings
    app.state.validator = DocumentValidator(settings.max_upload_bytes)
    app.state.translator = translator
    app.state.extractor = extractor
    app.include_router(health.router)
    app.include_router(extract.router)
    app.include_router(translate.router)
    return app
