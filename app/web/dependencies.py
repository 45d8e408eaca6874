from fastapi import Request

from app.config.settings import Settings
from app.documents.validator import DocumentValidator
from app.translation.factory import TranslatorFactory
from app.translation.translator import Translator
from app.upstream.factory import require_credential
from app.vision.extractor import RemoteVisionExtractor
from app.vision.factory import VisionExtractorFactory


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_validator(request: Request) -> DocumentValidator:
    return request.app.state.validator


def get_translator(request: Request) -> Translator:
    """Return the shared Translator, building it on first use.

    Raises:
        MissingCredentialError: before anything else when no API key is set.
    """
    settings = get_settings(request)
    require_credential(settings)
    if request.app.state.translator is None:
        request.app.state.translator = TranslatorFactory.create(settings)
    return request.app.state.translator


def get_extractor(request: Request) -> RemoteVisionExtractor:
    """Return the shared vision extractor, building it on first use."""
    settings = get_settings(request)
    require_credential(settings)
    if request.app.state.extractor is None:
        request.app.state.extractor = VisionExtractorFactory.create(settings)
    return request.app.state.extractor
