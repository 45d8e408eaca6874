from pydantic import BaseModel, ConfigDict, Field


class TranslateRequest(BaseModel):
    """Body of POST /translate."""

    model_config = ConfigDict(populate_by_name=True)

    text: str
    to_lang: str = Field(alias="toLang")


class TextResponse(BaseModel):
    """Success body of POST /translate and POST /extract."""

    text: str


class ErrorResponse(BaseModel):
    """Failure body of every endpoint."""

    error: str
