from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import config


class SummarizeRequest(BaseModel):
    text: str = ""
    language: str = "English"


class SummarizeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    summary: str
    original_language: str = Field(alias="originalLanguage")


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class LanguagesResponse(BaseModel):
    languages: List[str]
    pivot: str


def error_content(message: str, exc: Optional[BaseException] = None) -> Dict[str, Any]:
    """Error body; the underlying exception text is only exposed in development."""
    details = str(exc) if (exc is not None and config.is_development) else None
    return ErrorResponse(error=message, details=details).model_dump(exclude_none=True)
