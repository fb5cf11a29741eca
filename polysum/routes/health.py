from datetime import datetime, timezone

from fastapi import APIRouter, Request

from ..languages import PIVOT_LANGUAGE
from ..models import LanguagesResponse

router = APIRouter()


@router.get("/health")
async def health():
    return {
        "status": "OK",
        "service": "polysum",
        "time": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
    }


@router.get("/languages", response_model=LanguagesResponse)
async def languages(request: Request):
    return LanguagesResponse(languages=list(request.app.state.languages), pivot=PIVOT_LANGUAGE)
