from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..logging import logger
from ..model_client import InferenceError
from ..models import ErrorResponse, SummarizeRequest, SummarizeResponse, error_content
from ..services.summarizer import ValidationError

router = APIRouter()

PIPELINE_FAILED = "An error occurred while processing the text."


@router.post(
    "/summarize",
    response_model=SummarizeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def summarize(req: SummarizeRequest, request: Request):
    trace_id = getattr(request.state, "trace_id", None)
    pipeline = request.app.state.pipeline
    try:
        result = await pipeline.summarize(req.text, req.language)
    except ValidationError as e:
        logger.info("summarize.rejected", trace_id=trace_id, reason=str(e))
        return JSONResponse(status_code=400, content=error_content(str(e)))
    except InferenceError as e:
        logger.error("summarize.failed", trace_id=trace_id, language=req.language, err=str(e))
        return JSONResponse(status_code=500, content=error_content(PIPELINE_FAILED, e))

    return SummarizeResponse(summary=result.summary, original_language=result.original_language)
