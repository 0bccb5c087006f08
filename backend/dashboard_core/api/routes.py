import logging
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from dashboard_core.core.config import get_settings
from dashboard_core.core.errors import ErrorCodes, error_body
from dashboard_core.core.performance import track_performance
from dashboard_core.core.rate_limit import limiter, suggest_rate_limit
from dashboard_core.core.sanitization import sanitize_for_logging
from dashboard_core.core.schemas import SuggestRequest, SuggestResponse
from dashboard_core.services.suggester import suggest_charts

logger = logging.getLogger(__name__)

SERVICE_NAME = "askadb-dashboard-core"

router = APIRouter()


@router.get("/health")
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME}


@router.post("/suggest")
@limiter.limit(suggest_rate_limit)
@track_performance("suggest_charts")
async def suggest(request: Request, payload: SuggestRequest):
    """
    Suggest up to three chart visualizations for a dataset.

    Body: ``{"data": [...rows], "question": "optional text"}``.
    Rate limited per IP address (RATE_LIMIT_PER_MINUTE).
    """
    correlation_id = getattr(request.state, 'correlation_id', 'unknown')
    settings = get_settings()

    if not isinstance(payload.data, list):
        logger.warning(f"Rejected suggestion request: data is {type(payload.data).__name__}, not a list")
        return JSONResponse(status_code=400, content=error_body(ErrorCodes.INVALID_DATA_FORMAT, correlation_id))

    if len(payload.data) > settings.max_rows:
        logger.warning(f"Rejected suggestion request with {len(payload.data)} rows (max {settings.max_rows})")
        return JSONResponse(
            status_code=400,
            content=error_body(
                ErrorCodes.TOO_MANY_ROWS,
                correlation_id,
                f"Maximum is {settings.max_rows} rows. Your dataset has {len(payload.data)}."
            )
        )

    logger.info(
        f"Suggesting charts for {len(payload.data)} rows "
        f"(question: '{sanitize_for_logging(payload.question or '')}')"
    )

    try:
        # CPU-bound; off the event loop so the timeout middleware can fire
        suggestions = await run_in_threadpool(suggest_charts, payload.data, payload.question, settings)
    except Exception as e:
        logger.error(f"Suggestion generation failed: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=error_body(ErrorCodes.SUGGESTION_FAILED, correlation_id, str(e))
        )

    return SuggestResponse(suggestions=suggestions).model_dump(mode="json", exclude_none=True)
