"""
Analysis router - AI-generated monthly health summaries.

The Gemini call is blocking and can take several seconds, so it runs in
Starlette's threadpool. The response echoes the requested month and the
record count; a client that has since switched months discards it.
"""
import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from core.datetime_utils import Clock
from core.dependencies import get_clock, get_gemini_service, get_record_service
from schemas import SummaryRequest, SummaryResponse
from services.gemini_service import GeminiService
from services.record_service import RecordService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/analysis",
    tags=["Analysis"],
)


@router.post(
    "/summary",
    response_model=SummaryResponse,
    summary="Generate an AI health summary",
    description="Summarize the records of one month (or all records). Always returns 200; "
                "when the AI service is unavailable the summary is a fixed explanatory message."
)
async def generate_summary(
    request: SummaryRequest,
    record_service: RecordService = Depends(get_record_service),
    gemini_service: GeminiService = Depends(get_gemini_service),
    clock: Clock = Depends(get_clock)
):
    records = record_service.get_record_models(month=request.month)
    summary = await run_in_threadpool(gemini_service.summarize_records, records)

    return SummaryResponse(
        summary=summary,
        month=request.month,
        record_count=len(records),
        generated_at=clock.now().isoformat(timespec="seconds"),
    )
