"""
Records router - health record, assessment, chart and voice-note endpoints.

Architecture:
    HTTP Request → Router (this file) → Services → AppStateController → Database

Dependency Injection:
    Services are injected via FastAPI's Depends() mechanism.
    The DI chain is defined in core/dependencies.py.

    Example flow for create_record:
    1. Request arrives at /api/v1/records (POST)
    2. FastAPI calls get_record_service() dependency
    3. get_record_service() binds the shared AppStateController and clock
    4. Endpoint handler receives the fully configured service
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile
from starlette.concurrency import run_in_threadpool

from api.utils import read_audio_upload, validate_audio_upload
from core.config import settings
from core.datetime_utils import MONTH_PATTERN
from core.dependencies import (
    get_gemini_service,
    get_graph_service,
    get_record_service,
)
from schemas import (
    HealthRecordCreate,
    HealthRecordResponse,
    RecordAssessment,
    RecordAssessmentRequest,
    RecordFormDefaults,
    TranscriptionResponse,
)
from services.gemini_service import GeminiService
from services.graph import GraphService
from services.record_service import RecordService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/records",
    tags=["Health Records"],
)


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post(
    "",
    response_model=HealthRecordResponse,
    status_code=201,
    summary="Create a new health record",
    description="Add a weight / blood pressure / fluid removal entry. The response includes "
                "the fluid-removal and blood pressure assessment for the entry."
)
async def create_record(
    record: HealthRecordCreate,
    record_service: RecordService = Depends(get_record_service)
):
    """
    Create a new health record.

    Raises:
    - 400 Bad Request: If the date is after today (InvalidRecordDataError)
    - 422 Unprocessable Entity: If a field is missing or not a number
    - 500 Internal Server Error: If the record could not be stored (StorageError)
    """
    return record_service.add_record(
        record_date=record.date,
        weight=record.weight,
        dry_weight=record.dry_weight,
        systolic=record.systolic,
        diastolic=record.diastolic,
        fluid_removal=record.fluid_removal,
        notes=record.notes,
    )


@router.get(
    "",
    response_model=List[HealthRecordResponse],
    summary="List health records",
    description="Records in chronological order, optionally limited to one month."
)
async def list_records(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="Filter by month (YYYY-MM)", examples=["2024-05"]),
    record_service: RecordService = Depends(get_record_service)
):
    return record_service.get_records(month=month)


@router.get(
    "/form-defaults",
    response_model=RecordFormDefaults,
    summary="Prefill values for a new entry",
    description="Today's date and the dry weight of the most recent record."
)
async def get_form_defaults(
    record_service: RecordService = Depends(get_record_service)
):
    return record_service.get_form_defaults()


@router.post(
    "/assessment",
    response_model=RecordAssessment,
    summary="Evaluate draft entry values",
    description="Run the fluid-removal and blood pressure checks on values that are still being typed. "
                "Unparseable or empty values produce no flag rather than an error."
)
async def assess_record(
    draft: RecordAssessmentRequest,
    record_service: RecordService = Depends(get_record_service)
):
    return record_service.assess(
        dry_weight=draft.dry_weight,
        fluid_removal=draft.fluid_removal,
        systolic=draft.systolic,
        diastolic=draft.diastolic,
    )


@router.get(
    "/html-view",
    summary="Get HTML trend chart for a month",
    description="Interactive Plotly page with weight vs dry weight and blood pressure panels."
)
async def get_html_view(
    month: Optional[str] = Query(None, pattern=MONTH_PATTERN, description="Month to chart (YYYY-MM); all records when omitted"),
    record_service: RecordService = Depends(get_record_service),
    graph_service: GraphService = Depends(get_graph_service)
):
    """
    Get HTML trend chart.

    Months without records return a placeholder page, not an error.
    """
    records = record_service.get_record_models(month=month)
    defaults = record_service.get_form_defaults()
    profile_name = record_service.get_patient_name()

    html_content = graph_service.generate_html_graph(
        records,
        month=month,
        patient_name=profile_name,
        patient_age=defaults.patient_age,
    )
    return Response(content=html_content, media_type="text/html")


@router.post(
    "/transcribe",
    response_model=TranscriptionResponse,
    summary="Transcribe a voice note",
    description="Upload a recorded clip (multipart/form-data) and get its text for the notes field. "
                "The text is empty when transcription is unavailable."
)
async def transcribe_voice_note(
    file: UploadFile = File(..., description="Recorded audio clip (audio/*)"),
    gemini_service: GeminiService = Depends(get_gemini_service)
):
    """
    Transcribe a voice note.

    Raises:
    - 400 Bad Request: Empty clip or missing content type
    - 413 Payload Too Large: Clip exceeds the configured size
    - 415 Unsupported Media Type: Not an audio clip
    """
    mime_type = validate_audio_upload(file)
    audio = await read_audio_upload(file, settings.audio_upload_max_size)

    # Gemini client is blocking; keep the event loop (and reminder loop) free
    text = await run_in_threadpool(gemini_service.transcribe_audio, audio, mime_type)
    return TranscriptionResponse(text=text, mime_type=mime_type)
