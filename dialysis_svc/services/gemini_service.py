"""
Service for AI health summaries and voice-note transcription using Google Gemini AI.

Both operations degrade instead of failing: a missing API key, an empty
reply or any transport error yields a fixed fallback (summaries) or an
empty string (transcription). Callers never see an exception from here.
"""
import logging
from typing import Iterable, Optional

import google.generativeai as genai

from core.config import settings
from models import HealthRecord

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "The Gemini API key is not configured, so an AI summary cannot be generated."
NO_RECORDS_MESSAGE = "There is not enough data for an analysis yet. Please add some records first."
EMPTY_REPLY_MESSAGE = "The summary could not be generated. Please try again later."
ERROR_MESSAGE = "An error occurred while generating the summary. Please check the network connection."

SUMMARY_PROMPT = """
You are a professional nephrology assistant specialised in dialysis care.
Based on the patient's recent records below, write a short monthly health summary in English.

Focus on:
1. Weight control: the gap between actual weight and dry weight (interdialytic weight gain, IDWG).
2. Fluid management: pay special attention to the fluid removal data. If any session removed more
   than 5% of the dry weight, point it out explicitly and give advice.
3. Blood pressure: any trend towards high or low blood pressure, and whether it relates to
   large fluid removal.
4. Give 1-2 concrete health suggestions (diet, fluid restriction or rest).

Tone: warm, encouraging and professional.

Patient data:
{data}
"""

TRANSCRIBE_PROMPT = (
    "Transcribe this voice note into text. If the dialysis patient describes symptoms "
    "(such as dizziness, cramps or swelling) or what they ate, make sure the medical terms "
    "are accurate. Output only the recognised text, without any preamble or explanation."
)


def format_record_line(record: HealthRecord) -> str:
    """One prompt line per record."""
    fluid = f"{record.fluid_removal}kg" if record.fluid_removal is not None else "not recorded"
    return (
        f"Date: {record.date.isoformat()}, Weight: {record.weight}kg, "
        f"Dry weight: {record.dry_weight}kg, Fluid removal: {fluid}, "
        f"Systolic: {record.systolic}, Diastolic: {record.diastolic}"
    )


class GeminiService:
    """Service for summaries and transcription using Gemini AI."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        """
        Initialize the Gemini service.

        Args:
            api_key: Google Gemini API key. If not provided, loads from settings.
                     When no key is available the service still constructs and
                     every call returns its fallback.
            model_name: Model to use. Defaults to settings.gemini_model.
        """
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model_name = model_name or settings.gemini_model
        self.model = None

        if self.api_key:
            genai.configure(api_key=self.api_key)
            self.model = genai.GenerativeModel(self.model_name)
        else:
            logger.warning("Gemini API key missing; AI features will return fallbacks")

    @property
    def is_configured(self) -> bool:
        return self.model is not None

    def build_summary_prompt(self, records: Iterable[HealthRecord]) -> str:
        ordered = sorted(records, key=lambda r: r.date)
        data = "\n".join(format_record_line(r) for r in ordered)
        return SUMMARY_PROMPT.format(data=data)

    def summarize_records(self, records: Iterable[HealthRecord]) -> str:
        """
        Generate a free-text health summary for a set of records.

        Args:
            records: Records in any order; they are sorted by date for the prompt.

        Returns:
            str: The model's summary, or a fixed fallback message.
        """
        records = list(records)
        if not self.is_configured:
            return MISSING_KEY_MESSAGE
        if not records:
            return NO_RECORDS_MESSAGE

        prompt = self.build_summary_prompt(records)
        try:
            logger.info(f"Requesting Gemini summary for {len(records)} records")
            response = self.model.generate_content(prompt)
            text = (response.text or "").strip()
        except Exception as e:
            logger.error(f"Gemini summary failed: {e}", exc_info=True)
            return ERROR_MESSAGE

        return text or EMPTY_REPLY_MESSAGE

    def transcribe_audio(self, audio_bytes: bytes, mime_type: str) -> str:
        """
        Transcribe a recorded voice note.

        Args:
            audio_bytes: Encoded audio as captured by the client.
            mime_type: MIME type of the audio (e.g. "audio/webm").

        Returns:
            str: Recognised text, or "" when transcription is unavailable.
        """
        if not self.is_configured:
            logger.warning("Gemini API key missing; skipping transcription")
            return ""
        if not audio_bytes:
            return ""

        try:
            response = self.model.generate_content([
                {"mime_type": mime_type, "data": audio_bytes},
                TRANSCRIBE_PROMPT,
            ])
            return (response.text or "").strip()
        except Exception as e:
            # response.text raises ValueError when the reply has no text part
            logger.error(f"Transcription failed: {e}", exc_info=True)
            return ""
