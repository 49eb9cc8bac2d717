import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Literal, Union

import google.generativeai as genai  # type: ignore[import-untyped]
from pydantic import ValidationError

from ..schemas import FootprintResult
from ..settings import Settings, settings

logger = logging.getLogger(__name__)

FallbackReason = Literal[
    "missing_api_key",
    "model_init_failed",
    "timeout",
    "request_failed",
    "empty_response",
    "invalid_json",
    "schema_mismatch",
]

SYSTEM_PROMPT = """
You are a carbon footprint analysis expert. Analyze the user's activities and
provide a detailed breakdown of their carbon footprint.

Return ONLY a valid JSON object with this exact structure:
{
  "totalEmissions": <number, kg CO2e, equal to the sum of the breakdown>,
  "activities": [
    {
      "type": "transport" | "diet" | "energy" | "waste",
      "description": "<short label>",
      "emissions": <number, kg CO2e, >= 0>,
      "icon": "<single emoji>"
    }
  ],
  "breakdown": {
    "transport": <number >= 0>,
    "diet": <number >= 0>,
    "energy": <number >= 0>,
    "waste": <number >= 0>
  },
  "suggestions": ["<string>"],
  "ecoScore": <number between 0 and 100>
}

Rules:
- Emissions are in kg of CO2 equivalent and must be numeric.
- `type` must be one of the four category strings above.
- The ecoScore is higher for lower emissions.
- Include 2-4 specific suggestions for reducing the footprint based on the activities.
- If the input does not contain enough information, make reasonable assumptions
  and provide a basic analysis.
- Never output additional text outside JSON.
""".strip()


@dataclass(frozen=True)
class RemoteEstimate:
    result: FootprintResult


@dataclass(frozen=True)
class NeedsFallback:
    reason: FallbackReason


RemoteOutcome = Union[RemoteEstimate, NeedsFallback]


def _get_model(config: Settings) -> genai.GenerativeModel:
    genai.configure(api_key=config.gemini_api_key)
    return genai.GenerativeModel(
        model_name=config.gemini_model,
        generation_config={"response_mime_type": "application/json"},
    )


def _extract_text(response: Any) -> str | None:
    try:
        return response.text
    except Exception as exc:
        logger.exception("Failed to extract .text: %s", exc)
        return None


def _clean_json(text: str) -> str:
    cleaned = text.strip()

    # remove a leading ```json / ``` fence and the closing ```
    if cleaned.startswith("```"):
        cleaned = cleaned[3:]
        if cleaned.startswith("json"):
            cleaned = cleaned[4:]
        if cleaned.endswith("```"):
            cleaned = cleaned[:-3]
        cleaned = cleaned.strip()

    return cleaned


async def estimate_with_gemini(text: str, config: Settings = settings) -> RemoteOutcome:
    if not config.gemini_api_key:
        logger.info("GEMINI_API_KEY is not configured, skipping remote estimate")
        return NeedsFallback("missing_api_key")

    try:
        model = _get_model(config)
    except Exception as exc:
        logger.exception("Gemini init failed: %s", exc)
        return NeedsFallback("model_init_failed")

    user_prompt = f"User activities:\n{text}"

    try:
        response = await asyncio.wait_for(
            asyncio.to_thread(model.generate_content, [SYSTEM_PROMPT, user_prompt]),
            timeout=config.gemini_timeout_seconds,
        )
    except asyncio.TimeoutError:
        logger.warning("Gemini request timed out after %.1fs", config.gemini_timeout_seconds)
        return NeedsFallback("timeout")
    except Exception as exc:
        logger.exception("Gemini request failed: %s", exc)
        return NeedsFallback("request_failed")

    raw_text = _extract_text(response)
    if not raw_text:
        logger.warning("Gemini returned no content")
        return NeedsFallback("empty_response")

    clean = _clean_json(raw_text)

    # JSONDecodeError is a ValueError; oversized integers raise a bare ValueError
    try:
        parsed = json.loads(clean)
    except (ValueError, RecursionError) as exc:
        logger.warning("Gemini returned invalid JSON (%s)\nRAW:\n%.2000s", type(exc).__name__, raw_text)
        return NeedsFallback("invalid_json")

    try:
        result = FootprintResult.model_validate(parsed, strict=True)
    except ValidationError as exc:
        logger.warning("Gemini JSON schema mismatch: %s\nPAYLOAD:\n%.2000s", exc, clean)
        return NeedsFallback("schema_mismatch")

    return RemoteEstimate(result)
