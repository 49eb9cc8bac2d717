import logging
from dataclasses import dataclass
from typing import Literal, Optional

from ..schemas import FootprintResult
from ..settings import Settings, settings
from .fallback import RandomSource, estimate_offline
from .gemini_footprint import RemoteEstimate, estimate_with_gemini

logger = logging.getLogger(__name__)

EstimateSource = Literal["gemini", "fallback"]


@dataclass(frozen=True)
class FootprintAnalysis:
    result: FootprintResult
    source: EstimateSource


async def analyze_footprint(
    text: str,
    *,
    config: Settings = settings,
    rng: Optional[RandomSource] = None,
) -> FootprintAnalysis:
    """Estimate with Gemini, falling back to the keyword estimator on any failure."""
    outcome = await estimate_with_gemini(text, config)
    if isinstance(outcome, RemoteEstimate):
        return FootprintAnalysis(result=outcome.result, source="gemini")

    logger.warning("Falling back to keyword estimator (reason=%s)", outcome.reason)
    result = await estimate_offline(text, rng=rng, delay_seconds=config.fallback_delay_seconds)
    return FootprintAnalysis(result=result, source="fallback")
