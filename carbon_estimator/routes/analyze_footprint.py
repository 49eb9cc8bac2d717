import logging

from fastapi import APIRouter, HTTPException, Response

from ..schemas import AnalyzeRequest, FootprintResult
from ..services.footprint import analyze_footprint

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])

SOURCE_HEADER = "X-Footprint-Source"


@router.post("/analyze_footprint", response_model=FootprintResult)
async def analyze(payload: AnalyzeRequest, response: Response) -> FootprintResult:
    try:
        analysis = await analyze_footprint(payload.text)
    except Exception as exc:
        logger.exception("Footprint analysis failed: %s", exc)
        raise HTTPException(
            status_code=500,
            detail="There was an error analyzing your carbon footprint. Please try again.",
        ) from exc

    response.headers[SOURCE_HEADER] = analysis.source
    return analysis.result
