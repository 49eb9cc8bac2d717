import math
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Category = Literal["transport", "diet", "energy", "waste"]

CATEGORIES: tuple[Category, ...] = ("transport", "diet", "energy", "waste")

# Model answers round each field, so the total may drift from the breakdown sum
TOTAL_REL_TOLERANCE = 0.05
TOTAL_ABS_TOLERANCE_KG = 0.1


class AnalyzeRequest(BaseModel):
    text: str = Field(..., description="Free-text description of the user's day")


class Activity(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Category = Field(..., description="Emission category of the activity")
    description: str = Field(..., description="Short human-readable label")
    emissions: float = Field(..., ge=0, description="Estimated CO₂ in kilograms (kgCO2e)")
    icon: str = Field(..., description="Display glyph, passed through untouched")


class Breakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    transport: float = Field(..., ge=0)
    diet: float = Field(..., ge=0)
    energy: float = Field(..., ge=0)
    waste: float = Field(..., ge=0)

    def total(self) -> float:
        return self.transport + self.diet + self.energy + self.waste


class FootprintResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    totalEmissions: float = Field(..., ge=0, description="Sum of the breakdown (kgCO2e)")
    activities: List[Activity]
    breakdown: Breakdown
    suggestions: List[str]
    ecoScore: float = Field(..., ge=0, le=100, description="0-100, higher means lower emissions")

    @model_validator(mode="after")
    def _total_matches_breakdown(self) -> "FootprintResult":
        if not math.isclose(
            self.totalEmissions,
            self.breakdown.total(),
            rel_tol=TOTAL_REL_TOLERANCE,
            abs_tol=TOTAL_ABS_TOLERANCE_KG,
        ):
            raise ValueError("totalEmissions does not match the breakdown sum")
        return self
