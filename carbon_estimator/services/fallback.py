"""Offline keyword estimator used when Gemini cannot answer.

Detection is a case-insensitive substring match over a fixed rule table.
Rules are not mutually exclusive: one sentence can trigger several of them,
and they are evaluated in table order, which is also the order of the
returned activities.
"""

import asyncio
import random
from dataclasses import dataclass
from typing import Optional, Protocol

from ..schemas import CATEGORIES, Activity, Breakdown, Category, FootprintResult


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass(frozen=True)
class ActivityRule:
    keywords: tuple[str, ...]
    category: Category
    low: float
    high: float
    description: str
    icon: str

    def matches(self, text: str) -> bool:
        return any(k in text for k in self.keywords)


RULES: tuple[ActivityRule, ...] = (
    ActivityRule(("drove", "car", "miles"), "transport", 5.0, 15.0, "Driving a car", "🚗"),
    ActivityRule(("flight", "flew", "plane"), "transport", 80.0, 130.0, "Taking a flight", "✈️"),
    ActivityRule(("meat", "burger", "beef"), "diet", 3.0, 8.0, "Consuming meat", "🍔"),
    ActivityRule(("vegetarian", "vegan", "plant-based"), "diet", 0.5, 1.5, "Plant-based meal", "🥗"),
    ActivityRule(("electricity", "charged", "power"), "energy", 1.0, 4.0, "Electricity usage", "🔋"),
    ActivityRule(("heating", "air conditioning", "ac"), "energy", 4.0, 12.0, "Heating/Cooling", "🔥"),
    ActivityRule(("trash", "waste", "garbage"), "waste", 1.0, 3.0, "Waste disposal", "🗑️"),
    ActivityRule(("recycle", "recycling"), "waste", 0.2, 0.7, "Recycling", "♻️"),
)

# Used when nothing in the text matches a rule.
DEFAULT_RULE = ActivityRule((), "energy", 2.0, 7.0, "Daily activities", "🏠")

SUGGESTIONS: dict[Category, tuple[str, str]] = {
    "transport": (
        "Consider using public transportation or carpooling",
        "Try biking or walking for short distances",
    ),
    "diet": (
        "Try incorporating more plant-based meals into your diet",
        "Consider reducing red meat consumption",
    ),
    "energy": (
        "Use energy-efficient appliances and LED lighting",
        "Reduce standby power consumption by unplugging devices",
    ),
    "waste": (
        "Implement a comprehensive recycling system",
        "Consider composting organic waste",
    ),
}

GENERAL_SUGGESTION = "Track your carbon footprint regularly to identify improvement areas"

MAX_SCORE = 100.0


def sample_emissions(rule: ActivityRule, rng: RandomSource) -> float:
    """Draw an emission value in [rule.low, rule.high)."""
    return rule.low + (rule.high - rule.low) * rng.random()


def dominant_category(breakdown: Breakdown) -> Category:
    # max() keeps the first of equal values, so CATEGORIES order breaks ties
    return max(CATEGORIES, key=lambda category: getattr(breakdown, category))


def build_suggestions(breakdown: Breakdown) -> list[str]:
    return [*SUGGESTIONS[dominant_category(breakdown)], GENERAL_SUGGESTION]


def eco_score(total_emissions: float) -> float:
    """Map total kg CO2e onto 0-100; 100 kg or more scores zero."""
    return max(0.0, min(MAX_SCORE, MAX_SCORE - total_emissions))


def analyze_text(text: str, rng: Optional[RandomSource] = None) -> FootprintResult:
    rng = rng or random.Random()
    lowered = text.lower()

    totals: dict[Category, float] = {category: 0.0 for category in CATEGORIES}
    activities: list[Activity] = []

    for rule in RULES:
        if not rule.matches(lowered):
            continue
        emissions = sample_emissions(rule, rng)
        activities.append(
            Activity(type=rule.category, description=rule.description, emissions=emissions, icon=rule.icon)
        )
        totals[rule.category] += emissions

    if not activities:
        emissions = sample_emissions(DEFAULT_RULE, rng)
        activities.append(
            Activity(
                type=DEFAULT_RULE.category,
                description=DEFAULT_RULE.description,
                emissions=emissions,
                icon=DEFAULT_RULE.icon,
            )
        )
        totals[DEFAULT_RULE.category] = emissions

    breakdown = Breakdown(**totals)
    total = breakdown.total()

    return FootprintResult(
        totalEmissions=total,
        activities=activities,
        breakdown=breakdown,
        suggestions=build_suggestions(breakdown),
        ecoScore=eco_score(total),
    )


async def estimate_offline(
    text: str,
    *,
    rng: Optional[RandomSource] = None,
    delay_seconds: float = 0.0,
) -> FootprintResult:
    if delay_seconds > 0:
        await asyncio.sleep(delay_seconds)
    return analyze_text(text, rng)
