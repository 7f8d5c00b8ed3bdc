from dataclasses import dataclass
from enum import Enum

PROBABILITY_LABELS: dict[int, str] = {
    1: "Rare",
    2: "Unlikely",
    3: "Possible",
    4: "Likely",
    5: "Almost certain",
}

IMPACT_LABELS: dict[int, str] = {
    1: "Low",
    2: "Minor",
    3: "Moderate",
    4: "Major",
    5: "Severe",
}


class Category(str, Enum):
    """Finding categories in register order."""

    COVERAGE = "Coverage"
    SECURITY = "Security"
    COMPLIANCE = "Compliance"
    TRACKING_CONSENT = "Tracking & Consent"
    DATA_CAPTURE = "Data Capture"
    ACCESSIBILITY = "Accessibility"
    TRUST = "Trust"


CATEGORY_PRECEDENCE: tuple[Category, ...] = tuple(Category)


@dataclass(frozen=True)
class Rating:
    """A 1..5 value paired with its label from a fixed table."""

    value: int
    label: str

    def __str__(self) -> str:
        return f"{self.value} - {self.label}"


def probability(value: int) -> Rating:
    value = _clamp_rating(value)
    return Rating(value=value, label=PROBABILITY_LABELS[value])


def impact(value: int) -> Rating:
    value = _clamp_rating(value)
    return Rating(value=value, label=IMPACT_LABELS[value])


def _clamp_rating(value: int) -> int:
    return max(1, min(5, int(value)))


@dataclass(frozen=True)
class Finding:
    """One risk-register row."""

    id: str
    category: Category
    description: str
    probability: Rating
    impact: Rating
    score: int
    trigger: str
    mitigation: str
    evidence: str

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "category": self.category.value,
            "description": self.description,
            "probability": {"value": self.probability.value, "label": self.probability.label},
            "impact": {"value": self.impact.value, "label": self.impact.label},
            "score": self.score,
            "trigger": self.trigger,
            "mitigation": self.mitigation,
            "evidence": self.evidence,
        }
