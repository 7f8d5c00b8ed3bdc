from dataclasses import dataclass, field
from enum import Enum

MIN_SCORE = 0
MAX_SCORE = 12


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def for_score(cls, score: int) -> "RiskLevel":
        if score >= 7:
            return cls.HIGH
        if score >= 4:
            return cls.MEDIUM
        return cls.LOW


@dataclass(frozen=True)
class RiskAssessment:
    """Bounded exposure score with the reasons that produced it.

    Derived from the canonical model and never part of the fingerprint.
    """

    level: RiskLevel
    score: int
    reasons: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"level": self.level.value, "score": self.score, "reasons": list(self.reasons)}
