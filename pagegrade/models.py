from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Optional, List
from enum import Enum


class CheckStatus(str, Enum):
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


class ScoreTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    POOR = "poor"


class Tone(str, Enum):
    CASUAL = "casual"
    NARRATIVE = "narrative"
    PROFESSIONAL = "professional"

    @classmethod
    def _missing_(cls, value):
        # Older clients send "story" for the narrative tone
        if isinstance(value, str) and value.lower() == "story":
            return cls.NARRATIVE
        return None


# ─── Request Models ────────────────────────────────────────────────────────────

class PageAnalysisRequest(BaseModel):
    url: str = Field(..., description="The page URL to analyze")
    html: Optional[str] = Field(None, description="Page markup; fetched from the URL when omitted")

    model_config = {
        "json_schema_extra": {
            "example": {
                "url": "https://example.com",
            }
        }
    }


class ContentAnalysisRequest(BaseModel):
    text: str = Field(..., description="Raw text to score (at least 100 words)")


class HumanizeRequest(BaseModel):
    text: str = Field(..., description="Text to rewrite (at least 50 characters)")
    tone: Tone = Field(Tone.CASUAL, description="Target tone")
    seed: Optional[int] = Field(None, description="Pins the random structural variation")

    model_config = {
        "json_schema_extra": {
            "example": {
                "text": "It is important to note that we utilize numerous tools. We don't stop there.",
                "tone": "casual",
            }
        }
    }


# ─── Result Models ─────────────────────────────────────────────────────────────

class CheckResult(BaseModel):
    """Outcome of a single check, in battery order."""
    model_config = ConfigDict(frozen=True)

    name: str
    status: CheckStatus
    score: int
    max_score: int
    message: str
    suggestion: Optional[str] = None

    @model_validator(mode="after")
    def score_within_weight(self):
        if not 0 <= self.score <= self.max_score:
            raise ValueError(
                f"{self.name}: score {self.score} outside 0..{self.max_score}"
            )
        return self


class AnalysisOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    battery: str
    score: int = Field(..., ge=0, le=100)
    tier: ScoreTier
    label: str
    summary: str
    source: str
    total_score: int
    max_score: int
    checks: List[CheckResult] = []

    # Battery-specific extras
    platform: Optional[str] = None      # static_site
    word_count: Optional[int] = None    # content_quality


class TransformResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    tone: Tone
    original_words: int
    humanized_words: int
    change_percent: int
