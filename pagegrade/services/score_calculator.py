"""
pagegrade/services/score_calculator.py
Battery definitions and the aggregator that folds a battery's check results
into one 0–100 score with a tier label and summary.
"""
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..models import AnalysisOutcome, CheckResult, ScoreTier
from .ladder import Verdict, round_half_up


@dataclass(frozen=True)
class CheckDefinition:
    """A named check and its weight (= the check's max score)."""
    name: str
    weight: int
    run: Callable[..., Verdict]


@dataclass(frozen=True)
class Tier:
    tier: ScoreTier
    minimum: int
    label: str
    summary: str


@dataclass(frozen=True)
class Battery:
    """
    Fixed, ordered set of independent checks.

    `max_score` is declared, not derived from results; construction fails if
    the declared total disagrees with the check weights.
    """
    key: str
    checks: Tuple[CheckDefinition, ...]
    max_score: int
    tiers: Tuple[Tier, ...]   # highest minimum first; the last minimum is 0

    def __post_init__(self):
        declared = sum(c.weight for c in self.checks)
        if declared != self.max_score:
            raise ValueError(
                f"{self.key}: check weights sum to {declared}, declared {self.max_score}"
            )
        if not self.tiers or self.tiers[-1].minimum != 0:
            raise ValueError(f"{self.key}: tier ladder must end at 0")

    def evaluate(self, *args: Any) -> List[CheckResult]:
        """Run every check in order against the same input."""
        results = []
        for check in self.checks:
            verdict = check.run(*args)
            results.append(CheckResult(
                name=check.name,
                status=verdict.status,
                score=verdict.score,
                max_score=check.weight,
                message=verdict.message,
                suggestion=verdict.suggestion,
            ))
        return results

    def tier_for(self, score: int) -> Tier:
        for tier in self.tiers:
            if score >= tier.minimum:
                return tier
        return self.tiers[-1]


def calculate_score(results: Sequence[CheckResult], max_score: int) -> int:
    """Normalized 0–100 score; `max_score` is the battery's declared total."""
    if max_score <= 0:
        return 0
    total = sum(r.score for r in results)
    return round_half_up(total / max_score * 100)


def aggregate(
    battery: Battery,
    results: Sequence[CheckResult],
    source: str,
    platform: Optional[str] = None,
    word_count: Optional[int] = None,
) -> AnalysisOutcome:
    score = calculate_score(results, battery.max_score)
    tier = battery.tier_for(score)
    return AnalysisOutcome(
        battery=battery.key,
        score=score,
        tier=tier.tier,
        label=tier.label,
        summary=tier.summary,
        source=source,
        total_score=sum(r.score for r in results),
        max_score=battery.max_score,
        checks=list(results),
        platform=platform,
        word_count=word_count,
    )

