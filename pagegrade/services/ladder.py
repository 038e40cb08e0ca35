"""
pagegrade/services/ladder.py
Threshold ladders: an ordered list of rungs, each pairing a verdict with
the condition that selects it. The first rung whose condition holds wins.
"""
import math
from typing import Any, NamedTuple, Optional, Sequence

from ..models import CheckStatus


class Rung(NamedTuple):
    """One step of a ladder. message/suggestion are str.format templates."""
    status: CheckStatus
    score: int
    message: str
    suggestion: Optional[str] = None


class Verdict(NamedTuple):
    status: CheckStatus
    score: int
    message: str
    suggestion: Optional[str]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values, matching browser Math.round."""
    return int(math.floor(value + 0.5))


def climb(tests: Sequence[bool], rungs: Sequence[Rung], **facts: Any) -> Verdict:
    """
    Pick the rung matching the first true test and fill in its templates.

    `tests` and `rungs` are parallel; the last test is normally ``True`` so
    the ladder always resolves.
    """
    if len(tests) != len(rungs):
        raise ValueError(f"ladder has {len(rungs)} rungs but {len(tests)} tests")
    for matched, rung in zip(tests, rungs):
        if matched:
            return Verdict(
                status=rung.status,
                score=rung.score,
                message=rung.message.format(**facts),
                suggestion=rung.suggestion.format(**facts) if rung.suggestion else None,
            )
    raise ValueError("no rung matched; the last test of a ladder must be True")
