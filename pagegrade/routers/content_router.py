"""
pagegrade/routers/content_router.py — text endpoints: quality battery and tone rewriter.
"""
import random

from fastapi import APIRouter

from pagegrade.models import (
    AnalysisOutcome,
    ContentAnalysisRequest,
    HumanizeRequest,
    TransformResult,
)
from pagegrade.services.content_analyzer import analyze_content
from pagegrade.services.humanizer import humanize

router = APIRouter(prefix="/content", tags=["Content"])


@router.post("/analyze", response_model=AnalysisOutcome)
async def analyze_content_endpoint(req: ContentAnalysisRequest):
    return analyze_content(req.text)


@router.post("/humanize", response_model=TransformResult)
async def humanize_endpoint(req: HumanizeRequest):
    rng = random.Random(req.seed) if req.seed is not None else None
    return humanize(req.text, req.tone, rng=rng)
