"""
pagegrade/routers/site_router.py — page batteries (SEO, AdSense, static site).
The page is fetched from its URL unless the request carries the markup.
"""
import logging
from typing import Callable

from fastapi import APIRouter

from pagegrade.models import AnalysisOutcome, PageAnalysisRequest
from pagegrade.services.adsense_checker import analyze_adsense
from pagegrade.services.fetcher import fetch_page
from pagegrade.services.seo_checker import analyze_seo
from pagegrade.services.static_site_checker import analyze_static_site
from pagegrade.services.validation import validate_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analyze", tags=["Page Analysis"])


async def _run(req: PageAnalysisRequest, analyze: Callable[[str, str], AnalysisOutcome],
               battery: str = "default") -> AnalysisOutcome:
    url = validate_url(req.url, battery)
    html = req.html
    if html is None:
        html = await fetch_page(url)
    return analyze(html, url)


@router.post("/seo", response_model=AnalysisOutcome)
async def analyze_seo_endpoint(req: PageAnalysisRequest):
    return await _run(req, analyze_seo)


@router.post("/adsense", response_model=AnalysisOutcome)
async def analyze_adsense_endpoint(req: PageAnalysisRequest):
    return await _run(req, analyze_adsense)


@router.post("/static-site", response_model=AnalysisOutcome)
async def analyze_static_site_endpoint(req: PageAnalysisRequest):
    return await _run(req, analyze_static_site, battery="static_site")
