"""
pagegrade/services/seo_checker.py
On-page SEO health battery (10 checks, 100 points).
"""
import logging
from functools import partial

from ..models import AnalysisOutcome, CheckStatus, ScoreTier
from . import html_checks
from .document import ParsedDocument, PageContext, attr, is_external_link
from .ladder import Rung, Verdict, climb
from .score_calculator import Battery, CheckDefinition, Tier, aggregate

logger = logging.getLogger(__name__)

PASS, WARNING, FAIL = CheckStatus.PASS, CheckStatus.WARNING, CheckStatus.FAIL


# ── Rungs for the shared families ─────────────────────────────────────────────

TITLE_RUNGS = (
    Rung(FAIL, 0, "Missing title tag - critical SEO element not found.",
         "Add a unique, descriptive title tag (50-60 characters) that includes your primary keyword."),
    Rung(WARNING, 8, "Title too short ({length} chars). May not fully describe page content.",
         "Expand to 50-60 characters. Include primary keyword near the beginning."),
    Rung(WARNING, 10, "Title too long ({length} chars). Will be truncated in search results.",
         "Shorten to 50-60 characters for optimal display in SERPs."),
    Rung(PASS, 15, "Well-optimized title ({length} characters)."),
)

META_DESCRIPTION_RUNGS = (
    Rung(FAIL, 0, "Missing meta description - important for click-through rates.",
         "Add a compelling meta description (150-160 chars) that summarizes page content and includes target keywords."),
    Rung(WARNING, 6, "Meta description short ({length} chars). Not using full SERP space.",
         "Expand to 150-160 characters to maximize visibility in search results."),
    Rung(WARNING, 9, "Meta description long ({length} chars). Will be truncated.",
         "Trim to 150-160 characters to prevent truncation in search results."),
    Rung(PASS, 12, "Well-optimized meta description ({length} characters)."),
)

H1_RUNGS = (
    Rung(FAIL, 0, "No H1 heading found - main topic unclear to search engines.",
         "Add exactly one H1 tag that clearly describes your page's main topic."),
    Rung(WARNING, 8, "Multiple H1 tags found ({count}). Dilutes topic focus.",
         "Use only one H1 per page. Convert others to H2 or H3 tags."),
    Rung(WARNING, 8, "H1 heading appears too short or generic.",
         "Make H1 more descriptive with relevant keywords (20-70 characters ideal)."),
    Rung(PASS, 12, "Single, well-structured H1 heading present."),
)

IMAGE_ALT_RUNGS = (
    Rung(WARNING, 5, "No images found. Consider adding relevant visuals.",
         "Add images with descriptive alt text to enhance user engagement and SEO."),
    Rung(FAIL, 2, "Only {percentage}% of images have alt text ({with_alt}/{total}).",
         "Add descriptive alt text to all images for accessibility and SEO."),
    Rung(WARNING, 6, "{percentage}% of images have alt text ({with_alt}/{total}).",
         "Add alt text to remaining images without descriptions."),
    Rung(PASS, 10, "Excellent! {percentage}% of images have alt text."),
)

INTERNAL_LINK_RUNGS = (
    Rung(FAIL, 2, "Very few internal links ({count}). Poor site structure signal.",
         "Add more internal links to connect related content and improve crawlability."),
    Rung(WARNING, 6, "Moderate internal linking ({count} links).",
         "Consider adding more contextual internal links to related pages."),
    Rung(PASS, 10, "Good internal linking structure ({count} links)."),
)

HTTPS_RUNGS = (
    Rung(WARNING, 5, "Could not verify HTTPS status.",
         "Ensure your site uses HTTPS for security and SEO benefits."),
    Rung(PASS, 10, "Site uses secure HTTPS connection."),
    Rung(FAIL, 0, "Site not using HTTPS - major security and ranking issue.",
         "Migrate to HTTPS immediately. Most hosts offer free SSL certificates."),
)


# ── SEO-only checks ───────────────────────────────────────────────────────────

def check_heading_structure(doc: ParsedDocument, page: PageContext) -> Verdict:
    h1, h2, h3 = doc.count("h1"), doc.count("h2"), doc.count("h3")
    return climb(
        [h1 == 0, h2 == 0, h2 >= 2 and (h3 >= 1 or h2 >= 4), True],
        (
            Rung(FAIL, 0, "No heading hierarchy established.",
                 "Create proper heading structure: H1 for main topic, H2 for sections, H3 for subsections."),
            Rung(WARNING, 5, "No H2 headings found. Content may lack structure.",
                 "Add H2 headings to break content into logical sections."),
            Rung(PASS, 10, "Good heading hierarchy ({h1} H1, {h2} H2, {h3} H3)."),
            Rung(WARNING, 7, "Basic heading structure ({h1} H1, {h2} H2).",
                 "Consider adding more H2/H3 headings to improve content organization."),
        ),
        h1=h1, h2=h2, h3=h3,
    )


def check_external_links(doc: ParsedDocument, page: PageContext) -> Verdict:
    count = sum(
        1 for a in doc.select("a[href]")
        if is_external_link(attr(a, "href"), page.hostname)
    )
    return climb(
        [count == 0, count > 20, True],
        (
            Rung(WARNING, 4, "No external links found.",
                 "Consider linking to authoritative external sources to build trust."),
            Rung(WARNING, 5, "Many external links ({count}). May dilute page authority.",
                 "Review external links and keep only the most valuable ones."),
            Rung(PASS, 8, "Balanced external linking ({count} links)."),
        ),
        count=count,
    )


def check_viewport(doc: ParsedDocument, page: PageContext) -> Verdict:
    viewport = doc.select_one('meta[name="viewport"]')
    content = attr(viewport, "content")
    return climb(
        [viewport is None, "width=device-width" in content, True],
        (
            Rung(FAIL, 0, "Missing viewport meta tag - likely not mobile-friendly.",
                 'Add <meta name="viewport" content="width=device-width, initial-scale=1.0">'),
            Rung(PASS, 8, "Mobile-responsive viewport configured."),
            Rung(WARNING, 5, "Viewport present but may not be optimally configured.",
                 'Use "width=device-width, initial-scale=1.0" for best mobile experience.'),
        ),
    )


def check_canonical(doc: ParsedDocument, page: PageContext) -> Verdict:
    canonical = doc.select_one('link[rel="canonical"]')
    return climb(
        [canonical is None, bool(attr(canonical, "href")), True],
        (
            Rung(WARNING, 2, "No canonical tag found.",
                 "Add a canonical tag to prevent duplicate content issues."),
            Rung(PASS, 5, "Canonical tag properly implemented."),
            Rung(WARNING, 2, "Canonical tag present but empty.",
                 "Set the canonical URL to the preferred version of this page."),
        ),
    )


SEO_BATTERY = Battery(
    key="seo",
    checks=(
        CheckDefinition("Title Tag", 15, partial(html_checks.title_tag, rungs=TITLE_RUNGS)),
        CheckDefinition("Meta Description", 12, partial(html_checks.meta_description, rungs=META_DESCRIPTION_RUNGS)),
        CheckDefinition("H1 Heading", 12, partial(html_checks.h1_heading, rungs=H1_RUNGS)),
        CheckDefinition("Heading Structure", 10, check_heading_structure),
        CheckDefinition("Image Alt Attributes", 10, partial(html_checks.image_alts, rungs=IMAGE_ALT_RUNGS)),
        CheckDefinition("Internal Links", 10, partial(
            html_checks.internal_links, rungs=INTERNAL_LINK_RUNGS, thresholds=(3, 10))),
        CheckDefinition("External Links", 8, check_external_links),
        CheckDefinition("HTTPS Security", 10, partial(html_checks.https, rungs=HTTPS_RUNGS)),
        CheckDefinition("Mobile Viewport", 8, check_viewport),
        CheckDefinition("Canonical Tag", 5, check_canonical),
    ),
    max_score=100,
    tiers=(
        Tier(ScoreTier.EXCELLENT, 80, "Excellent SEO Health",
             "Your page has strong on-page SEO fundamentals. Review any minor issues below for further optimization."),
        Tier(ScoreTier.GOOD, 60, "Good - Needs Improvement",
             "Solid SEO foundation with room for improvement. Address the issues below to boost rankings."),
        Tier(ScoreTier.POOR, 0, "Needs Significant Work",
             "Critical SEO issues detected. Address the problems below before expecting good search rankings."),
    ),
)


def analyze_seo(html: str, url: str) -> AnalysisOutcome:
    """Score one page's on-page SEO. Never raises for missing or broken markup."""
    doc = ParsedDocument(html)
    page = PageContext.for_url(url)
    outcome = aggregate(SEO_BATTERY, SEO_BATTERY.evaluate(doc, page), source=url)
    logger.info("SEO analysis of %s scored %d (%s)", url, outcome.score, outcome.label)
    return outcome
