"""
pagegrade/services/adsense_checker.py
Ad-network (AdSense) readiness battery (10 checks, 100 points).
"""
import logging
from functools import partial

from ..models import AnalysisOutcome, CheckStatus, ScoreTier
from . import html_checks
from .document import ParsedDocument, PageContext, attr, text_of
from .ladder import Rung, Verdict, climb
from .score_calculator import Battery, CheckDefinition, Tier, aggregate

logger = logging.getLogger(__name__)

PASS, WARNING, FAIL = CheckStatus.PASS, CheckStatus.WARNING, CheckStatus.FAIL

PRIVACY_TERMS = ("privacy", "privacy-policy", "privacy_policy", "privacypolicy")


TITLE_RUNGS = (
    Rung(FAIL, 0, "No title tag found on your page.",
         "Add a descriptive title tag between 50-60 characters that describes your page content."),
    Rung(WARNING, 5, "Title tag found but too short ({length} characters).",
         "Expand your title to 50-60 characters for optimal SEO. Include your main topic and site name."),
    Rung(WARNING, 7, "Title tag found but too long ({length} characters).",
         "Shorten your title to 50-60 characters. Search engines may truncate longer titles."),
    Rung(PASS, 10, "Title tag is well-optimized ({length} characters)."),
)

META_DESCRIPTION_RUNGS = (
    Rung(FAIL, 0, "No meta description found on your page.",
         "Add a meta description tag with 150-160 characters summarizing your page content."),
    Rung(WARNING, 5, "Meta description found but too short ({length} characters).",
         "Expand your meta description to 150-160 characters to maximize visibility in search results."),
    Rung(WARNING, 7, "Meta description found but too long ({length} characters).",
         "Shorten your meta description to 150-160 characters to prevent truncation in search results."),
    Rung(PASS, 10, "Meta description is well-optimized ({length} characters)."),
)

H1_RUNGS = (
    Rung(FAIL, 0, "No H1 heading found on your page.",
         "Add exactly one H1 heading that clearly describes your main content topic."),
    Rung(WARNING, 7, "Multiple H1 tags found ({count}). Best practice is to have exactly one.",
         "Use only one H1 tag per page. Use H2-H6 for subheadings."),
    Rung(WARNING, 7, "H1 heading found but may be too short or generic.",
         "Make your H1 more descriptive and relevant to your page content."),
    Rung(PASS, 10, "H1 heading is properly implemented."),
)

WORD_COUNT_RUNGS = (
    Rung(FAIL, 0, "Very thin content detected (~{count} words).",
         "Add substantial, valuable content. Aim for at least 500-1000 words of unique, helpful content per page."),
    Rung(WARNING, 7, "Content may be thin (~{count} words).",
         "Consider expanding your content to at least 500-1000 words for better AdSense approval chances."),
    Rung(WARNING, 12, "Moderate content length (~{count} words).",
         "Good start! For best results, aim for 800+ words of comprehensive content."),
    Rung(PASS, 15, "Good content length (~{count} words)."),
)

IMAGE_ALT_RUNGS = (
    Rung(WARNING, 5, "No images found on the page.",
         "Consider adding relevant images to enhance user engagement. When you do, include descriptive alt text."),
    Rung(FAIL, 2, "Only {percentage}% of images have alt attributes ({with_alt}/{total}).",
         "Add descriptive alt text to all images for accessibility and SEO. This is important for AdSense approval."),
    Rung(WARNING, 6, "{percentage}% of images have alt attributes ({with_alt}/{total}).",
         "Add alt text to the remaining images without it."),
    Rung(PASS, 10, "All or most images have alt attributes ({with_alt}/{total})."),
)

HTTPS_RUNGS = (
    Rung(WARNING, 5, "Could not determine if your site uses HTTPS.",
         "Ensure your website uses HTTPS. Most hosting providers offer free SSL certificates."),
    Rung(PASS, 10, "Your website uses HTTPS (secure connection)."),
    Rung(FAIL, 0, "Your website does not use HTTPS.",
         "Migrate to HTTPS immediately. This is essential for user trust and SEO. Most hosts offer free SSL certificates."),
)

INTERNAL_LINK_RUNGS = (
    Rung(FAIL, 0, "Very few internal links detected ({count}).",
         "Add more internal links to connect your pages. This helps users and search engines navigate your site."),
    Rung(WARNING, 6, "Some internal links present ({count}).",
         "Consider adding more internal links to related content throughout your pages."),
    Rung(PASS, 10, "Good internal linking structure ({count} internal links)."),
)


def check_navigation(doc: ParsedDocument, page: PageContext) -> Verdict:
    nav_elements = doc.count('nav, [role="navigation"]')
    header_nav = doc.select_one("header nav, header ul, .nav, .navbar, .menu")
    nav_links = doc.count("nav a, header a, .nav a, .menu a")
    return climb(
        [nav_elements == 0 and header_nav is None, nav_links < 3, True],
        (
            Rung(FAIL, 0, "No clear navigation structure detected.",
                 "Add a proper navigation menu using the <nav> element. Include links to your main pages."),
            Rung(WARNING, 5, "Navigation found but appears limited.",
                 "Add more navigation links to help users find content (Home, About, Contact, Categories, etc.)."),
            Rung(PASS, 10, "Good navigation structure detected with multiple links."),
        ),
    )


def check_privacy_policy(doc: ParsedDocument, page: PageContext) -> Verdict:
    found = False
    for link in doc.select("a"):
        href = attr(link, "href").lower()
        text = text_of(link).lower()
        if "privacy" in text or any(term in href for term in PRIVACY_TERMS):
            found = True
            break
    return climb(
        [not found, True],
        (
            Rung(FAIL, 0, "No Privacy Policy link detected.",
                 "Add a Privacy Policy page and link to it from your navigation or footer. "
                 "This is MANDATORY for AdSense approval."),
            Rung(PASS, 10, "Privacy Policy link detected."),
        ),
    )


def check_footer(doc: ParsedDocument, page: PageContext) -> Verdict:
    footer = doc.select_one('footer, [role="contentinfo"], .footer')
    footer_links = len(footer.select("a")) if footer is not None else 0
    return climb(
        [footer is None, footer_links < 2, True],
        (
            Rung(WARNING, 2, "No footer section detected.",
                 "Add a footer with copyright, legal links, and navigation. "
                 "Footers are expected on professional websites."),
            Rung(WARNING, 3, "Footer found but appears minimal.",
                 "Enhance your footer with links to important pages (About, Contact, Privacy Policy, Terms)."),
            Rung(PASS, 5, "Proper footer section detected with navigation links."),
        ),
    )


ADSENSE_BATTERY = Battery(
    key="adsense",
    checks=(
        CheckDefinition("Title Tag", 10, partial(html_checks.title_tag, rungs=TITLE_RUNGS)),
        CheckDefinition("Meta Description", 10, partial(html_checks.meta_description, rungs=META_DESCRIPTION_RUNGS)),
        CheckDefinition("H1 Heading", 10, partial(html_checks.h1_heading, rungs=H1_RUNGS)),
        CheckDefinition("Content Word Count", 15, partial(
            html_checks.word_count, rungs=WORD_COUNT_RUNGS,
            thresholds=(300, 500, 800), exclude=("script", "style", "noscript"))),
        CheckDefinition("Image Alt Attributes", 10, partial(html_checks.image_alts, rungs=IMAGE_ALT_RUNGS)),
        CheckDefinition("HTTPS Security", 10, partial(html_checks.https, rungs=HTTPS_RUNGS)),
        CheckDefinition("Navigation Structure", 10, check_navigation),
        CheckDefinition("Internal Links", 10, partial(
            html_checks.internal_links, rungs=INTERNAL_LINK_RUNGS, thresholds=(3, 8))),
        CheckDefinition("Privacy Policy Link", 10, check_privacy_policy),
        CheckDefinition("Footer Section", 5, check_footer),
    ),
    max_score=100,
    tiers=(
        Tier(ScoreTier.EXCELLENT, 80, "Ready for Application",
             "Your page meets most key AdSense requirements. Review any warnings below and consider applying."),
        Tier(ScoreTier.GOOD, 50, "Needs Improvement",
             "Your page has some issues that should be addressed before applying for AdSense."),
        Tier(ScoreTier.POOR, 0, "Not Ready",
             "Significant improvements are needed. Address the issues below before applying."),
    ),
)


def analyze_adsense(html: str, url: str) -> AnalysisOutcome:
    """Score one page's readiness for an ad-network application."""
    doc = ParsedDocument(html)
    page = PageContext.for_url(url)
    outcome = aggregate(ADSENSE_BATTERY, ADSENSE_BATTERY.evaluate(doc, page), source=url)
    logger.info("AdSense analysis of %s scored %d (%s)", url, outcome.score, outcome.label)
    return outcome
