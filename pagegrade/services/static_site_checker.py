"""
pagegrade/services/static_site_checker.py
AdSense readiness battery for statically hosted sites (Netlify, GitHub Pages,
Vercel, ...). 9 checks, 100 points. Also reports the detected host platform.
"""
import logging
import re
from functools import partial

from ..models import AnalysisOutcome, CheckStatus, ScoreTier
from . import html_checks
from .document import ParsedDocument, PageContext, attr, text_of
from .ladder import Rung, Verdict, climb
from .score_calculator import Battery, CheckDefinition, Tier, aggregate

logger = logging.getLogger(__name__)

PASS, WARNING, FAIL = CheckStatus.PASS, CheckStatus.WARNING, CheckStatus.FAIL

# (substrings of the URL, platform label); first match wins
PLATFORMS = (
    (("netlify.app", "netlify.com"), "Netlify"),
    (("github.io", "github.com"), "GitHub Pages"),
    (("vercel.app", "vercel.com"), "Vercel"),
    (("surge.sh",), "Surge"),
    (("cloudflare",), "Cloudflare Pages"),
    (("render.com",), "Render"),
)
UNKNOWN_PLATFORM = "Custom/Unknown"

# Free subdomains handed out by static hosts
PLATFORM_SUBDOMAINS = (
    ".netlify.app", ".github.io", ".vercel.app", ".surge.sh", ".pages.dev", ".onrender.com",
)

_EMAIL_RE = re.compile(r"@[\w.-]+\.[a-z]{2,}", re.IGNORECASE | re.ASCII)


def detect_platform(url: str) -> str:
    lower = (url or "").lower()
    for needles, label in PLATFORMS:
        if any(n in lower for n in needles):
            return label
    return UNKNOWN_PLATFORM


def check_custom_domain(doc: ParsedDocument, page: PageContext) -> Verdict:
    hostname = page.hostname
    on_subdomain = hostname.endswith(PLATFORM_SUBDOMAINS)
    looks_custom = len(hostname.split(".")) >= 2 and "localhost" not in hostname
    return climb(
        [on_subdomain, looks_custom, True],
        (
            Rung(FAIL, 3, "Using {platform} subdomain. Not ideal for AdSense.",
                 "Register a custom domain (yoursite.com). Most registrars offer domains for $10-15/year. "
                 "This significantly improves AdSense approval chances."),
            Rung(PASS, 15, "Using a custom domain. Professional appearance."),
            Rung(WARNING, 8, "Could not definitively verify custom domain status.",
                 "Ensure you are using a custom domain like yoursite.com for AdSense applications."),
        ),
        platform=detect_platform(page.url),
    )


HTTPS_RUNGS = (
    # Static hosting always has a URL; an empty one scores as insecure.
    Rung(FAIL, 0, "Site not using HTTPS.",
         "Enable HTTPS immediately. All major static hosts (Netlify, Vercel, GitHub Pages) provide free SSL certificates."),
    Rung(PASS, 12, "Site uses HTTPS. Secure and trusted."),
    Rung(FAIL, 0, "Site not using HTTPS.",
         "Enable HTTPS immediately. All major static hosts (Netlify, Vercel, GitHub Pages) provide free SSL certificates."),
)


def check_essential_pages(doc: ParsedDocument, page: PageContext) -> Verdict:
    has_privacy = has_about = has_contact = has_terms = False
    for link in doc.select("a[href]"):
        href = attr(link, "href").lower()
        text = text_of(link).lower()
        if "privacy" in href or "privacy" in text:
            has_privacy = True
        if "about" in href or "about" in text:
            has_about = True
        if "contact" in href or "contact" in text:
            has_contact = True
        if "terms" in href or "terms" in text or "tos" in href:
            has_terms = True

    found = sum([has_privacy, has_about, has_contact, has_terms])
    missing = [
        label for present, label in (
            (has_privacy, "Privacy Policy"), (has_about, "About"), (has_contact, "Contact"),
        ) if not present
    ]
    return climb(
        [found <= 1, found < 4, True],
        (
            Rung(FAIL, 3, "Missing essential pages: {missing}.",
                 "Add Privacy Policy (mandatory), About, and Contact pages. These are required for AdSense approval."),
            Rung(WARNING, 10, "Most essential pages found ({found}/4). Missing: {missing}.",
                 "Consider adding the missing pages." if has_privacy
                 else "Add Privacy Policy immediately—it is mandatory for AdSense."),
            Rung(PASS, 15, "All essential pages detected (Privacy, About, Contact, Terms)."),
        ),
        found=found,
        missing=", ".join(missing),
    )


def check_navigation(doc: ParsedDocument, page: PageContext) -> Verdict:
    nav = doc.select_one('nav, [role="navigation"], .nav, .navbar, header nav')
    links = doc.count("nav a, header a, .nav a, .menu a")
    return climb(
        [nav is None and links < 3, links < 5, True],
        (
            Rung(FAIL, 2, "No clear navigation found. Poor user experience.",
                 "Add a navigation menu with links to main sections. Use <nav> tag for semantic markup."),
            Rung(WARNING, 8, "Limited navigation ({links} links).",
                 "Add more navigation links to help users find content easily."),
            Rung(PASS, 12, "Good navigation structure ({links} links)."),
        ),
        links=links,
    )


CONTENT_DEPTH_RUNGS = (
    Rung(FAIL, 3, "Very little content (~{count} words). Likely rejection for thin content.",
         "Static sites need substantial content. Aim for 15-20 pages with 500+ words each."),
    Rung(WARNING, 8, "Light content on this page (~{count} words).",
         "Expand content or ensure other pages have substantial depth. Homepage should be comprehensive."),
    Rung(WARNING, 12, "Moderate content (~{count} words).",
         "Good start. Ensure overall site has 15+ content pages."),
    Rung(PASS, 15, "Good content depth (~{count} words on this page)."),
)


def check_meta_tags(doc: ParsedDocument, page: PageContext) -> Verdict:
    title = doc.select_one("title")
    description = doc.select_one('meta[name="description"]')
    found = sum([
        title is not None and len(text_of(title)) > 10,
        description is not None and len(attr(description, "content")) > 50,
        doc.select_one('meta[name="viewport"]') is not None,
        doc.select_one("meta[charset]") is not None,
    ])
    return climb(
        [found < 2, found < 4, True],
        (
            Rung(FAIL, 2, "Missing critical meta tags.",
                 "Add title, meta description, viewport, and charset tags to all pages."),
            Rung(WARNING, 6, "Some meta tags missing ({found}/4 basic tags).",
                 "Ensure all pages have complete meta tags for SEO and proper rendering."),
            Rung(PASS, 10, "Essential meta tags present."),
        ),
        found=found,
    )


def check_error_handling(doc: ParsedDocument, page: PageContext) -> Verdict:
    # A missing-page handler can't be probed remotely; relative linking stands in for it.
    relative_links = 0
    for link in doc.select("a[href]"):
        href = attr(link, "href")
        if href and not href.startswith(("#", "http")):
            relative_links += 1
    return climb(
        [relative_links < 5, True],
        (
            Rung(WARNING, 4, "Cannot verify 404 page setup remotely.",
                 "Create a 404.html page. Netlify, Vercel, and GitHub Pages use it automatically for missing pages."),
            Rung(PASS, 8, "Good internal linking suggests proper site structure.",
                 "Verify you have a 404.html file in your root directory."),
        ),
    )


def check_contact_info(doc: ParsedDocument, page: PageContext) -> Verdict:
    body_text = doc.text_content().lower()
    has_email = (
        bool(_EMAIL_RE.search(body_text))
        or "email" in body_text
        or doc.select_one('a[href^="mailto:"]') is not None
    )
    has_contact_link = any(
        "contact" in attr(a, "href").lower() or "contact" in text_of(a).lower()
        for a in doc.select("a")
    )
    return climb(
        [not has_email and not has_contact_link, has_email and has_contact_link, True],
        (
            Rung(FAIL, 2, "No contact information detected.",
                 "Add a contact page or visible email address. "
                 "AdSense wants to see legitimate, contactable businesses."),
            Rung(PASS, 8, "Contact information and contact page found."),
            Rung(WARNING, 5, "Some contact information found.",
                 "Ensure you have a dedicated contact page with clear ways to reach you."),
        ),
    )


def check_footer(doc: ParsedDocument, page: PageContext) -> Verdict:
    footer = doc.select_one('footer, .footer, [role="contentinfo"]')
    if footer is not None:
        footer_links = len(footer.select("a"))
        footer_text = text_of(footer)
        has_copyright = "©" in footer_text or "copyright" in footer_text.lower()
    else:
        footer_links, has_copyright = 0, False
    return climb(
        [footer is None, footer_links < 2 and not has_copyright, True],
        (
            Rung(WARNING, 2, "No footer element detected.",
                 "Add a footer with copyright, legal links, and branding. "
                 "It signals a professional, complete website."),
            Rung(WARNING, 3, "Footer exists but appears minimal.",
                 "Add links to legal pages and copyright notice."),
            Rung(PASS, 5, "Complete footer with links and/or copyright."),
        ),
    )


STATIC_SITE_BATTERY = Battery(
    key="static_site",
    checks=(
        CheckDefinition("Custom Domain", 15, check_custom_domain),
        CheckDefinition("HTTPS Security", 12, partial(html_checks.https, rungs=HTTPS_RUNGS)),
        CheckDefinition("Essential Pages", 15, check_essential_pages),
        CheckDefinition("Navigation Structure", 12, check_navigation),
        CheckDefinition("Content Depth", 15, partial(
            html_checks.word_count, rungs=CONTENT_DEPTH_RUNGS,
            thresholds=(300, 600, 1000),
            exclude=("script", "style", "noscript", "nav", "header", "footer"))),
        CheckDefinition("Meta Tags", 10, check_meta_tags),
        CheckDefinition("404 & Error Handling", 8, check_error_handling),
        CheckDefinition("Contact Information", 8, check_contact_info),
        CheckDefinition("Footer Section", 5, check_footer),
    ),
    max_score=100,
    tiers=(
        Tier(ScoreTier.EXCELLENT, 80, "Ready for AdSense",
             "Your static site meets key AdSense requirements. Address any remaining warnings before applying."),
        Tier(ScoreTier.GOOD, 55, "Almost Ready",
             "Your site has a good foundation but needs improvements before AdSense application."),
        Tier(ScoreTier.POOR, 0, "Not Ready",
             "Significant issues found. Address these before applying for AdSense."),
    ),
)


def analyze_static_site(html: str, url: str) -> AnalysisOutcome:
    """Score a statically hosted site's landing page; the outcome names the host platform."""
    doc = ParsedDocument(html)
    page = PageContext.for_url(url)
    platform = detect_platform(url)
    outcome = aggregate(
        STATIC_SITE_BATTERY,
        STATIC_SITE_BATTERY.evaluate(doc, page),
        source=url,
        platform=platform,
    )
    logger.info("Static-site analysis of %s (%s) scored %d (%s)", url, platform, outcome.score, outcome.label)
    return outcome
