"""
pagegrade/services/html_checks.py
Check families shared by more than one HTML battery.

Each family measures the page and owns its ladder conditions; the battery
supplies the rungs (scores and wording) in the order documented on the
family. Bind them with functools.partial to get a (doc, page) -> Verdict check.
"""
from typing import Iterable, Sequence, Tuple

from .document import ParsedDocument, PageContext, attr, is_internal_link, text_of
from .ladder import Rung, Verdict, climb, round_half_up


def title_tag(doc: ParsedDocument, page: PageContext, rungs: Sequence[Rung]) -> Verdict:
    """Rungs: missing, short (<30), long (>70), ok. Facts: length."""
    length = len(text_of(doc.select_one("title")).strip())
    return climb(
        [length == 0, length < 30, length > 70, True],
        rungs,
        length=length,
    )


def meta_description(doc: ParsedDocument, page: PageContext, rungs: Sequence[Rung]) -> Verdict:
    """Rungs: missing, short (<100), long (>170), ok. Facts: length."""
    meta = doc.select_one('meta[name="description"]')
    length = len(attr(meta, "content").strip())
    return climb(
        [length == 0, length < 100, length > 170, True],
        rungs,
        length=length,
    )


def h1_heading(doc: ParsedDocument, page: PageContext, rungs: Sequence[Rung]) -> Verdict:
    """Rungs: none, multiple, too short (<10 chars), ok. Facts: count."""
    h1_tags = doc.select("h1")
    count = len(h1_tags)
    first = text_of(h1_tags[0]).strip() if h1_tags else ""
    return climb(
        [count == 0, count > 1, len(first) < 10, True],
        rungs,
        count=count,
    )


def image_alts(doc: ParsedDocument, page: PageContext, rungs: Sequence[Rung]) -> Verdict:
    """Rungs: no images, <50%, <90%, ok. Facts: percentage, with_alt, total."""
    images = doc.select("img")
    total = len(images)
    with_alt = sum(1 for img in images if attr(img, "alt").strip())
    percentage = round_half_up(with_alt / total * 100) if total else 0
    return climb(
        [total == 0, percentage < 50, percentage < 90, True],
        rungs,
        percentage=percentage,
        with_alt=with_alt,
        total=total,
    )


def internal_links(
    doc: ParsedDocument,
    page: PageContext,
    rungs: Sequence[Rung],
    thresholds: Tuple[int, int] = (3, 10),
) -> Verdict:
    """Rungs: below thresholds[0], below thresholds[1], ok. Facts: count."""
    few, moderate = thresholds
    count = sum(
        1 for a in doc.select("a[href]")
        if is_internal_link(attr(a, "href"), page.hostname)
    )
    return climb([count < few, count < moderate, True], rungs, count=count)


def https(doc: ParsedDocument, page: PageContext, rungs: Sequence[Rung]) -> Verdict:
    """Rungs: unknown (no URL), secure, insecure. Only the scheme is inspected."""
    url = page.url
    return climb(
        [not url, url.lower().startswith("https://"), True],
        rungs,
    )


def word_count(
    doc: ParsedDocument,
    page: PageContext,
    rungs: Sequence[Rung],
    thresholds: Tuple[int, int, int] = (300, 500, 800),
    exclude: Iterable[str] = ("script", "style", "noscript"),
) -> Verdict:
    """Rungs: below each of the three thresholds, then ok. Facts: count."""
    count = len(doc.body_words(exclude))
    thin, light, moderate = thresholds
    return climb(
        [count < thin, count < light, count < moderate, True],
        rungs,
        count=count,
    )
