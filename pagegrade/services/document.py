"""
pagegrade/services/document.py
Read-only facade over a parsed HTML page, plus URL helpers shared by the
HTML check batteries.
"""
import copy
from dataclasses import dataclass
from typing import Iterable, List, Optional
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4.element import Comment, Tag


class ParsedDocument:
    """
    Parsed page. Queries never raise on malformed markup: a missing element
    is simply None / an empty list.
    """

    def __init__(self, html: str):
        self.html = html or ""
        self._soup = BeautifulSoup(self.html, "lxml")

    def select_one(self, selector: str) -> Optional[Tag]:
        return self._soup.select_one(selector)

    def select(self, selector: str) -> List[Tag]:
        return self._soup.select(selector)

    def count(self, selector: str) -> int:
        return len(self._soup.select(selector))

    @property
    def body(self) -> Optional[Tag]:
        return self._soup.body

    def body_text(self, exclude: Iterable[str] = ()) -> str:
        """Concatenated body text with the `exclude` tags (and their contents) removed."""
        if self.body is None:
            return ""
        exclude = list(exclude)
        if not exclude:
            return self.body.get_text()
        clone = copy.copy(self.body)
        for tag in clone.find_all(exclude):
            tag.extract()
        return clone.get_text()

    def body_words(self, exclude: Iterable[str] = ()) -> List[str]:
        return self.body_text(exclude).split()

    def text_content(self) -> str:
        """Every string under <body>, script and style bodies included; comments skipped."""
        if self.body is None:
            return ""
        return "".join(
            s for s in self.body.find_all(string=True) if not isinstance(s, Comment)
        )


def text_of(tag: Optional[Tag]) -> str:
    return tag.get_text() if tag is not None else ""


def attr(tag: Optional[Tag], name: str) -> str:
    """Attribute value as a string; multi-valued attributes are space-joined."""
    if tag is None:
        return ""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return value


def parse_html(html: str) -> ParsedDocument:
    return ParsedDocument(html)


def hostname_of(url: str) -> str:
    """Best-effort hostname; '' when the URL cannot be parsed."""
    try:
        return (urlparse(url or "").hostname or "").lower()
    except ValueError:
        return ""


@dataclass(frozen=True)
class PageContext:
    """Per-run facts about where the document came from."""
    url: str
    hostname: str

    @classmethod
    def for_url(cls, url: str) -> "PageContext":
        return cls(url=url or "", hostname=hostname_of(url))


def is_internal_link(href: str, hostname: str) -> bool:
    if not href:
        return False
    return (
        href.startswith(("/", "#", "./"))
        or not href.startswith("http")
        or bool(hostname and hostname in href)
    )


def is_external_link(href: str, hostname: str) -> bool:
    if not href:
        return False
    return href.startswith("http") and bool(hostname) and hostname not in href
