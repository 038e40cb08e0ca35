"""
conftest.py — shared pytest fixtures
Adds the project root to sys.path so `pagegrade.*` imports resolve correctly
regardless of where pytest is invoked from.
"""

import sys
from pathlib import Path

# This file lives at  <root>/tests/conftest.py
# We need   <root>/   on sys.path so  `from pagegrade.main import app`  works.
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest
from fastapi.testclient import TestClient
from pagegrade.main import app
from pagegrade.middleware import rate_limit


@pytest.fixture(scope="session")
def client():
    """Synchronous test client; nothing leaves the process unless a test fetches."""
    with TestClient(app) as c:
        yield c


@pytest.fixture(autouse=True)
def clear_rate_limit():
    rate_limit.reset()
    yield
    rate_limit.reset()


def build_page(
    title=None,
    description=None,
    h1s=(),
    h2=0,
    h3=0,
    images=(),
    internal_links=0,
    external_links=0,
    viewport=None,
    canonical=None,
    charset=False,
    words=0,
    nav_links=None,
    footer_links=None,
    footer_text="",
    extra_body="",
):
    """
    Assemble a page from parts. `images` is a list of alt values (None = no
    alt attribute). `nav_links` / `footer_links` of None omit the element.
    """
    head = []
    if charset:
        head.append('<meta charset="utf-8">')
    if title is not None:
        head.append(f"<title>{title}</title>")
    if description is not None:
        head.append(f'<meta name="description" content="{description}">')
    if viewport is not None:
        head.append(f'<meta name="viewport" content="{viewport}">')
    if canonical is not None:
        head.append(f'<link rel="canonical" href="{canonical}">')

    body = []
    if nav_links is not None:
        anchors = "".join(f'<a href="/section-{i}">Section {i}</a>' for i in range(nav_links))
        body.append(f"<nav>{anchors}</nav>")
    body += [f"<h1>{text}</h1>" for text in h1s]
    body += [f"<h2>Part {i}</h2>" for i in range(h2)]
    body += [f"<h3>Detail {i}</h3>" for i in range(h3)]
    if words:
        body.append("<p>" + " ".join(["lorem"] * words) + "</p>")
    for i, alt in enumerate(images):
        alt_attr = f' alt="{alt}"' if alt is not None else ""
        body.append(f'<img src="/img-{i}.png"{alt_attr}>')
    body += [f'<a href="/page-{i}">Page {i}</a>' for i in range(internal_links)]
    body += [f'<a href="https://ref{i}.org/">Ref {i}</a>' for i in range(external_links)]
    body.append(extra_body)
    if footer_links is not None:
        anchors = "".join(f'<a href="/legal-{i}">Legal {i}</a>' for i in range(footer_links))
        body.append(f"<footer>{anchors}{footer_text}</footer>")

    return (
        "<!DOCTYPE html><html><head>" + "".join(head) + "</head>"
        "<body>" + "".join(body) + "</body></html>"
    )


@pytest.fixture
def page():
    return build_page


@pytest.fixture
def well_built_page():
    """Scores full marks on every SEO check."""
    return build_page(
        title="T" * 55,
        description="D" * 155,
        h1s=["A thorough guide to the topic"],
        h2=2,
        h3=1,
        images=["chart", "diagram"],
        internal_links=12,
        external_links=3,
        viewport="width=device-width, initial-scale=1.0",
        canonical="https://example.com/guide",
        charset=True,
        words=1000,
    )


@pytest.fixture
def safe_url():
    return "https://example.com"


@pytest.fixture
def private_url():
    return "http://192.168.1.1"


@pytest.fixture
def localhost_url():
    return "http://127.0.0.1:8080"
