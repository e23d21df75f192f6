"""
Test configuration and fixtures for the SEO Tech Check API.

Provides a TestClient bound to the application, keeps the rate limiter and
dependency overrides isolated between tests, and a small HTML page builder.
"""

import os
from typing import Generator

os.environ.setdefault("ENVIRONMENT", "local")
os.environ.setdefault("SCRAPE_DO_API_KEY", "test-token")

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from app.main import app

    return app


@pytest.fixture(scope="function")
def client(test_app) -> Generator[TestClient, None, None]:
    """
    Create a test client for making HTTP requests.
    Each test starts with an empty rate-limit window and no dependency overrides.
    """
    test_app.state.rate_limiter.reset()
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()
    test_app.state.rate_limiter.reset()


def build_page(head: str = "", body: str = "", lang: str = "en", doctype: bool = True) -> str:
    """Assemble a small HTML document for analyzer tests."""
    lang_attr = f' lang="{lang}"' if lang else ""
    prefix = "<!DOCTYPE html>\n" if doctype else ""
    return f"{prefix}<html{lang_attr}><head>{head}</head><body>{body}</body></html>"


TITLE_45 = "Acme Widgets - Durable Tools for Any Projects"
DESCRIPTION_140 = (
    "Acme builds durable widgets and hand tools for workshops, schools and homes. "
    "Browse our catalogue, compare all models and order online today"
)

GOOD_HEAD = (
    '<meta charset="utf-8">'
    '<meta name="viewport" content="width=device-width, initial-scale=1">'
    f"<title>{TITLE_45}</title>"
    f'<meta name="description" content="{DESCRIPTION_140}">'
    '<link rel="canonical" href="https://example.com/">'
)

GOOD_BODY = (
    '<a href="#main">Skip to content</a>'
    '<main id="main">'
    "<h1>Acme Widgets</h1>"
    "<h2>Catalogue</h2>"
    "<h3>Hammers</h3>"
    "<h2>About us</h2>"
    "<p>First paragraph.</p><p>Second paragraph.</p><p>Third paragraph.</p>"
    '<img src="/hammer.png" alt="Claw hammer" width="200" height="120">'
    "</main>"
)


@pytest.fixture
def good_page() -> str:
    return build_page(head=GOOD_HEAD, body=GOOD_BODY)
