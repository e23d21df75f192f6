from bs4 import BeautifulSoup
from bs4.element import Doctype, PreformattedString

from app.platform.exceptions import AnalysisError

PARSER = "html.parser"

# Text inside these elements is never rendered
NON_VISIBLE_TAGS = {"script", "style", "noscript", "template", "head", "title"}


def parse_document(html: str) -> BeautifulSoup:
    """Build a queryable tree from rendered markup."""
    if not isinstance(html, str):
        raise AnalysisError(f"Cannot parse document of type {type(html).__name__}")

    try:
        return BeautifulSoup(html, PARSER)
    except Exception as e:
        raise AnalysisError(f"Failed to parse HTML document: {e}") from e


def has_doctype(soup: BeautifulSoup) -> bool:
    return any(isinstance(node, Doctype) for node in soup.contents)


def visible_text(soup: BeautifulSoup) -> str:
    """
    Text of the body (or the whole document when the markup has no body),
    skipping comments, doctypes and non-rendered elements.
    """
    root = soup.body or soup
    parts = []
    for node in root.find_all(string=True):
        if isinstance(node, PreformattedString):
            continue
        if any(parent.name in NON_VISIBLE_TAGS for parent in node.parents):
            continue
        parts.append(str(node))
    return " ".join(parts)
