"""
Document Parser - Lenient HTML and strict JSON document access.

HTML is parsed with BeautifulSoup and exposed through small wrapper
classes whose accessors never return None: missing text or attributes
come back as empty strings, which is what the source adapters expect
when they fill records field by field. JSON is parsed strictly.
"""

import json
import logging
from typing import Any, List, Optional, Union

from bs4 import BeautifulSoup, Tag

from anisources.core.exceptions import MalformedJsonError, MalformedMarkupError


logger = logging.getLogger(__name__)


def _collapse(text: str) -> str:
    return " ".join(text.split())


class HTMLElement:
    """Wrapper around a single parsed element."""

    def __init__(self, tag: Tag):
        self.tag = tag

    @property
    def name(self) -> str:
        return self.tag.name or ""

    def select(self, selector: str) -> List["HTMLElement"]:
        """Return all descendants matching a CSS selector, in document order."""
        return [HTMLElement(tag) for tag in self.tag.select(selector)]

    def select_one(self, selector: str) -> Optional["HTMLElement"]:
        """Return the first descendant matching a CSS selector, or None."""
        tag = self.tag.select_one(selector)
        return HTMLElement(tag) if tag is not None else None

    def text(self) -> str:
        """Whitespace-collapsed text content."""
        return _collapse(self.tag.get_text())

    def own_text(self) -> str:
        """Text of this element's direct text nodes only."""
        parts = [str(child) for child in self.tag.children if isinstance(child, str)]
        return _collapse("".join(parts))

    def attr(self, name: str) -> str:
        """
        Attribute value, or an empty string when absent.

        Multi-valued attributes such as class are joined with spaces.
        """
        value = self.tag.get(name)
        if value is None:
            return ""
        if isinstance(value, list):
            return " ".join(value)
        return str(value)

    def has_attr(self, name: str) -> bool:
        return self.tag.has_attr(name)

    def html(self) -> str:
        """Inner markup of the element."""
        return self.tag.decode_contents()

    def select_text(self, selector: str) -> str:
        """Text of every match joined by a space, or an empty string."""
        texts = [element.text() for element in self.select(selector)]
        return " ".join(text for text in texts if text)

    def select_attr(self, selector: str, name: str) -> str:
        """Attribute of the first match that carries it, or an empty string."""
        for element in self.select(selector):
            if element.has_attr(name):
                return element.attr(name)
        return ""

    def __repr__(self) -> str:
        return f"HTMLElement(<{self.name}>)"


class HTMLDocument(HTMLElement):
    """Parsed HTML document; the root element of the tree."""

    def __init__(self, soup: BeautifulSoup):
        super().__init__(soup)
        self.soup = soup

    @property
    def is_blank(self) -> bool:
        """True when the document contains no elements at all."""
        return self.soup.find(True) is None

    def __repr__(self) -> str:
        return f"HTMLDocument(elements={len(self.soup.find_all(True))})"


def parse_html(raw: Union[str, bytes]) -> HTMLDocument:
    """
    Parse raw markup into an HTMLDocument.

    Args:
        raw: HTML text or bytes

    Returns:
        Parsed document

    Raises:
        MalformedMarkupError: If the input cannot be tokenized at all
    """
    if not isinstance(raw, (str, bytes)):
        raise MalformedMarkupError(
            f"Expected HTML text, got {type(raw).__name__}",
            details=type(raw).__name__
        )

    try:
        soup = BeautifulSoup(raw, 'html.parser')
    except Exception as e:
        logger.debug(f"HTML parser rejected document: {e}")
        raise MalformedMarkupError(f"Could not parse HTML: {e}", details=str(e)) from e

    return HTMLDocument(soup)


def parse_json(raw: Union[str, bytes]) -> Any:
    """
    Parse raw text as JSON.

    Raises:
        MalformedJsonError: If the input is not valid JSON
    """
    if not isinstance(raw, (str, bytes)):
        raise MalformedJsonError(
            f"Expected JSON text, got {type(raw).__name__}",
            details=type(raw).__name__
        )

    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedJsonError(f"Invalid JSON: {e}", details=str(e)) from e


# Export document classes and parsers
__all__ = [
    "HTMLElement",
    "HTMLDocument",
    "parse_html",
    "parse_json",
]
