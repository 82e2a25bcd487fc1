"""Parsed HTML document with the few read operations the engines need.

The tree is built once with BeautifulSoup (lxml parser) and only read
afterwards, so one Document can serve any number of extraction calls.
"""

from bs4 import BeautifulSoup, Tag
from soupsieve import SoupSieve


class Document:
    """Read-only wrapper around a parsed page.

    Usage::

        doc = Document(html)
        for card in doc.select(selectors["cards"]):
            header = select_first(card, selectors["header"])
    """

    def __init__(self, html: str | bytes):
        self.root = BeautifulSoup(html, "lxml")

    def select(self, selector: SoupSieve) -> list[Tag]:
        """All elements matching ``selector`` in document order."""
        return select_all(self.root, selector)


def select_all(element: Tag, selector: SoupSieve) -> list[Tag]:
    """Descendants of ``element`` matching ``selector`` in document order."""
    return selector.select(element)


def select_first(element: Tag, selector: SoupSieve) -> Tag | None:
    """First descendant of ``element`` matching ``selector``, or None."""
    return selector.select_one(element)


def contains(element: Tag, selector: SoupSieve) -> bool:
    """True if any descendant of ``element`` matches ``selector``."""
    return selector.select_one(element) is not None


def text_of(element: Tag) -> str:
    """All text content of ``element``, concatenated and trimmed."""
    return element.get_text().strip()


def attr_of(element: Tag, name: str) -> str | None:
    """Value of attribute ``name``, or None if absent.

    Multi-valued attributes (``class``, ``rel``) come back from
    BeautifulSoup as lists and are joined with spaces.
    """
    value = element.get(name)
    if value is None:
        return None
    if isinstance(value, list):
        return " ".join(value)
    return value
