"""Document and node abstractions over the selector engine.

The walker only relies on the ``Document`` and ``Node`` protocols. The
BeautifulSoup adapters below are the default selector engine.
"""

from typing import Protocol, runtime_checkable

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from webgrab.exceptions import InvalidSelectorError


@runtime_checkable
class Node(Protocol):
    """A matched node exposing its text and attributes."""

    def text(self) -> str:
        """Return the combined text of the node and its descendants."""
        ...

    def attribute(self, name: str) -> str | None:
        """Return the named attribute, or None if the node lacks it."""
        ...


@runtime_checkable
class Document(Protocol):
    """A parsed document that resolves selectors to nodes."""

    def find(self, selector: str) -> list[Node]:
        """Return every node matching the selector, in document order."""
        ...


class SoupNode:
    """Node backed by a BeautifulSoup tag."""

    __slots__ = ('tag',)

    def __init__(self, tag: Tag):
        self.tag = tag

    def text(self) -> str:
        return self.tag.get_text()

    def attribute(self, name: str) -> str | None:
        value = self.tag.get(name)
        if value is None:
            return None
        # BeautifulSoup returns multi-valued attributes like class as a list
        if isinstance(value, list):
            return ' '.join(value)
        return value

    def __repr__(self) -> str:
        return f'SoupNode(<{self.tag.name}>)'


class SoupDocument:
    """Document backed by a BeautifulSoup tree.

    Attributes:
        soup: Parsed BeautifulSoup tree

    """

    def __init__(self, soup: BeautifulSoup):
        """Wrap an already parsed tree.

        Args:
            soup: BeautifulSoup tree to query

        """
        self.soup = soup

    @classmethod
    def from_html(cls, html: str | bytes, parser: str = 'lxml') -> 'SoupDocument':
        """Parse HTML into a document.

        Args:
            html: Raw HTML markup
            parser: BeautifulSoup parser name. Defaults to 'lxml'.

        Returns:
            A SoupDocument wrapping the parsed tree

        """
        return cls(BeautifulSoup(html, parser))

    def find(self, selector: str) -> list[Node]:
        """Resolve a CSS selector against the whole tree.

        Raises:
            InvalidSelectorError: If the selector cannot be compiled

        """
        try:
            tags = self.soup.select(selector)
        except SelectorSyntaxError as e:
            raise InvalidSelectorError(selector, str(e)) from e
        return [SoupNode(tag) for tag in tags]


def as_document(source: Document | BeautifulSoup | str | bytes, parser: str = 'lxml') -> Document:
    """Coerce HTML markup or a BeautifulSoup tree into a Document.

    Args:
        source: A Document, a BeautifulSoup tree, or raw HTML
        parser: Parser used when source is raw HTML

    Returns:
        A Document the walker can query

    """
    if isinstance(source, BeautifulSoup):
        return SoupDocument(source)
    if isinstance(source, (str, bytes)):
        return SoupDocument.from_html(source, parser=parser)
    return source
