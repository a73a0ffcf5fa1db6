"""
webgrab - Declarative HTML extraction
=====================================

Annotate the fields of a pydantic model with CSS selectors, attributes and
regular expressions, and webgrab fills them from a page.

Main Components:
    - Grabber: Fetches a page and populates a record from it
    - GrabField: Declares how a field is grabbed
    - StructWalker: Applies a record's annotations to a parsed document
    - SoupDocument: BeautifulSoup-backed selector engine

Example:
    >>> from pydantic import BaseModel
    >>> from webgrab import GrabField, Grabber
    >>> class Page(BaseModel):
    ...     title: str = GrabField('title')
    ...     links: list[str] = GrabField('a[href]', attribute='href', default_factory=list)
    >>> result = Grabber().scrape('<title>Hello</title><a href="x.html">x</a>', Page())
    >>> result.record.title
    'Hello'
"""

__version__ = '0.1.0'

from webgrab.config import GrabberConfig
from webgrab.core import (
    Document,
    Node,
    SoupDocument,
    SoupNode,
    StructWalker,
    as_document,
    describe,
    parse_field_tags,
    parse_tag,
)
from webgrab.core.extraction import NO_MATCH, post_process
from webgrab.core.fetcher import PageFetcher
from webgrab.exceptions import (
    CoercionError,
    ConfigurationError,
    ExtractionError,
    FetchError,
    FieldExtractionError,
    FilterRejectedError,
    InvalidSelectorError,
    PatternError,
    SelectorNotFoundError,
    UnsupportedFieldError,
    WebGrabError,
)
from webgrab.grabber import Grabber, new
from webgrab.models import FetchResult, FieldDescriptor, FieldFailure, FieldShape, GrabField, GrabResult, TagSpec

__all__ = [
    # Core components
    'Grabber',
    'GrabberConfig',
    'PageFetcher',
    'StructWalker',
    'new',
    # Documents
    'Document',
    'Node',
    'SoupDocument',
    'SoupNode',
    'as_document',
    # Tags
    'GrabField',
    'TagSpec',
    'FieldDescriptor',
    'FieldShape',
    'describe',
    'parse_field_tags',
    'parse_tag',
    'post_process',
    'NO_MATCH',
    # Results
    'FetchResult',
    'FieldFailure',
    'GrabResult',
    # Exceptions
    'WebGrabError',
    'ConfigurationError',
    'UnsupportedFieldError',
    'PatternError',
    'InvalidSelectorError',
    'FieldExtractionError',
    'SelectorNotFoundError',
    'FilterRejectedError',
    'CoercionError',
    'ExtractionError',
    'FetchError',
]
