"""Extraction engine: tag parsing, value extraction, coercion and the struct walker."""

from webgrab.core.coercion import coerce
from webgrab.core.document import Document, Node, SoupDocument, SoupNode, as_document
from webgrab.core.tags import describe, parse_field_tags, parse_tag
from webgrab.core.walker import StructWalker

__all__ = [
    'Document',
    'Node',
    'SoupDocument',
    'SoupNode',
    'StructWalker',
    'as_document',
    'coerce',
    'describe',
    'parse_field_tags',
    'parse_tag',
]
