"""Pydantic models for tag specs and results."""

from webgrab.models.results import FetchResult, FieldFailure, GrabResult
from webgrab.models.tags import FieldDescriptor, FieldShape, GrabField, TagSpec

__all__ = [
    'FieldDescriptor',
    'FieldShape',
    'GrabField',
    'TagSpec',
    'FetchResult',
    'FieldFailure',
    'GrabResult',
]
