"""Converts extracted strings into a field's declared type."""

from collections.abc import Sequence
from typing import Any

from pydantic import TypeAdapter, ValidationError

from webgrab.exceptions import CoercionError
from webgrab.models.tags import FieldDescriptor, FieldShape


def _adapter(descriptor: FieldDescriptor) -> TypeAdapter:
    if descriptor.adapter is None:
        descriptor.adapter = TypeAdapter(descriptor.annotation)
    return descriptor.adapter


def coerce(descriptor: FieldDescriptor, value: str | Sequence[str]) -> Any:
    """Convert a scalar string or a list of strings to the field's declared type.

    Args:
        descriptor: Descriptor of the destination field
        value: A string for scalar fields, a list of strings for sequence fields

    Returns:
        The converted value, ready to be assigned

    Raises:
        CoercionError: If the declared type cannot represent the value
        ValueError: If the value's shape does not match the field's shape

    """
    if descriptor.shape is FieldShape.SCALAR and not isinstance(value, str):
        raise ValueError(f'Scalar field {descriptor.name!r} needs a string, got {type(value).__name__}')
    if descriptor.shape is FieldShape.SEQUENCE and isinstance(value, str):
        raise ValueError(f'Sequence field {descriptor.name!r} needs a list of strings')
    if descriptor.shape is FieldShape.NESTED:
        raise ValueError(f'Nested field {descriptor.name!r} is walked, not coerced')

    if descriptor.shape is FieldShape.SEQUENCE:
        value = list(value)

    try:
        return _adapter(descriptor).validate_python(value)
    except ValidationError as e:
        errors = '; '.join(err['msg'] for err in e.errors())
        raise CoercionError(descriptor.name, descriptor.selector, descriptor.annotation, errors) from e
