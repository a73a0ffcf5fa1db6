"""Parses field annotations into tag specs and builds descriptor tables.

A record type is any pydantic model. Each field may carry string annotations
in its ``json_schema_extra``:

    selector   CSS selector (required to activate extraction)
    attribute  attribute to read instead of the node text
    extract    regex whose first capture group replaces the value
    filter     regex the value must match
    grab       legacy combined form ``selector[,attribute]``

Descriptor tables are built once per model class and cached.
"""

import collections.abc
import logging
import types
import typing
from collections.abc import Mapping
from functools import lru_cache
from typing import Annotated, Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel, TypeAdapter
from pydantic.fields import FieldInfo

from webgrab.exceptions import UnsupportedFieldError
from webgrab.models.tags import (
    TAG_ATTRIBUTE,
    TAG_EXTRACT,
    TAG_FILTER,
    TAG_GRAB,
    TAG_SELECTOR,
    FieldDescriptor,
    FieldShape,
    TagSpec,
)

logger = logging.getLogger(__name__)

_SEQUENCE_ORIGINS = (list, tuple, collections.abc.Sequence)


def parse_tag(value: str) -> tuple[str, str | None]:
    """Split a combined ``selector[,attribute]`` annotation.

    Args:
        value: The combined annotation string

    Returns:
        Tuple of (selector, attribute). Attribute is None when not given.

    """
    parts = value.split(',')
    selector = parts[0].strip()
    attribute = parts[1].strip() if len(parts) > 1 else None
    return selector, attribute or None


def _get_str(extra: Mapping[str, Any], key: str) -> str | None:
    value = extra.get(key)
    if value is None or value == '':
        return None
    return str(value)


def parse_field_tags(extra: Mapping[str, Any] | None) -> TagSpec:
    """Build a TagSpec from a field's annotation mapping.

    Separate ``selector``/``attribute`` keys win over the combined ``grab`` key.

    Args:
        extra: The field's string annotations, or None

    Returns:
        The parsed TagSpec. An inactive spec if no selector is configured.

    """
    if not extra:
        return TagSpec()

    selector, attribute = parse_tag(str(extra.get(TAG_GRAB) or ''))

    explicit_selector = _get_str(extra, TAG_SELECTOR)
    if explicit_selector is not None:
        selector = explicit_selector.strip()

    explicit_attribute = _get_str(extra, TAG_ATTRIBUTE)
    if explicit_attribute is not None:
        attribute = explicit_attribute.strip()

    return TagSpec(
        selector=selector,
        attribute=attribute,
        extract=_get_str(extra, TAG_EXTRACT),
        filter=_get_str(extra, TAG_FILTER),
    )


def _declared_type(info: FieldInfo) -> Any:
    """Rebuild the field's annotation including constraints pydantic split off."""
    if info.metadata:
        return Annotated[(info.annotation, *info.metadata)]
    return info.annotation


def _strip_optional(tp: Any) -> Any:
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _unwrap(tp: Any) -> Any:
    """Peel Optional, Annotated and NewType layers off a type."""
    while True:
        stripped = _strip_optional(tp)
        if get_origin(stripped) is Annotated:
            stripped = get_args(stripped)[0]
        elif isinstance(stripped, typing.NewType):
            stripped = stripped.__supertype__
        if stripped is tp:
            return tp
        tp = stripped


def _is_class(tp: Any) -> bool:
    # Parametrized generics such as list[str] pass isinstance(tp, type) on some versions
    return isinstance(tp, type) and get_origin(tp) is None


def is_string_type(tp: Any) -> bool:
    """Whether a type can hold a single extracted string."""
    tp = _unwrap(tp)
    if get_origin(tp) is Literal:
        return all(isinstance(arg, str) for arg in get_args(tp))
    return _is_class(tp) and issubclass(tp, str)


def _nested_model(tp: Any) -> type[BaseModel] | None:
    tp = _unwrap(tp)
    if _is_class(tp) and issubclass(tp, BaseModel):
        return tp
    return None


def _sequence_item(tp: Any) -> Any | None:
    """Return the item type of a homogeneous sequence annotation, else None."""
    tp = _unwrap(tp)
    origin = get_origin(tp)
    if origin not in _SEQUENCE_ORIGINS:
        return None

    args = get_args(tp)
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return None
    return args[0] if args else None


def classify(model: type[BaseModel], name: str, info: FieldInfo) -> FieldDescriptor | None:
    """Classify a single model field.

    Args:
        model: Model class owning the field
        name: Field name
        info: Pydantic field info

    Returns:
        A FieldDescriptor, or None if the field is not grabbed

    Raises:
        UnsupportedFieldError: If the field carries a selector but its type is not supported

    """
    declared = _declared_type(info)

    nested = _nested_model(declared)
    if nested is not None:
        return FieldDescriptor(name=name, shape=FieldShape.NESTED, annotation=declared, nested_model=nested)

    extra = info.json_schema_extra if isinstance(info.json_schema_extra, Mapping) else None
    tag = parse_field_tags(extra)
    if not tag.is_active:
        return None

    if is_string_type(declared):
        shape = FieldShape.SCALAR
    else:
        item = _sequence_item(declared)
        if item is None or not is_string_type(item):
            raise UnsupportedFieldError(model.__name__, name, declared)
        shape = FieldShape.SEQUENCE

    return FieldDescriptor(name=name, shape=shape, annotation=declared, tag=tag, adapter=TypeAdapter(declared))


@lru_cache(maxsize=256)
def describe(model: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    """Build the descriptor table for a model class.

    Fields are returned in declaration order. Unannotated fields are omitted.
    The most recently used tables are cached per class.

    Args:
        model: Pydantic model class

    Returns:
        Tuple of FieldDescriptors

    Raises:
        UnsupportedFieldError: If an annotated field has an unsupported type

    """
    descriptors = []
    for name, info in model.model_fields.items():
        descriptor = classify(model, name, info)
        if descriptor is not None:
            descriptors.append(descriptor)

    logger.debug('Built %d descriptors for %s', len(descriptors), model.__name__)
    return tuple(descriptors)
