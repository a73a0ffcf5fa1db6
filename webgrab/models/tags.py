"""Models describing how a record field is grabbed from a document."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import Field as PydanticField

# Annotation keys read from a field's json_schema_extra
TAG_GRAB = 'grab'
TAG_SELECTOR = 'selector'
TAG_ATTRIBUTE = 'attribute'
TAG_EXTRACT = 'extract'
TAG_FILTER = 'filter'


class TagSpec(BaseModel):
    """Extraction configuration for a single field.

    Attributes:
        selector: CSS selector locating the node(s). Empty means the field is skipped.
        attribute: Attribute to read instead of the node text, if any
        extract: Regex whose first capture group replaces the value, if any
        filter: Regex a value must match to be kept, if any

    """

    model_config = ConfigDict(frozen=True)

    selector: str = PydanticField(default='', description='CSS selector')
    attribute: str | None = PydanticField(default=None, description='Attribute to read instead of text')
    extract: str | None = PydanticField(default=None, description='Regex with a capturing group')
    filter: str | None = PydanticField(default=None, description='Regex the value must match')

    @property
    def is_active(self) -> bool:
        """True if the field should be extracted at all."""
        return bool(self.selector)


class FieldShape(str, Enum):
    """The closed set of field shapes the walker knows how to fill."""

    SCALAR = 'scalar'
    SEQUENCE = 'sequence'
    NESTED = 'nested'


@dataclass
class FieldDescriptor:
    """One entry of a record type's descriptor table.

    Attributes:
        name: Field name on the owning model
        shape: How the walker fills the field
        annotation: Declared type of the field
        tag: Parsed tag spec, None for nested records
        nested_model: Model class to recurse into, for nested records
        adapter: Cached TypeAdapter used to coerce extracted strings

    """

    name: str
    shape: FieldShape
    annotation: Any
    tag: TagSpec | None = None
    nested_model: type[BaseModel] | None = None
    adapter: TypeAdapter | None = field(default=None, repr=False)

    @property
    def selector(self) -> str:
        """Selector of the field, or an empty string for nested records."""
        return self.tag.selector if self.tag else ''


def GrabField(
    selector: str = '',
    *,
    attribute: str | None = None,
    extract: str | None = None,
    filter: str | None = None,
    default: Any = '',
    default_factory: Any = None,
    description: str | None = None,
    **kwargs: Any,
) -> Any:
    """Create a pydantic field carrying grab annotations.

    Scalar fields default to an empty string. Sequence fields should pass
    ``default_factory=list``.

    Example:
        >>> class Page(BaseModel):
        ...     title: str = GrabField('title')
        ...     keywords: str = GrabField('meta[name=keywords]', attribute='content')
        ...     links: list[str] = GrabField('a[href]', attribute='href', filter=r'\\.html$', default_factory=list)

    """
    extra: dict[str, str] = {TAG_SELECTOR: selector}
    if attribute is not None:
        extra[TAG_ATTRIBUTE] = attribute
    if extract is not None:
        extra[TAG_EXTRACT] = extract
    if filter is not None:
        extra[TAG_FILTER] = filter

    if default_factory is not None:
        return PydanticField(
            default_factory=default_factory, description=description, json_schema_extra=extra, **kwargs
        )
    return PydanticField(default=default, description=description, json_schema_extra=extra, **kwargs)
