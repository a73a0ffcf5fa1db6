from enum import Enum
from typing import Annotated, NewType, Optional

import pytest
from pydantic import BaseModel, StringConstraints

from webgrab.core.coercion import coerce
from webgrab.core.tags import describe
from webgrab.exceptions import CoercionError
from webgrab.models import GrabField

Slug = NewType('Slug', str)


class Color(str, Enum):
    RED = 'red'
    BLUE = 'blue'


class Typed(BaseModel):
    slug: Slug = GrabField('span.slug')
    color: Optional[Color] = GrabField('span.color', default=None)
    code: Annotated[str, StringConstraints(max_length=3)] = GrabField('span.code')
    tags: tuple[str, ...] = GrabField('li', default=())
    names: list[str] = GrabField('li', default_factory=list)


def _descriptor(name):
    return next(d for d in describe(Typed) if d.name == name)


def test_plain_string_type():
    assert coerce(_descriptor('slug'), 'my-page') == 'my-page'


def test_str_enum():
    assert coerce(_descriptor('color'), 'blue') is Color.BLUE


def test_str_enum_rejects_unknown_value():
    with pytest.raises(CoercionError) as exc_info:
        coerce(_descriptor('color'), 'purple')

    assert exc_info.value.field_name == 'color'
    assert exc_info.value.selector == 'span.color'


def test_constrained_string_fails_loudly_instead_of_truncating():
    with pytest.raises(CoercionError):
        coerce(_descriptor('code'), 'toolong')


def test_constrained_string_accepts_valid_value():
    assert coerce(_descriptor('code'), 'abc') == 'abc'


def test_sequence_to_tuple():
    assert coerce(_descriptor('tags'), ['a', 'b']) == ('a', 'b')


def test_sequence_to_list_keeps_order_and_duplicates():
    assert coerce(_descriptor('names'), ['b', 'a', 'b']) == ['b', 'a', 'b']


def test_empty_sequence():
    assert coerce(_descriptor('names'), []) == []


def test_scalar_field_rejects_list():
    with pytest.raises(ValueError):
        coerce(_descriptor('slug'), ['a'])


def test_sequence_field_rejects_string():
    with pytest.raises(ValueError):
        coerce(_descriptor('names'), 'abc')
