from collections.abc import Sequence
from typing import Annotated, Literal, NewType, Optional

import pytest
from pydantic import BaseModel, Field, StringConstraints

from webgrab.core.tags import describe, is_string_type, parse_field_tags, parse_tag
from webgrab.exceptions import UnsupportedFieldError
from webgrab.models import FieldShape, GrabField, TagSpec

Slug = NewType('Slug', str)


class Author(BaseModel):
    name: str = GrabField('span.author')


class Article(BaseModel):
    title: str = GrabField('title')
    keywords: str = Field(default='', json_schema_extra={'grab': 'meta[name=keywords],content'})
    links: list[str] = GrabField('a[href]', attribute='href', filter=r'\.html$', default_factory=list)
    author: Author = Field(default_factory=Author)
    notes: str = 'not grabbed'
    views: int = 0


def test_parse_tag_selector_only():
    assert parse_tag('title') == ('title', None)


def test_parse_tag_selector_and_attribute():
    assert parse_tag('meta[name=keywords],content') == ('meta[name=keywords]', 'content')


def test_parse_tag_strips_whitespace():
    assert parse_tag('a[href], href') == ('a[href]', 'href')


def test_parse_tag_ignores_parts_after_attribute():
    assert parse_tag('a,b,c') == ('a', 'b')


def test_parse_field_tags_separate_keys():
    tag = parse_field_tags({'selector': 'a', 'attribute': 'href', 'extract': r'(\d+)', 'filter': 'x'})
    assert tag == TagSpec(selector='a', attribute='href', extract=r'(\d+)', filter='x')


def test_parse_field_tags_combined_and_separate_are_equivalent():
    combined = parse_field_tags({'grab': 'meta[name=keywords],content'})
    separate = parse_field_tags({'selector': 'meta[name=keywords]', 'attribute': 'content'})
    assert combined == separate


def test_parse_field_tags_separate_keys_win():
    tag = parse_field_tags({'grab': 'h1,title', 'selector': 'h2'})
    assert tag.selector == 'h2'
    assert tag.attribute == 'title'


def test_parse_field_tags_absent_patterns_are_not_configured():
    tag = parse_field_tags({'selector': 'h1', 'extract': ''})
    assert tag.extract is None
    assert tag.filter is None


def test_parse_field_tags_does_not_validate_patterns():
    tag = parse_field_tags({'selector': 'h1', 'extract': '(unclosed'})
    assert tag.extract == '(unclosed'


def test_empty_selector_is_inactive():
    assert not parse_field_tags({}).is_active
    assert not parse_field_tags(None).is_active
    assert not parse_field_tags({'selector': ''}).is_active


def test_describe_declaration_order_and_shapes():
    descriptors = describe(Article)

    assert [d.name for d in descriptors] == ['title', 'keywords', 'links', 'author']
    assert [d.shape for d in descriptors] == [
        FieldShape.SCALAR,
        FieldShape.SCALAR,
        FieldShape.SEQUENCE,
        FieldShape.NESTED,
    ]


def test_describe_nested_has_no_tag():
    author = describe(Article)[-1]
    assert author.tag is None
    assert author.nested_model is Author
    assert author.selector == ''


def test_describe_is_cached_per_type():
    assert describe(Article) is describe(Article)


def test_describe_cache_is_bounded():
    assert describe.cache_info().maxsize is not None


def test_describe_rejects_unsupported_annotated_field():
    class Bad(BaseModel):
        count: int = GrabField('span.count', default=0)

    with pytest.raises(UnsupportedFieldError) as exc_info:
        describe(Bad)

    assert exc_info.value.field_name == 'count'


def test_describe_rejects_sequence_of_non_strings():
    class Bad(BaseModel):
        numbers: list[int] = GrabField('li', default_factory=list)

    with pytest.raises(UnsupportedFieldError):
        describe(Bad)


def test_describe_ignores_unannotated_fields_of_any_type():
    class Plain(BaseModel):
        count: int = 0
        data: dict[str, int] = Field(default_factory=dict)

    assert describe(Plain) == ()


def test_optional_nested_model_is_nested():
    class Holder(BaseModel):
        author: Optional[Author] = None

    (descriptor,) = describe(Holder)
    assert descriptor.shape is FieldShape.NESTED
    assert descriptor.nested_model is Author


@pytest.mark.parametrize(
    'annotation',
    [str, Slug, Optional[str], Annotated[str, StringConstraints(max_length=3)], Literal['a', 'b']],
)
def test_string_types(annotation):
    assert is_string_type(annotation)


@pytest.mark.parametrize('annotation', [int, list[str], dict, bytes])
def test_non_string_types(annotation):
    assert not is_string_type(annotation)


def test_sequence_shapes():
    class Seqs(BaseModel):
        as_list: list[str] = GrabField('li', default_factory=list)
        as_tuple: tuple[str, ...] = GrabField('li', default=())
        as_sequence: Sequence[Slug] = GrabField('li', default_factory=list)

    assert all(d.shape is FieldShape.SEQUENCE for d in describe(Seqs))


def test_constraints_survive_in_declared_type():
    class Constrained(BaseModel):
        code: Annotated[str, StringConstraints(max_length=3)] = GrabField('span.code')

    (descriptor,) = describe(Constrained)
    assert descriptor.shape is FieldShape.SCALAR
    assert descriptor.adapter is not None
