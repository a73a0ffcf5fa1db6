"""Walks a record's fields and populates them from a document."""

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from webgrab.core.coercion import coerce
from webgrab.core.document import Document
from webgrab.core.extraction import NO_MATCH, extract_value, post_process
from webgrab.core.tags import describe
from webgrab.exceptions import (
    CoercionError,
    ConfigurationError,
    FieldExtractionError,
    FilterRejectedError,
    SelectorNotFoundError,
)
from webgrab.models import FieldDescriptor, FieldFailure, FieldShape


class StructWalker:
    """Populates pydantic model instances from a parsed document.

    Fields are visited depth-first in declaration order. Nested models are
    walked against the same, whole document. A field that cannot be populated
    is recorded as a FieldFailure and left untouched; the walk carries on with
    the next field. Configuration errors abort the walk.

    Attributes:
        no_match: String written in place of a value whose extract pattern did not match

    """

    def __init__(self, no_match: str = NO_MATCH):
        """Initialize the walker.

        Args:
            no_match: Placeholder for values whose extract pattern did not match.
                Defaults to '(no match)'.

        """
        self.no_match = no_match
        self.logger = logging.getLogger(__name__)

    def walk(self, document: Document, record: BaseModel) -> list[FieldFailure]:
        """Populate every annotated field of the record in place.

        Args:
            document: Parsed document to resolve selectors against
            record: Model instance to populate

        Returns:
            The failures collected for fields that could not be populated

        Raises:
            ConfigurationError: If record is not a writable model instance, or a
                field's annotations cannot be used

        """
        self._check_writable(record)
        failures: list[FieldFailure] = []
        self._walk_model(document, record, '', failures, (type(record),))
        return failures

    def _check_writable(self, record: Any) -> None:
        if isinstance(record, type) or not isinstance(record, BaseModel):
            raise ConfigurationError(
                f'Destination must be a pydantic model instance, got {type(record).__name__}'
            )
        if record.model_config.get('frozen'):
            raise ConfigurationError(f'Destination {type(record).__name__} is frozen and cannot be populated')

    def _walk_model(
        self,
        document: Document,
        record: BaseModel,
        prefix: str,
        failures: list[FieldFailure],
        stack: tuple[type[BaseModel], ...],
    ) -> None:
        for descriptor in describe(type(record)):
            path = f'{prefix}{descriptor.name}'

            if descriptor.shape is FieldShape.NESTED:
                self._walk_nested(document, record, descriptor, path, failures, stack)
                continue

            try:
                if descriptor.shape is FieldShape.SEQUENCE:
                    value = self.scrape_sequence(document, descriptor)
                else:
                    value = self.scrape_scalar(document, descriptor)
                self._assign(record, descriptor, value)
            except FieldExtractionError as e:
                self.logger.warning('Skipping field %s: %s', path, e.message)
                failures.append(
                    FieldFailure(field=path, selector=e.selector, reason=e.reason, message=e.message)
                )

    def _walk_nested(
        self,
        document: Document,
        record: BaseModel,
        descriptor: FieldDescriptor,
        path: str,
        failures: list[FieldFailure],
        stack: tuple[type[BaseModel], ...],
    ) -> None:
        nested = getattr(record, descriptor.name, None)
        created = False

        if nested is None:
            model = descriptor.nested_model
            # A self-referencing optional field would otherwise recurse forever
            if model in stack:
                self.logger.debug('Leaving recursive field %s empty', path)
                return
            try:
                nested = model()
            except ValidationError as e:
                missing = ', '.join('.'.join(map(str, err['loc'])) for err in e.errors())
                message = f'cannot create {model.__name__} without values for: {missing}'
                self.logger.warning('Skipping field %s: %s', path, message)
                failures.append(FieldFailure(field=path, selector='', reason='extraction_failed', message=message))
                return
            created = True

        if not isinstance(nested, BaseModel):
            raise ConfigurationError(f'Nested field {path} holds {type(nested).__name__}, not a model instance')
        self._check_writable(nested)

        self._walk_model(document, nested, f'{path}.', failures, (*stack, type(nested)))

        if created:
            setattr(record, descriptor.name, nested)

    def _assign(self, record: BaseModel, descriptor: FieldDescriptor, value: str | list[str]) -> None:
        converted = coerce(descriptor, value)
        try:
            setattr(record, descriptor.name, converted)
        except ValidationError as e:
            errors = '; '.join(err['msg'] for err in e.errors())
            raise CoercionError(descriptor.name, descriptor.selector, descriptor.annotation, errors) from e

    def scrape_scalar(self, document: Document, descriptor: FieldDescriptor) -> str:
        """Extract the value of a scalar field from the first matching node.

        Raises:
            SelectorNotFoundError: If the selector matches nothing
            FilterRejectedError: If the value does not match the filter

        """
        tag = descriptor.tag
        nodes = document.find(tag.selector)
        if not nodes:
            raise SelectorNotFoundError(descriptor.name, tag.selector)

        if len(nodes) > 1:
            self.logger.debug('%s matched %d nodes, using the first', tag.selector, len(nodes))

        processed = post_process(extract_value(nodes[0], tag.attribute), tag.extract, tag.filter)
        if processed.rejected:
            raise FilterRejectedError(descriptor.name, tag.selector, tag.filter)

        return self.no_match if processed.value is None else processed.value

    def scrape_sequence(self, document: Document, descriptor: FieldDescriptor) -> list[str]:
        """Extract one value per matching node, dropping values rejected by the filter.

        An empty match yields an empty list.
        """
        tag = descriptor.tag
        values = []
        for node in document.find(tag.selector):
            processed = post_process(extract_value(node, tag.attribute), tag.extract, tag.filter)
            if processed.rejected:
                continue
            values.append(self.no_match if processed.value is None else processed.value)
        return values
