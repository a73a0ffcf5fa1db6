"""Custom exceptions for webgrab."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from webgrab.models.results import FieldFailure


class WebGrabError(Exception):
    """Base class for all webgrab exceptions."""

    pass


class ConfigurationError(WebGrabError):
    """Raised when a record type or its annotations cannot be used.

    Configuration errors abort the whole walk.
    """

    pass


class UnsupportedFieldError(ConfigurationError):
    """Raised when an annotated field has a type the engine cannot fill."""

    def __init__(self, model_name: str, field_name: str, annotation: object):
        """Initialize unsupported field error.

        Args:
            model_name: Name of the record type owning the field
            field_name: Name of the offending field
            annotation: The declared type of the field

        """
        self.model_name = model_name
        self.field_name = field_name
        self.annotation = annotation
        super().__init__(
            f"Field '{model_name}.{field_name}' has unsupported type {annotation!r}: "
            'expected a string, a sequence of strings or a nested model'
        )


class PatternError(ConfigurationError):
    """Raised when an extract or filter pattern cannot be used."""

    def __init__(self, pattern: str, reason: str):
        """Initialize pattern error.

        Args:
            pattern: The regular expression that failed
            reason: Why the pattern is unusable

        """
        self.pattern = pattern
        self.reason = reason
        super().__init__(f'Invalid pattern {pattern!r}: {reason}')


class InvalidSelectorError(ConfigurationError):
    """Raised when the selector engine rejects a selector's syntax."""

    def __init__(self, selector: str, reason: str):
        """Initialize invalid selector error.

        Args:
            selector: The CSS selector that failed to compile
            reason: Message from the selector engine

        """
        self.selector = selector
        self.reason = reason
        super().__init__(f'Invalid selector {selector!r}: {reason}')


class FieldExtractionError(WebGrabError):
    """Raised when a single field cannot be populated.

    The walker catches these, records them and moves on to the next field.
    """

    reason = 'extraction_failed'

    def __init__(self, field_name: str, selector: str, message: str):
        """Initialize field extraction error.

        Args:
            field_name: Name of the field that failed
            selector: Selector configured for the field
            message: Human readable description

        """
        self.field_name = field_name
        self.selector = selector
        self.message = message
        super().__init__(f"Field '{field_name}' ({selector}): {message}")


class SelectorNotFoundError(FieldExtractionError):
    """Raised when a scalar field's selector matches no node."""

    reason = 'selector_not_found'

    def __init__(self, field_name: str, selector: str):
        """Initialize selector-miss error."""
        super().__init__(field_name, selector, f'tag not found: {selector}')


class FilterRejectedError(FieldExtractionError):
    """Raised when a scalar field's value does not match its filter."""

    reason = 'filter_rejected'

    def __init__(self, field_name: str, selector: str, pattern: str):
        """Initialize filter rejection error."""
        self.pattern = pattern
        super().__init__(field_name, selector, f'value does not match filter: {pattern}')


class CoercionError(FieldExtractionError):
    """Raised when an extracted value cannot be converted to the field type."""

    reason = 'coercion_failed'

    def __init__(self, field_name: str, selector: str, annotation: object, detail: str):
        """Initialize coercion error.

        Args:
            field_name: Name of the field that failed
            selector: Selector configured for the field
            annotation: Declared type of the field
            detail: Validation message from pydantic

        """
        self.annotation = annotation
        super().__init__(field_name, selector, f'cannot convert to {annotation!r}: {detail}')


class ExtractionError(WebGrabError):
    """Raised when one or more fields failed during a walk."""

    def __init__(self, failures: 'list[FieldFailure]'):
        """Initialize aggregate extraction error.

        Args:
            failures: Every per-field failure collected during the walk

        """
        self.failures = failures
        details = '; '.join(f'{f.field}: {f.message}' for f in failures)
        super().__init__(f'{len(failures)} field(s) failed: {details}')


class FetchError(WebGrabError):
    """Raised when a page cannot be fetched."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        """Initialize fetch error.

        Args:
            url: URL that was requested
            reason: Why the fetch failed
            status_code: HTTP status code, if a response was received

        """
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f'Failed to fetch {url} (status={status_code}): {reason}')
