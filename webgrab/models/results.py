"""Pydantic models for fetch and grab results."""

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from webgrab.exceptions import ExtractionError


@dataclass
class FetchResult:
    """Result of a page fetch.

    Attributes:
        url: URL that was requested
        final_url: URL of the response that was used, after redirects
        html: Decoded response body, None if the body was empty
        status_code: Status code of the response that was used
        redirects: Number of redirects that were followed
        fetch_time: Total time spent fetching in seconds

    """

    url: str
    final_url: str
    html: str | None = None
    status_code: int | None = None
    redirects: int = 0
    fetch_time: float = 0.0

    @property
    def success(self) -> bool:
        """Whether a body was received."""
        return self.html is not None


class FieldFailure(BaseModel):
    """Details about why a single field was not populated.

    Attributes:
        field: Dotted path of the field (e.g. 'meta.author' for nested records)
        selector: Selector configured for the field
        reason: Machine readable reason
        message: Human readable description

    """

    field: str = Field(description='Dotted field path')
    selector: str = Field(description='Selector configured for the field')
    reason: Literal['selector_not_found', 'filter_rejected', 'coercion_failed', 'extraction_failed'] = Field(
        description='Why the field failed'
    )
    message: str = Field(description='Human readable description')


class GrabResult(BaseModel):
    """Outcome of one walk over a document.

    Attributes:
        record: The destination record, populated in place
        failures: Per-field failures collected during the walk

    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    record: Any = Field(description='Populated destination record')
    failures: list[FieldFailure] = Field(default_factory=list, description='Fields that could not be populated')

    @property
    def success(self) -> bool:
        """True if every annotated field was populated."""
        return not self.failures

    @property
    def failed_fields(self) -> list[str]:
        """Dotted paths of fields that failed."""
        return [failure.field for failure in self.failures]

    def raise_for_errors(self) -> None:
        """Raise an aggregate ExtractionError if any field failed.

        Raises:
            ExtractionError: If the walk recorded at least one failure

        """
        if self.failures:
            raise ExtractionError(self.failures)
