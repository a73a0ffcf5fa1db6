"""Grabber: fetches a page and populates a record from it."""

from typing import TypeVar

import logfire
from bs4 import BeautifulSoup
from pydantic import BaseModel

from webgrab.config import GrabberConfig
from webgrab.core.document import Document, as_document
from webgrab.core.fetcher import PageFetcher
from webgrab.core.walker import StructWalker
from webgrab.exceptions import FetchError
from webgrab.models.results import GrabResult

RecordT = TypeVar('RecordT', bound=BaseModel)


class Grabber:
    """Populates pydantic records from web pages.

    Attributes:
        config: Grabber configuration
        walker: Struct walker applying the record's annotations
        fetcher: Page fetcher used by grab()

    """

    def __init__(self, config: GrabberConfig | None = None, fetcher: PageFetcher | None = None):
        """Initialize the grabber.

        Args:
            config: Configuration. Defaults to GrabberConfig().
            fetcher: Fetcher to use. Built from the configuration if None.

        """
        self.config = config or GrabberConfig()
        self.walker = StructWalker(no_match=self.config.no_match)
        self.fetcher = fetcher or PageFetcher(
            timeout=self.config.timeout,
            max_redirects=self.config.max_redirects,
            user_agent=self.config.user_agent,
            max_attempts=self.config.max_attempts,
        )

    def scrape(self, source: Document | BeautifulSoup | str | bytes, record: RecordT) -> GrabResult:
        """Populate a record from an already fetched document.

        Args:
            source: A Document, a BeautifulSoup tree, or raw HTML
            record: Model instance to populate in place

        Returns:
            GrabResult holding the record and any per-field failures

        Raises:
            ConfigurationError: If the record or its annotations cannot be used

        """
        document = as_document(source, parser=self.config.parser)

        with logfire.span('scrape', model=type(record).__name__):
            failures = self.walker.walk(document, record)

        if failures:
            logfire.warn(
                'Some fields could not be grabbed',
                model=type(record).__name__,
                failed=[failure.field for failure in failures],
            )
        else:
            logfire.info('All fields grabbed', model=type(record).__name__)

        return GrabResult(record=record, failures=failures)

    def grab(self, url: str, record: RecordT) -> GrabResult:
        """Fetch a URL and populate a record from it.

        Args:
            url: URL of the page to fetch
            record: Model instance to populate in place

        Returns:
            GrabResult holding the record and any per-field failures

        Raises:
            FetchError: If the page cannot be fetched
            ConfigurationError: If the record or its annotations cannot be used

        """
        with logfire.span('grab', url=url, model=type(record).__name__):
            result = self.fetcher.fetch(url)
            if not result.success:
                raise FetchError(url, 'empty response', result.status_code)

            logfire.info(
                'Fetched page',
                url=url,
                final_url=result.final_url,
                status_code=result.status_code,
                redirects=result.redirects,
            )
            return self.scrape(result.html, record)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self):
        """Release the fetcher's session."""
        self.fetcher.close()


def new() -> Grabber:
    """Return a Grabber with default settings."""
    return Grabber(GrabberConfig())
