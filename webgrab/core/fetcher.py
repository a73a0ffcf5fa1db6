"""HTTP fetcher honoring timeout, redirect limit and user agent."""

import logging
import time
from urllib.parse import urljoin

import requests

from webgrab.exceptions import FetchError
from webgrab.models.results import FetchResult
from webgrab.retry import get_retryer, log_retry

DEFAULT_TIMEOUT = 10
DEFAULT_MAX_REDIRECTS = 10
DEFAULT_USER_AGENT = 'Mozilla/5.0 (compatible; WebGrab/1.0;) Python'

RETRYABLE_ERRORS: tuple[type[Exception], ...] = (requests.ConnectionError, requests.Timeout)


class PageFetcher:
    """Fetches a single page over HTTP.

    Redirects are followed by hand so that, once the limit is reached, the
    last response is used instead of raising. The limit counts every request
    in the chain, the first one included, so max_redirects=1 never follows a
    redirect. An empty body is reported as html=None.

    Attributes:
        timeout: Request timeout in seconds
        max_redirects: Maximum number of redirects to follow
        user_agent: Value of the User-Agent header
        max_attempts: Attempts per request on connection errors and timeouts
        session: Requests session used for all requests

    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
        user_agent: str = DEFAULT_USER_AGENT,
        max_attempts: int = 3,
        session: requests.Session | None = None,
    ):
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds. Defaults to 10.
            max_redirects: Maximum number of redirects to follow. Defaults to 10.
            user_agent: User-Agent header sent with every request
            max_attempts: Attempts per request on transient errors. Defaults to 3.
            session: Session to reuse. A new one is created if None.

        """
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.user_agent = user_agent
        self.max_attempts = max_attempts
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)

    def _get(self, url: str) -> requests.Response:
        retryer = get_retryer(max_attempts=self.max_attempts, exceptions=RETRYABLE_ERRORS, log_callback=log_retry)
        return retryer(
            self.session.get,
            url,
            headers={'User-Agent': self.user_agent},
            timeout=self.timeout,
            allow_redirects=False,
        )

    def fetch(self, url: str) -> FetchResult:
        """Fetch a page, following fewer than max_redirects redirects.

        Args:
            url: URL to fetch

        Returns:
            FetchResult with the body of the last response

        Raises:
            FetchError: If the request fails after all retries

        """
        start_time = time.time()
        redirects = 0

        try:
            response = self._get(url)
            while response.is_redirect and redirects + 1 < self.max_redirects:
                location = urljoin(response.url, response.headers['location'])
                self.logger.debug('Following redirect %d: %s', redirects + 1, location)
                response.close()
                response = self._get(location)
                redirects += 1
        except requests.RequestException as e:
            raise FetchError(url, str(e)) from e

        if response.is_redirect:
            self.logger.info('Redirect limit (%d) reached for %s, using last response', self.max_redirects, url)
        if response.status_code >= 400:
            self.logger.warning('%s returned status %d', url, response.status_code)

        return FetchResult(
            url=url,
            final_url=response.url,
            html=response.text or None,
            status_code=response.status_code,
            redirects=redirects,
            fetch_time=time.time() - start_time,
        )

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def close(self):
        """Close the underlying session."""
        self.session.close()
