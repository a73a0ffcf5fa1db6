"""Grabber configuration, loadable from the environment."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from webgrab.core.extraction import NO_MATCH
from webgrab.core.fetcher import DEFAULT_MAX_REDIRECTS, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

ENV_PREFIX = 'WEBGRAB_'


@dataclass
class GrabberConfig:
    """Configuration for a Grabber.

    Attributes:
        timeout: Request timeout in seconds. Defaults to 10.
        max_redirects: Maximum number of redirects to follow. Defaults to 10.
        user_agent: User-Agent header sent when fetching
        no_match: Placeholder written when an extract pattern does not match
        parser: BeautifulSoup parser used for fetched pages. Defaults to 'lxml'.
        max_attempts: Attempts per request on transient network errors. Defaults to 3.

    """

    timeout: float = DEFAULT_TIMEOUT
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    user_agent: str = DEFAULT_USER_AGENT
    no_match: str = NO_MATCH
    parser: str = 'lxml'
    max_attempts: int = 3

    def __post_init__(self) -> None:
        """Validate configuration after initialization.

        Raises:
            ValueError: If a numeric setting is out of range or the user agent is empty.

        """
        if self.timeout <= 0:
            raise ValueError(f'timeout must be positive, got {self.timeout}')
        if self.max_redirects < 0:
            raise ValueError(f'max_redirects cannot be negative, got {self.max_redirects}')
        if self.max_attempts < 1:
            raise ValueError(f'max_attempts must be at least 1, got {self.max_attempts}')
        if not self.user_agent:
            raise ValueError('user_agent cannot be empty')

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> 'GrabberConfig':
        """Build a configuration from WEBGRAB_* environment variables.

        Reads WEBGRAB_TIMEOUT, WEBGRAB_MAX_REDIRECTS, WEBGRAB_USER_AGENT,
        WEBGRAB_NO_MATCH, WEBGRAB_PARSER and WEBGRAB_MAX_ATTEMPTS. Unset
        variables keep their defaults.

        Args:
            load_env_file: Whether to load a .env file first. Defaults to True.

        Returns:
            GrabberConfig populated from the environment

        Raises:
            ValueError: If a numeric variable cannot be parsed

        """
        if load_env_file:
            load_dotenv()

        kwargs: dict[str, object] = {}
        if timeout := os.getenv(f'{ENV_PREFIX}TIMEOUT'):
            kwargs['timeout'] = float(timeout)
        if max_redirects := os.getenv(f'{ENV_PREFIX}MAX_REDIRECTS'):
            kwargs['max_redirects'] = int(max_redirects)
        if max_attempts := os.getenv(f'{ENV_PREFIX}MAX_ATTEMPTS'):
            kwargs['max_attempts'] = int(max_attempts)
        if user_agent := os.getenv(f'{ENV_PREFIX}USER_AGENT'):
            kwargs['user_agent'] = user_agent
        if parser := os.getenv(f'{ENV_PREFIX}PARSER'):
            kwargs['parser'] = parser

        # An empty placeholder is a valid choice, so only an unset variable keeps the default
        no_match = os.getenv(f'{ENV_PREFIX}NO_MATCH')
        if no_match is not None:
            kwargs['no_match'] = no_match

        return cls(**kwargs)
