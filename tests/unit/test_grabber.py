import pytest
from pydantic import BaseModel

from webgrab.config import GrabberConfig
from webgrab.core.fetcher import PageFetcher
from webgrab.exceptions import ExtractionError, FetchError
from webgrab.grabber import Grabber, new
from webgrab.models import FetchResult, GrabField


class Article(BaseModel):
    title: str = GrabField('title')
    author: str = GrabField('span.author')
    missing: str = GrabField('div.nothing-here')


@pytest.fixture
def mock_fetcher(mocker, page_html):
    fetcher = mocker.Mock(spec=PageFetcher)
    fetcher.fetch.return_value = FetchResult(
        url='http://example.com',
        final_url='http://example.com/',
        html=page_html,
        status_code=200,
    )
    return fetcher


def test_scrape_from_html(page_html):
    result = Grabber().scrape(page_html, Article())

    assert result.record.title == 'Hello'
    assert result.record.author == 'Jane Doe'
    assert not result.success
    assert result.failed_fields == ['missing']


def test_scrape_mutates_the_given_record(document):
    record = Article()
    result = Grabber().scrape(document, record)
    assert result.record is record
    assert record.title == 'Hello'


def test_raise_for_errors(page_html):
    result = Grabber().scrape(page_html, Article())

    with pytest.raises(ExtractionError) as exc_info:
        result.raise_for_errors()

    assert [f.field for f in exc_info.value.failures] == ['missing']
    assert 'div.nothing-here' in str(exc_info.value)


def test_no_match_placeholder_from_config(page_html):
    class Suffix(BaseModel):
        author: str = GrabField('span.author', extract='(.+) - Suffix')

    result = Grabber(GrabberConfig(no_match='N/A')).scrape(page_html, Suffix())
    assert result.record.author == 'N/A'


def test_grab_fetches_and_scrapes(mock_fetcher):
    grabber = Grabber(fetcher=mock_fetcher)

    result = grabber.grab('http://example.com', Article())

    mock_fetcher.fetch.assert_called_once_with('http://example.com')
    assert result.record.title == 'Hello'


def test_grab_raises_on_empty_response(mock_fetcher):
    mock_fetcher.fetch.return_value = FetchResult(url='http://example.com', final_url='http://example.com')
    with pytest.raises(FetchError):
        Grabber(fetcher=mock_fetcher).grab('http://example.com', Article())


def test_grab_raises_when_server_sends_no_body(mocker):
    session = mocker.Mock()
    response = session.get.return_value
    response.url = 'http://example.com/'
    response.status_code = 200
    response.is_redirect = False
    response.text = ''
    grabber = Grabber(fetcher=PageFetcher(session=session))

    with pytest.raises(FetchError) as exc_info:
        grabber.grab('http://example.com/', Article())

    assert exc_info.value.reason == 'empty response'


def test_fetcher_built_from_config():
    grabber = Grabber(GrabberConfig(timeout=3, max_redirects=1, user_agent='Cfg/1.0'))
    assert grabber.fetcher.timeout == 3
    assert grabber.fetcher.max_redirects == 1
    assert grabber.fetcher.user_agent == 'Cfg/1.0'


def test_new_uses_defaults():
    grabber = new()
    assert grabber.config == GrabberConfig()
