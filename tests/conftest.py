import logfire
import pytest

from webgrab.core.document import SoupDocument


@pytest.fixture
def page_html():
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>Hello</title>
        <meta name="keywords" content="a,b,c">
        <meta name="description" content="  A page about examples  ">
    </head>
    <body>
        <h1 class="headline main">Example - Suffix</h1>
        <div class="meta">
            <span class="author">  Jane Doe  </span>
            <span class="date">Published 2023-10-27</span>
        </div>
        <ul class="tags">
            <li>python</li>
            <li>scraping</li>
            <li>python</li>
        </ul>
        <nav>
            <a href="x.html">First</a>
            <a href="y.txt">Second</a>
            <a href="z.html">Third</a>
        </nav>
    </body>
    </html>
    """


@pytest.fixture
def document(page_html):
    return SoupDocument.from_html(page_html)


def pytest_configure(config):
    """Register custom markers and keep logfire local."""
    config.addinivalue_line('markers', 'integration: marks tests as integration tests')
    config.addinivalue_line('markers', 'unit: marks tests as unit tests')
    logfire.configure(send_to_logfire=False, console=False)


def pytest_collection_modifyitems(config, items):
    """Apply directory-based marks to collected test items."""
    for item in items:
        if hasattr(item, 'fspath'):
            file_path = str(item.fspath)

            if '/tests/integration/' in file_path:
                item.add_marker(pytest.mark.integration)
            elif '/tests/unit/' in file_path:
                item.add_marker(pytest.mark.unit)
