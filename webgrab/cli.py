"""
cli.py
=======
Command line entry point: grab a page into a pydantic model and print it as JSON.
"""

import argparse
import importlib
import logging
import os
from dataclasses import replace
from pathlib import Path

import logfire
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.theme import Theme

from webgrab.config import GrabberConfig
from webgrab.exceptions import ConfigurationError, FetchError
from webgrab.grabber import Grabber
from webgrab.models.results import GrabResult

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FIELD_FAILURES = 2

THEME = Theme(
    {
        'info': 'dim cyan',
        'warning': 'magenta',
        'danger': 'bold red',
        'success': 'bold green',
        'step': 'bold blue',
    }
)


def load_model(path: str) -> type[BaseModel]:
    """Import a model class from a 'package.module:ClassName' path.

    Raises:
        ConfigurationError: If the path is malformed or does not name a pydantic model

    """
    module_name, _, class_name = path.partition(':')
    if not module_name or not class_name:
        raise ConfigurationError(f"Schema must look like 'package.module:ClassName', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f'Cannot import {module_name}: {e}') from e

    model = getattr(module, class_name, None)
    if not isinstance(model, type) or not issubclass(model, BaseModel):
        raise ConfigurationError(f'{path} is not a pydantic model')
    return model


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(description='Populate a pydantic model from a web page using CSS selectors')
    parser.add_argument('url', nargs='?', help='URL of the page to grab')
    parser.add_argument('--schema', required=True, help="Model to populate, as 'package.module:ClassName'")
    parser.add_argument('--html-file', type=Path, help='Scrape a local HTML file instead of fetching the URL')
    parser.add_argument('--timeout', type=float, help='Request timeout in seconds')
    parser.add_argument('--max-redirects', type=int, help='Maximum number of redirects to follow')
    parser.add_argument('--user-agent', help='User-Agent header to send')
    parser.add_argument('--no-match', help='Placeholder written when an extract pattern does not match')
    parser.add_argument('--strict', action='store_true', help='Exit with status 2 if any field failed')
    parser.add_argument('--log-level', help='Show webgrab log messages at this level (e.g. DEBUG, INFO) on stderr')
    return parser


def build_config(args: argparse.Namespace) -> GrabberConfig:
    """Merge command line overrides into the environment configuration."""
    config = GrabberConfig.from_env(load_env_file=False)
    overrides = {
        'timeout': args.timeout,
        'max_redirects': args.max_redirects,
        'user_agent': args.user_agent,
        'no_match': args.no_match,
    }
    return replace(config, **{key: value for key, value in overrides.items() if value is not None})


def setup_logging(level: str, console: Console) -> RichHandler:
    """Route the library's log records at or above level to the console.

    Raises:
        ValueError: If level is not a logging level name

    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f'Unknown log level: {level}')

    handler = RichHandler(console=console, show_path=False)
    handler.setLevel(numeric_level)
    logger = logging.getLogger('webgrab')
    logger.setLevel(numeric_level)
    logger.addHandler(handler)
    return handler


def print_failures(console: Console, result: GrabResult) -> None:
    """Print a table of fields that could not be grabbed."""
    table = Table(title='Failed Fields')
    table.add_column('Field', style='cyan')
    table.add_column('Selector', style='magenta')
    table.add_column('Reason', style='red')

    for failure in result.failures:
        table.add_row(failure.field, failure.selector, failure.message)

    console.print(table)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_dotenv()

    console = Console(theme=THEME, stderr=True)
    args = build_parser().parse_args(argv)

    if not args.url and not args.html_file:
        console.print('[danger]Error: provide a URL or --html-file[/danger]')
        return EXIT_ERROR

    logfire_token = os.getenv('LOGFIRE_TOKEN')
    if logfire_token:
        logfire.configure(token=logfire_token)

    try:
        if args.log_level:
            setup_logging(args.log_level, console)
        config = build_config(args)
        model = load_model(args.schema)
    except (ConfigurationError, ValueError) as e:
        console.print(f'[danger]Error: {e}[/danger]')
        return EXIT_ERROR

    try:
        record = model()
    except ValidationError:
        console.print(f'[danger]Error: every field of {args.schema} needs a default[/danger]')
        return EXIT_ERROR

    with Grabber(config) as grabber:
        try:
            if args.html_file:
                console.print(f'[step]Scraping {args.html_file}...[/step]')
                result = grabber.scrape(args.html_file.read_bytes(), record)
            else:
                console.print(f'[step]Grabbing {args.url}...[/step]')
                result = grabber.grab(args.url, record)
        except (FetchError, ConfigurationError, OSError) as e:
            console.print(f'[danger]Error: {e}[/danger]')
            return EXIT_ERROR

    Console().print_json(result.record.model_dump_json())

    if result.success:
        console.print('[success]All fields grabbed[/success]')
        return EXIT_OK

    print_failures(console, result)
    if args.strict:
        return EXIT_FIELD_FAILURES
    console.print(f'[warning]{len(result.failures)} field(s) left at their defaults[/warning]')
    return EXIT_OK


if __name__ == '__main__':
    raise SystemExit(main())
