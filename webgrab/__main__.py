"""Module entry point.

Invokes the CLI main function when the package is executed
with ``python -m webgrab``.
"""

from webgrab.cli import main

if __name__ == '__main__':
    raise SystemExit(main())
