"""Repository-level entrypoint for the ``argsparser-reflow`` command.

Running ``python main.py`` from a checkout behaves like the installed console
script.
"""

from __future__ import annotations

import sys
from typing import Sequence


def main(argv: Sequence[str] | None = None) -> int:
    from argsparser.cli import main as cli_main

    args = list(argv) if argv is not None else sys.argv[1:]
    return cli_main(args)


if __name__ == "__main__":
    raise SystemExit(main())
