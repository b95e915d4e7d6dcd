from __future__ import annotations

import sys

from hexoed.app import run_app


def main() -> int:
    """Module entrypoint for `python -m hexoed.main` or `python -m hexoed` (via __main__)."""
    return run_app(sys.argv)


if __name__ == "__main__":
    raise SystemExit(main())
