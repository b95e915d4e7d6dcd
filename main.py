#!/usr/bin/env python3
from __future__ import annotations

import sys

from hexoed.app import run_app

if __name__ == "__main__":
    raise SystemExit(run_app(sys.argv))
