"""Entry point for ``python -m afrobeats_midi``."""

from __future__ import annotations

import sys

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
