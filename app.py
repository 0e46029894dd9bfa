"""Run the generator page from a source checkout with ``python app.py``."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Sequence


def _ensure_src_on_path() -> None:
    src_path = Path(__file__).resolve().parent / "src"
    if src_path.exists() and str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


def main(argv: Sequence[str] | None = None) -> None:
    _ensure_src_on_path()
    from afrobeats_midi.cli import main as cli_main

    cli_main(argv)


if __name__ == "__main__":  # pragma: no cover
    main(sys.argv[1:])
