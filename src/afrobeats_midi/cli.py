"""Command-line launcher for the afrobeats MIDI generator page."""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path
from typing import Sequence


def _app_path() -> Path:
    return Path(__file__).with_name("app.py")


def _launch_streamlit(*, streamlit_args: Sequence[str] | None = None) -> None:
    """Serve the generator page with ``streamlit run``."""

    args = [sys.executable, "-m", "streamlit", "run", str(_app_path())]
    if streamlit_args:
        args.extend(streamlit_args)

    subprocess.run(args, check=True)


def _run_smoke_test(timeout: float = 10.0) -> None:
    """Render the page headlessly and press Generate once."""

    from streamlit.testing.v1 import AppTest

    app_test = AppTest.from_file(str(_app_path()))
    app_test.run(timeout=timeout)
    if not app_test.exception:
        app_test.button[0].click().run(timeout=timeout)

    if app_test.exception:
        print("Smoke test failed:", app_test.exception)
        raise SystemExit(1)


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Afrobeats chord progression MIDI generator")
    parser.add_argument(
        "--smoke-test",
        action="store_true",
        help="Render the page headlessly and generate one file instead of starting the server.",
    )
    parser.add_argument(
        "streamlit_args",
        nargs=argparse.REMAINDER,
        help="Arguments after '--' go straight to Streamlit, e.g. afrobeats-midi -- --server.port 9000",
    )

    args = parser.parse_args(argv)

    if args.smoke_test:
        _run_smoke_test()
        return

    forwarded = [arg for arg in args.streamlit_args if arg != "--"]
    _launch_streamlit(streamlit_args=forwarded)


if __name__ == "__main__":  # pragma: no cover
    main()
