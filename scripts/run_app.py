#!/usr/bin/env python
"""
Run the Streamlit quote builder.

Usage:
    python scripts/run_app.py
"""
import importlib.util
import subprocess
import sys


def streamlit_command() -> list[str]:
    """Command line that serves the installed UI module."""
    spec = importlib.util.find_spec("gym_pricing.ui.app_streamlit")
    if spec is None or spec.origin is None:
        raise SystemExit("ERROR: gym_pricing is not installed; run `pip install -e .` first")
    return [sys.executable, "-m", "streamlit", "run", spec.origin]


def main():
    cmd = streamlit_command()
    print(f"Starting Streamlit: {' '.join(cmd)}")

    try:
        subprocess.run(cmd)
    except KeyboardInterrupt:
        print("\nApplication stopped.")


if __name__ == "__main__":
    main()
