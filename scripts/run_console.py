#!/usr/bin/env python
"""
Run the interactive console pricing flow.

Usage:
    python scripts/run_console.py
"""
from gym_pricing.cli.console import main


if __name__ == "__main__":
    main()
