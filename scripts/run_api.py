#!/usr/bin/env python
"""
Serve the pricing API with uvicorn on the configured host and port.

Usage:
    python scripts/run_api.py
    GYM_PRICING_API_PORT=9000 python scripts/run_api.py
"""
import subprocess
import sys

from gym_pricing.config.settings import Settings, get_settings


def uvicorn_command(settings: Settings) -> list[str]:
    return [
        sys.executable, "-m", "uvicorn",
        "gym_pricing.api.main:app",
        "--host", settings.api_host,
        "--port", str(settings.api_port),
    ]


def main():
    settings = get_settings()
    cmd = uvicorn_command(settings)
    print(f"Starting Gym Pricing API on {settings.api_host}:{settings.api_port}...")

    try:
        subprocess.run(cmd)
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
