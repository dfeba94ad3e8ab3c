#!/usr/bin/env python3
"""Development scripts for the Venue Seating Platform."""

import subprocess
import sys


def start():
    """Start the development server."""
    subprocess.run([
        "uvicorn",
        "venue_seating_platform.main:app",
        "--host", "0.0.0.0",
        "--port", "3000",
        "--reload"
    ])


def lint():
    """Run formatting and type checking."""
    subprocess.run(["black", "venue_seating_platform/", "tests/"])
    subprocess.run(["mypy", "venue_seating_platform/"])


def format_code():
    """Format code with black."""
    subprocess.run(["black", "venue_seating_platform/", "tests/"])


def test():
    """Run the test-suite."""
    sys.exit(subprocess.run(["pytest", "tests/"]).returncode)


def migrate():
    """Apply database migrations."""
    subprocess.run(["alembic", "upgrade", "head"])


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts.py <command>")
        print("Commands: start, lint, format-code, test, migrate")
        sys.exit(1)

    command = sys.argv[1].replace("-", "_")
    if hasattr(sys.modules[__name__], command):
        getattr(sys.modules[__name__], command)()
    else:
        print(f"Unknown command: {sys.argv[1]}")
        sys.exit(1)
