#!/usr/bin/env python3
"""
Main entry point for the fyn package helper.
"""

from .cli import app


def main() -> None:
    """Main entry point for fyn."""
    app(prog_name="fyn")


if __name__ == "__main__":
    main()
