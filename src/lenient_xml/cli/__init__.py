"""Command-line interface for Lenient XML Parser.

Provides the ``lenient-xml`` tool for parsing files and checking them for
malformed markup.
"""

from .main import main

__all__ = ["main"]
