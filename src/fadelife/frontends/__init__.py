"""Frontend interfaces for the fading Game of Life."""

from .cli import CLIFadingLife

__all__ = ["CLIFadingLife"]
