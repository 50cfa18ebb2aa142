"""Interactive GitHub release drafting from the terminal."""

__version__ = "0.3.0"
