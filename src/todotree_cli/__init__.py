"""todotree - weighted, nested task management from the terminal."""

__version__ = "0.3.0"
