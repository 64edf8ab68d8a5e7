"""Shared rich console for todotree output."""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Console used by every formatter, so one setting covers all output."""
    return Console(highlight=highlight)


def set_color(enabled: bool) -> None:
    """Turn colour on or off for the shared console."""
    get_console().no_color = not enabled
