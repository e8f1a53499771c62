"""Decide whether a search is case-sensitive."""

from notegrep.config import GrepConfig


def is_case_sensitive(config: GrepConfig, pattern: str) -> bool:
    """Smart case: any uppercase character in the pattern makes the search case-sensitive.

    With smart case disabled every search is case-sensitive.
    """
    if not config.smart_case:
        return True
    return pattern.lower() != pattern
