"""
Field rendering helpers shared by all enumerators
"""
from typing import Iterable, Optional


def remove_url_prefix(url: Optional[str]) -> str:
    """Reduce a self-link or resource path to its trailing segment.

    Applying it twice gives the same result as applying it once.
    """
    if not url:
        return ''
    return url.rsplit('/', 1)[-1]


def remove_url_prefixes(urls: Optional[Iterable[str]]) -> list:
    return [remove_url_prefix(url) for url in urls or []]


def join_references(urls: Optional[Iterable[str]], separator: str = ',') -> str:
    """Normalize every reference independently, then join them"""
    return separator.join(remove_url_prefixes(urls))


def format_bool(value) -> str:
    return 'true' if value else 'false'


def format_int(value) -> str:
    return str(int(value or 0))
