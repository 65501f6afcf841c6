"""Manpager - an interactive terminal manual pager."""

from .catalog import Catalog
from .formatter import PageFormatter, wrap_text
from .page import Page, Section
from .pager import ManualPager
from .search import SearchEngine, find_matches
from .viewport import Viewport

__all__ = [
    'Catalog',
    'ManualPager',
    'Page',
    'PageFormatter',
    'SearchEngine',
    'Section',
    'Viewport',
    'find_matches',
    'wrap_text',
]
