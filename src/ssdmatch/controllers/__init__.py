"""Controllers subpackage.

- search: SearchController orchestrating codec, luma, search and visualization
"""
from .search import SearchController, SearchOutcome

__all__ = ["SearchController", "SearchOutcome"]
