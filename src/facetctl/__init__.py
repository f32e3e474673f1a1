"""facetctl: search filter value codec and hierarchical term selection."""

__version__ = "0.1.0"
