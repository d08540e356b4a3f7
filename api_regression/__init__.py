"""API response regression toolkit: fetch responses per version and diff them."""

__version__ = "0.1.0"
