"""Indexing of poker hands up to suit isomorphism, with a self-check command."""

__version__ = "0.1.0"
__all__ = ["check", "deck", "indexer", "tables"]