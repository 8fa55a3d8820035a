"""Massif blob layout, paths, tags, trie entries and MMR index arithmetic."""

__version__ = "0.1.0"