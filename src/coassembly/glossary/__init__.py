"""
Glossary term dictionary.

Loads ``src/data/glossary.json`` once into an immutable ``TermIndex`` that
the autolink passes and the translation request builder share.
"""

from .terms import MIN_TERM_LENGTH, TermEntry, TermIndex

__all__ = ["MIN_TERM_LENGTH", "TermEntry", "TermIndex"]
