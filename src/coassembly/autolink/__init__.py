"""
Autolink passes for the bylaws documents.

Architecture::

    nodes.py      Tagged-variant document tree + exclusion set
    engine.py     find_and_replace(): rules over text nodes, ScanState
    glossary.py   GlossaryLinker: first occurrence of each term per document
    articles.py   ArticleLinker: every article code (MEM-01, POOL-03A)
    markdown.py   markdown-it-py adapter: text -> tree -> HTML
    pipeline.py   AutolinkPipeline: both passes for one document
"""

from .articles import ArticleCode, ArticleLinker, SectionPrefix
from .engine import Rule, ScanState, find_and_replace
from .glossary import GlossaryLinker
from .nodes import EXCLUDED_KINDS, SCANNABLE_KINDS, Node, NodeKind
from .pipeline import AutolinkPipeline, AutolinkResult

__all__ = [
    "ArticleCode",
    "ArticleLinker",
    "AutolinkPipeline",
    "AutolinkResult",
    "EXCLUDED_KINDS",
    "GlossaryLinker",
    "Node",
    "NodeKind",
    "Rule",
    "SCANNABLE_KINDS",
    "ScanState",
    "SectionPrefix",
    "find_and_replace",
]
