"""Document tree model consumed by the autolink passes.

Stability: stable
Tags: autolink, tree, markdown, model

A small tagged-variant tree in the shape of mdast. Every node has a
``NodeKind``; the passes only look at the kind and at the ``value`` of text
nodes. ``NodeKind`` is split into two closed sets: ``EXCLUDED_KINDS`` (never
scanned, nor anything beneath them) and ``SCANNABLE_KINDS``. Together they
cover the whole enumeration, so adding a kind forces a decision.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum


class NodeKind(str, Enum):
    """Node types of the document tree."""

    ROOT = "root"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    TEXT = "text"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    LINK = "link"
    LINK_REFERENCE = "linkReference"
    IMAGE = "image"
    CODE = "code"
    INLINE_CODE = "inlineCode"
    LIST = "list"
    LIST_ITEM = "listItem"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_CELL = "tableCell"
    DELETE = "delete"
    BREAK = "break"
    THEMATIC_BREAK = "thematicBreak"
    HTML = "html"


# Subtrees the passes never touch.
EXCLUDED_KINDS: frozenset[NodeKind] = frozenset({
    NodeKind.HEADING,
    NodeKind.LINK,
    NodeKind.LINK_REFERENCE,
    NodeKind.IMAGE,
    NodeKind.CODE,
    NodeKind.INLINE_CODE,
})

SCANNABLE_KINDS: frozenset[NodeKind] = frozenset(NodeKind) - EXCLUDED_KINDS


@dataclass
class Node:
    """One node of the document tree.

    Attributes:
        kind: Node type
        children: Child nodes (containers only)
        value: Literal content (text, code, inline code, html)
        url: Target of links and images
        title: Optional link/image title
        alt: Image alternative text
        depth: Heading level (1-6)
        anchor: Explicit heading id (`{#mem-01}` suffix in the source)
        align: Column alignment of a table cell (left, center, right)
        ordered: Whether a list is ordered
        lang: Info string of a fenced code block
        css_class: Display class rendered on links created by the passes
    """

    kind: NodeKind
    children: list[Node] = field(default_factory=list)
    value: str | None = None
    url: str | None = None
    title: str | None = None
    alt: str | None = None
    depth: int | None = None
    anchor: str | None = None
    align: str | None = None
    ordered: bool = False
    lang: str | None = None
    css_class: str | None = None

    def walk(self) -> Iterator[Node]:
        """This node and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def plain_text(self) -> str:
        """Concatenated literal content of the subtree."""
        if self.kind in (NodeKind.TEXT, NodeKind.INLINE_CODE, NodeKind.CODE):
            return self.value or ""
        if self.kind is NodeKind.BREAK:
            return "\n"
        return "".join(child.plain_text() for child in self.children)


def text(value: str) -> Node:
    return Node(NodeKind.TEXT, value=value)


def link(url: str, label: str, *, css_class: str | None = None, title: str | None = None) -> Node:
    """A link node wrapping a single text node."""
    return Node(NodeKind.LINK, children=[text(label)], url=url, title=title, css_class=css_class)


def root(*children: Node) -> Node:
    return Node(NodeKind.ROOT, children=list(children))


def paragraph(*children: Node | str) -> Node:
    """Paragraph node; bare strings become text nodes."""
    return Node(
        NodeKind.PARAGRAPH,
        children=[text(child) if isinstance(child, str) else child for child in children],
    )


def heading(depth: int, *children: Node | str) -> Node:
    return Node(
        NodeKind.HEADING,
        depth=depth,
        children=[text(child) if isinstance(child, str) else child for child in children],
    )


def find_links(tree: Node, css_class: str | None = None) -> list[Node]:
    """All link nodes in ``tree``, optionally filtered by display class."""
    return [
        node for node in tree.walk()
        if node.kind is NodeKind.LINK and (css_class is None or node.css_class == css_class)
    ]


__all__ = [
    "EXCLUDED_KINDS",
    "Node",
    "NodeKind",
    "SCANNABLE_KINDS",
    "find_links",
    "heading",
    "link",
    "paragraph",
    "root",
    "text",
]
