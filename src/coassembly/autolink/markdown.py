"""Markdown/MDX text to document tree, and tree to HTML.

Stability: stable
Tags: autolink, markdown, parser, renderer

The site build parses documents itself; this adapter exists so the autolink
passes can run from the CLI and from tests against real Markdown. Parsing
uses ``markdown-it-py`` (CommonMark preset plus the GFM table and
strikethrough rules), front matter is split off and decoded with PyYAML
first. A trailing ``{#id}`` on a heading becomes its anchor, the way the
site build assigns heading ids.
"""

from __future__ import annotations

import re
from html import escape
from typing import Any

import yaml
from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from coassembly.core.errors import ParseError
from coassembly.core.logging import get_logger

from .nodes import Node, NodeKind, text

logger = get_logger(__name__)

_CONTAINERS: dict[str, NodeKind] = {
    "paragraph": NodeKind.PARAGRAPH,
    "heading": NodeKind.HEADING,
    "em": NodeKind.EMPHASIS,
    "strong": NodeKind.STRONG,
    "link": NodeKind.LINK,
    "bullet_list": NodeKind.LIST,
    "ordered_list": NodeKind.LIST,
    "list_item": NodeKind.LIST_ITEM,
    "blockquote": NodeKind.BLOCKQUOTE,
    "table": NodeKind.TABLE,
    "tr": NodeKind.TABLE_ROW,
    "th": NodeKind.TABLE_CELL,
    "td": NodeKind.TABLE_CELL,
    "s": NodeKind.DELETE,
}

_HEADING_ID = re.compile(r"\s*\{#([^\s{}]+)\}\s*$")

_md = MarkdownIt("commonmark").enable(["table", "strikethrough"])


# =============================================================================
# FRONT MATTER
# =============================================================================


def split_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Separate YAML front matter from the document body.

    Returns ``({}, content)`` when the document has no front matter.

    Raises:
        ParseError: If the front matter is unterminated or not a mapping.
    """
    if not content.startswith("---"):
        return {}, content

    rest = content[3:]
    closing_idx = rest.find("\n---")
    if closing_idx == -1:
        raise ParseError("Missing closing frontmatter delimiter '---'")

    yaml_text = rest[:closing_idx]
    body = rest[closing_idx + 4:]
    if body.startswith("\n"):
        body = body[1:]

    try:
        data = yaml.safe_load(yaml_text)
    except yaml.YAMLError as exc:
        raise ParseError(f"Invalid YAML in frontmatter: {exc}", cause=exc) from exc

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise ParseError(f"Frontmatter must be a mapping, got {type(data).__name__}")
    return data, body


# =============================================================================
# PARSING
# =============================================================================


def parse_markdown(content: str) -> Node:
    """Parse a Markdown body (no front matter) into a ``ROOT`` node."""
    tree = SyntaxTreeNode(_md.parse(content))
    return Node(NodeKind.ROOT, children=_convert_children(tree))


def parse_document(content: str) -> tuple[dict[str, Any], Node]:
    """Front matter and tree of a full ``.md``/``.mdx`` document."""
    frontmatter, body = split_frontmatter(content)
    return frontmatter, parse_markdown(body)


def _convert_children(source: SyntaxTreeNode) -> list[Node]:
    converted: list[Node] = []
    for child in source.children:
        converted.extend(_convert(child))
    return _merge_text(converted)


def _convert(source: SyntaxTreeNode) -> list[Node]:
    kind = source.type
    if kind == "inline":
        return _convert_children(source)
    if kind == "text":
        return [text(source.content)]
    if kind == "softbreak":
        return [text("\n")]
    if kind == "hardbreak":
        return [Node(NodeKind.BREAK)]
    if kind == "code_inline":
        return [Node(NodeKind.INLINE_CODE, value=source.content)]
    if kind in ("fence", "code_block"):
        lang = (source.info or "").strip() or None
        return [Node(NodeKind.CODE, value=source.content, lang=lang)]
    if kind == "image":
        return [Node(
            NodeKind.IMAGE,
            url=_attr(source, "src"),
            title=_attr(source, "title"),
            alt=source.content,
        )]
    if kind == "hr":
        return [Node(NodeKind.THEMATIC_BREAK)]
    if kind in ("html_block", "html_inline"):
        return [Node(NodeKind.HTML, value=source.content)]
    if kind in ("thead", "tbody"):
        return _convert_children(source)

    node_kind = _CONTAINERS.get(kind)
    if node_kind is None:
        logger.debug("markdown_token_flattened", token_type=kind)
        return _convert_children(source)

    node = Node(node_kind, children=_convert_children(source))
    if node_kind is NodeKind.HEADING:
        node.depth = int(source.tag[1:])
        node.anchor = _take_heading_id(node)
    elif node_kind is NodeKind.LINK:
        node.url = _attr(source, "href")
        node.title = _attr(source, "title")
    elif node_kind is NodeKind.TABLE_CELL:
        style = _attr(source, "style") or ""
        if style.startswith("text-align:"):
            node.align = style.partition(":")[2]
    elif kind == "ordered_list":
        node.ordered = True
    return [node]


def _take_heading_id(heading: Node) -> str | None:
    """Strip a trailing ``{#id}`` off the heading text and return the id."""
    if not heading.children or heading.children[-1].kind is not NodeKind.TEXT:
        return None
    last = heading.children[-1]
    match = _HEADING_ID.search(last.value or "")
    if match is None:
        return None
    last.value = (last.value or "")[:match.start()]
    if not last.value:
        heading.children.pop()
    return match.group(1)


def _attr(source: SyntaxTreeNode, name: str) -> str | None:
    value = source.attrs.get(name)
    return None if value is None else str(value)


def _merge_text(nodes: list[Node]) -> list[Node]:
    merged: list[Node] = []
    for node in nodes:
        if node.kind is NodeKind.TEXT and merged and merged[-1].kind is NodeKind.TEXT:
            merged[-1].value = (merged[-1].value or "") + (node.value or "")
        else:
            merged.append(node)
    return merged


# =============================================================================
# RENDERING
# =============================================================================


def render_html(node: Node) -> str:
    """Render ``node`` and its subtree as HTML."""
    kind = node.kind
    inner = "".join(render_html(child) for child in node.children)

    if kind is NodeKind.ROOT:
        return inner
    if kind is NodeKind.TEXT:
        return escape(node.value or "", quote=False)
    if kind is NodeKind.PARAGRAPH:
        return f"<p>{inner}</p>\n"
    if kind is NodeKind.HEADING:
        anchor = f' id="{escape(node.anchor)}"' if node.anchor else ""
        return f"<h{node.depth}{anchor}>{inner}</h{node.depth}>\n"
    if kind is NodeKind.EMPHASIS:
        return f"<em>{inner}</em>"
    if kind is NodeKind.STRONG:
        return f"<strong>{inner}</strong>"
    if kind in (NodeKind.LINK, NodeKind.LINK_REFERENCE):
        attrs = f' href="{escape(node.url or "")}"'
        if node.title:
            attrs += f' title="{escape(node.title)}"'
        if node.css_class:
            attrs += f' class="{escape(node.css_class)}"'
        return f"<a{attrs}>{inner}</a>"
    if kind is NodeKind.IMAGE:
        title = f' title="{escape(node.title)}"' if node.title else ""
        return f'<img src="{escape(node.url or "")}" alt="{escape(node.alt or "")}"{title} />'
    if kind is NodeKind.CODE:
        lang = f' class="language-{escape(node.lang)}"' if node.lang else ""
        return f"<pre><code{lang}>{escape(node.value or '', quote=False)}</code></pre>\n"
    if kind is NodeKind.INLINE_CODE:
        return f"<code>{escape(node.value or '', quote=False)}</code>"
    if kind is NodeKind.LIST:
        tag = "ol" if node.ordered else "ul"
        return f"<{tag}>\n{inner}</{tag}>\n"
    if kind is NodeKind.LIST_ITEM:
        return f"<li>{inner}</li>\n"
    if kind is NodeKind.BLOCKQUOTE:
        return f"<blockquote>\n{inner}</blockquote>\n"
    if kind is NodeKind.TABLE:
        return _render_table(node)
    if kind is NodeKind.TABLE_ROW:
        return f"<tr>\n{inner}</tr>\n"
    if kind is NodeKind.TABLE_CELL:
        return _render_cell(node, "td")
    if kind is NodeKind.DELETE:
        return f"<del>{inner}</del>"
    if kind is NodeKind.BREAK:
        return "<br />\n"
    if kind is NodeKind.THEMATIC_BREAK:
        return "<hr />\n"
    if kind is NodeKind.HTML:
        return node.value or ""
    raise ValueError(f"Unhandled node kind: {kind}")


def _render_table(table: Node) -> str:
    # The first row is the header row.
    if not table.children:
        return "<table>\n</table>\n"
    header, *body = table.children
    cells = "".join(_render_cell(cell, "th") for cell in header.children)
    html = f"<table>\n<thead>\n<tr>\n{cells}</tr>\n</thead>\n"
    if body:
        html += "<tbody>\n" + "".join(render_html(row) for row in body) + "</tbody>\n"
    return html + "</table>\n"


def _render_cell(cell: Node, tag: str) -> str:
    inner = "".join(render_html(child) for child in cell.children)
    style = f' style="text-align:{escape(cell.align)}"' if cell.align else ""
    return f"<{tag}{style}>{inner}</{tag}>\n"


__all__ = ["parse_document", "parse_markdown", "render_html", "split_frontmatter"]
