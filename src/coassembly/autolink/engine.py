"""
Generic find-and-replace pass over a document tree.

Manifesto:
    Both autolinkers do the same thing: find regex matches in prose and
    turn some of them into links. The engine owns the tree walk, the
    exclusion rules and the text splitting; a linker only supplies rules.

    - **Document order:** Each rule visits text nodes in reading order,
      matches left to right
    - **Exclusion by kind:** Nothing under a heading, link, image or code
      node is scanned, so linked text is never linked twice
    - **Explicit per-document state:** Replacers receive a ``ScanState``
      created for one call instead of closing over mutable sets

Architecture:
    ::

        find_and_replace(tree, [Rule(p1, r1), Rule(p2, r2)])
            │
            ├── rule 1: walk tree ── text node ── p1.finditer ── r1(match, state)
            │                                                      ├─ None -> keep text
            │                                                      ├─ str  -> new text
            │                                                      └─ Node -> splice in
            └── rule 2: walk tree (nodes inserted by rule 1 are links -> skipped)

Examples:
    >>> tree = root(paragraph("see MEM-01"))
    >>> rule = Rule(re.compile(r"MEM-\\d+"), lambda m, s: link("/m", m.group(0)))
    >>> find_and_replace(tree, [rule])
    1

Tags:
    autolink, find-and-replace, tree-walk, remark
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from .nodes import EXCLUDED_KINDS, Node, NodeKind, text

Replacement = Node | str | None


@dataclass
class ScanState:
    """Mutable state scoped to one ``find_and_replace`` call.

    Attributes:
        linked: Keys (term ids) already turned into links in this document
        replacements: Number of replacements made so far
        metadata: Free-form values replacers collect while scanning
    """

    linked: set[str] = field(default_factory=set)
    replacements: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)


Replacer = Callable[[re.Match[str], ScanState], Replacement]


@dataclass(frozen=True)
class Rule:
    """A pattern and the function deciding what each match becomes.

    The replacer returns ``None`` to decline a match, a string to replace the
    matched text, or a node (usually a link) to splice in its place.
    """

    pattern: re.Pattern[str]
    replace: Replacer


def find_and_replace(
    tree: Node,
    rules: Iterable[Rule],
    *,
    state: ScanState | None = None,
    exclude: frozenset[NodeKind] = EXCLUDED_KINDS,
) -> int:
    """Apply ``rules`` in order to every scannable text node of ``tree``.

    Mutates ``tree`` in place.

    Returns:
        Number of replacements made by this call.
    """
    state = state if state is not None else ScanState()
    before = state.replacements
    for rule in rules:
        _apply_rule(tree, rule, state, exclude)
    return state.replacements - before


def _apply_rule(node: Node, rule: Rule, state: ScanState, exclude: frozenset[NodeKind]) -> None:
    if node.kind in exclude:
        return
    index = 0
    while index < len(node.children):
        child = node.children[index]
        if child.kind is NodeKind.TEXT:
            pieces = _split_text(child, rule, state)
            node.children[index:index + 1] = pieces
            index += len(pieces)
        else:
            _apply_rule(child, rule, state, exclude)
            index += 1


def _split_text(node: Node, rule: Rule, state: ScanState) -> list[Node]:
    value = node.value or ""
    pieces: list[Node] = []
    cursor = 0
    for match in rule.pattern.finditer(value):
        start, end = match.span()
        if start == end:
            continue
        replacement = rule.replace(match, state)
        if replacement is None:
            continue
        if start > cursor:
            pieces.append(text(value[cursor:start]))
        pieces.append(text(replacement) if isinstance(replacement, str) else replacement)
        state.replacements += 1
        cursor = end

    if not pieces:
        return [node]
    if cursor < len(value):
        pieces.append(text(value[cursor:]))
    return pieces


__all__ = ["Replacement", "Replacer", "Rule", "ScanState", "find_and_replace"]
