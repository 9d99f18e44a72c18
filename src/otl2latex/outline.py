"""Build a node forest from a tab-indented outline."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from otl2latex.schemas import Node


def line_depth(line: str) -> int:
    """Count the leading tab characters of ``line``."""
    return len(line) - len(line.lstrip("\t"))


def parse_outline(lines: Iterable[str], *, source_name: str = "<string>") -> list[Node]:
    """Reconstruct the outline hierarchy from tab depth.

    Blank lines are skipped and do not affect depth tracking. When depth
    grows by more than one level, placeholder nodes (``value=None``) are
    inserted so every intermediate depth has a parent.

    Args:
        lines: Raw outline lines, with or without line endings.
        source_name: File label used in each node's ``source``.

    Returns:
        The root-level nodes, in document order.
    """
    root = Node()
    # path[d] is the node receiving children at depth d
    path = [root]

    for lineno, raw in enumerate(lines, start=1):
        line = raw.rstrip()
        if not line:
            continue

        depth = line_depth(line)
        value = line.replace("\t", "")
        source = f"{source_name}:{lineno}"

        while len(path) - 1 > depth:
            path.pop()
        while len(path) - 1 < depth:
            parent = path[-1]
            if not parent.children:
                parent.children.append(Node(source=source))
            path.append(parent.children[-1])

        path[-1].children.append(Node(value=value, source=source))

    return root.children


def parse_outline_file(path: Path) -> list[Node]:
    """Parse an outline file into a node forest."""
    text = path.read_text(encoding="utf-8")
    return parse_outline(text.splitlines(), source_name=str(path))


def flatten_values(node: Node) -> list[str]:
    """Collect the values below ``node`` depth-first, skipping placeholders."""
    values: list[str] = []
    for child in node.children:
        if child.value is not None:
            values.append(child.value)
        values.extend(flatten_values(child))
    return values
